# -*- coding: utf-8 -*-
"""
Command line front end for the workout log.

Usage:
    fitlog log <workout type> [--duration MIN | --reps N] [--pace P] [--weight W]
    fitlog history
    fitlog delete <id> [-y]
    fitlog clear [-y]
    fitlog unit [lbs|kg]
    fitlog serve
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ..config import settings
from .controller import FormController
from .models import WorkoutEntry
from .storage import WEIGHT_UNITS


def _ask(message: str) -> bool:
    answer = input(f"{message} [y/N] ").strip().lower()
    return answer in {"y", "yes"}


def _format_entry(entry: WorkoutEntry) -> str:
    if entry.reps is not None:
        quantity = f"{entry.reps} reps"
    else:
        quantity = f"{entry.duration:g} min"
    return f"{entry.id}  {entry.timestamp}  {entry.workout_type} ({quantity}): {entry.calories} kcal"


def _controller(args: argparse.Namespace) -> FormController:
    confirm = (lambda _msg: True) if getattr(args, "yes", False) else _ask
    return FormController(confirm=confirm, notify=lambda msg: print(f"Error: {msg}"))


def cmd_log(args: argparse.Namespace) -> int:
    """Estimate and record one workout."""
    controller = _controller(args)
    try:
        controller.set_field("workout_type", " ".join(args.workout_type))
        if args.unit:
            controller.set_field("weight_unit", args.unit)
        state = controller.state
        if state.is_pushup_workout:
            controller.set_field("reps", args.reps or "")
        else:
            controller.set_field("duration", args.duration or "")
        if state.is_running_workout:
            controller.set_field("running_pace", args.pace or "")
            controller.set_field("weight", args.weight or "")
        elif args.pace or args.weight:
            print("Note: pace and weight only apply to running workouts.")

        entry = controller.submit()
        if entry is None:
            if controller.state.error:
                print(f"Error: {controller.state.error}")
            return 1
        print(f"{entry.workout_type}: {entry.calories} kcal")
        if entry.explanation:
            print(entry.explanation)
        return 0
    finally:
        controller.close()


def cmd_history(args: argparse.Namespace) -> int:
    """List logged workouts, newest first."""
    controller = _controller(args)
    try:
        history = controller.state.history
        if not history:
            print("No workouts logged yet.")
            return 0
        for entry in history:
            print(_format_entry(entry))
        total = sum(e.calories for e in history)
        print("-" * 50)
        print(f"{len(history)} workouts, {total} kcal total")
        return 0
    finally:
        controller.close()


def cmd_delete(args: argparse.Namespace) -> int:
    controller = _controller(args)
    try:
        if not any(e.id == args.id for e in controller.state.history):
            print(f"Error: No workout with id {args.id}")
            return 1
        if controller.delete_entry(args.id):
            print(f"Deleted {args.id}")
        return 0
    finally:
        controller.close()


def cmd_clear(args: argparse.Namespace) -> int:
    controller = _controller(args)
    try:
        if controller.clear_history():
            print("Workout history cleared")
        return 0
    finally:
        controller.close()


def cmd_unit(args: argparse.Namespace) -> int:
    """Show or change the preferred weight unit."""
    controller = _controller(args)
    try:
        if args.unit:
            controller.set_field("weight_unit", args.unit)
        print(controller.state.weight_unit)
        return 0
    finally:
        controller.close()


def cmd_serve(args: argparse.Namespace) -> int:
    from ..api import run

    run()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Log workouts with estimated calorie burn",
    )
    parser.add_argument("--api-url", help=f"Gateway base URL (default: {settings.api_url})")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # log command
    log_parser = subparsers.add_parser("log", help="Estimate and record a workout")
    log_parser.add_argument("workout_type", nargs="+", help="e.g. Running, Push-Ups, Cycling")
    log_parser.add_argument("--duration", help="Duration in minutes")
    log_parser.add_argument("--reps", help="Repetitions (push-up workouts)")
    log_parser.add_argument("--pace", help="Running pace in min/km, e.g. 5:30")
    log_parser.add_argument("--weight", help="Body weight (running workouts)")
    log_parser.add_argument("--unit", choices=WEIGHT_UNITS, help="Weight unit (remembered)")

    subparsers.add_parser("history", help="Show workout history")

    delete_parser = subparsers.add_parser("delete", help="Delete one workout")
    delete_parser.add_argument("id", help="Workout id from 'history'")
    delete_parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")

    clear_parser = subparsers.add_parser("clear", help="Delete all workouts")
    clear_parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")

    unit_parser = subparsers.add_parser("unit", help="Show or set the weight unit")
    unit_parser.add_argument("unit", nargs="?", choices=WEIGHT_UNITS)

    subparsers.add_parser("serve", help="Run the calorie gateway")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    if args.api_url:
        settings.api_url = args.api_url

    commands = {
        "log": cmd_log,
        "history": cmd_history,
        "delete": cmd_delete,
        "clear": cmd_clear,
        "unit": cmd_unit,
        "serve": cmd_serve,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
