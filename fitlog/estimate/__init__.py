# -*- coding: utf-8 -*-
"""Calorie estimation gateway (validation, prompt, completion call, reply parsing)."""
