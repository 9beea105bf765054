# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import os
import unittest
from typing import Any, Dict, List

import httpx
from fastapi.testclient import TestClient

from fitlog.api import app
from fitlog.estimate.api import get_completion_client
from fitlog.estimate.completion import CompletionClient


def completion_reply(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


class FakeCompletionService:
    """Records outbound completion requests and answers with a canned response."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: List[Dict[str, Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        return self.response

    @property
    def last_prompt(self) -> str:
        return self.requests[-1]["messages"][1]["content"]


class GatewayTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._saved_key = os.environ.get("OPENAI_API_KEY")
        os.environ["OPENAI_API_KEY"] = "sk-test-key"
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.client.close()
        if self._saved_key is None:
            os.environ.pop("OPENAI_API_KEY", None)
        else:
            os.environ["OPENAI_API_KEY"] = self._saved_key

    def use_service(self, response: httpx.Response) -> FakeCompletionService:
        service = FakeCompletionService(response)
        transport = httpx.MockTransport(service)
        app.dependency_overrides[get_completion_client] = lambda: CompletionClient(transport=transport)
        return service


class TestHealth(GatewayTestCase):
    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")

    def test_route_reachable(self) -> None:
        resp = self.client.get("/api/calculate-calories")
        self.assertEqual(resp.json(), {"status": "ok"})


class TestEstimateSuccess(GatewayTestCase):
    def test_running_with_weight_in_pounds(self) -> None:
        service = self.use_service(completion_reply('{"calories": 250.6, "explanation": "Moderate run."}'))
        resp = self.client.post(
            "/api/calculate-calories",
            json={"workoutType": "Running", "duration": 30, "runningPace": "6", "weight": "180", "weightUnit": "lbs"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"calories": 251, "explanation": "Moderate run.", "workoutType": "Running", "duration": 30.0},
        )

        self.assertEqual(len(service.requests), 1)
        outbound = service.requests[0]
        self.assertEqual(outbound["temperature"], 0.7)
        self.assertEqual(outbound["response_format"], {"type": "json_object"})
        self.assertEqual(outbound["messages"][0]["role"], "system")
        self.assertIn("Weight: 180 lbs (81.6 kg)", service.last_prompt)
        self.assertIn("fast/moderate-high intensity", service.last_prompt)

    def test_reps_only_request(self) -> None:
        service = self.use_service(completion_reply('{"calories": 8, "explanation": "20 push-ups."}'))
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Push-Ups", "reps": 20})
        self.assertEqual(resp.status_code, 200)
        payload = resp.json()
        self.assertEqual(payload["reps"], 20)
        self.assertNotIn("duration", payload)
        self.assertIn("Repetitions: 20 reps", service.last_prompt)

    def test_non_json_reply_falls_back_to_digits(self) -> None:
        raw = "About 480 kcal for that session."
        self.use_service(completion_reply(raw))
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Cycling", "duration": "60"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["calories"], 480)
        self.assertEqual(resp.json()["explanation"], raw)

    def test_missing_explanation_gets_default(self) -> None:
        self.use_service(completion_reply('{"calories": 100}'))
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Yoga", "duration": 20})
        self.assertEqual(resp.json()["explanation"], "Calories calculated based on workout type and duration.")

    def test_workout_type_echoed_as_sent(self) -> None:
        service = self.use_service(completion_reply('{"calories": 90}'))
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "  Yoga ", "duration": 20})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["workoutType"], "  Yoga ")
        self.assertIn("Workout Type: Yoga\n", service.last_prompt)


class TestEstimateErrors(GatewayTestCase):
    def test_request_validation(self) -> None:
        service = self.use_service(completion_reply('{"calories": 1}'))
        cases = [
            ({"workoutType": "Running"}, "Workout type and duration are required"),
            ({"duration": 30}, "Workout type and duration are required"),
            ({"workoutType": "Running", "duration": 0}, "Duration must be a positive number"),
            ({"workoutType": "Running", "duration": "abc"}, "Duration must be a positive number"),
            ({"workoutType": "Push-Ups", "reps": 3.5}, "Reps must be a positive whole number"),
        ]
        for body, message in cases:
            with self.subTest(body=body):
                resp = self.client.post("/api/calculate-calories", json=body)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["error"], message)
        self.assertEqual(service.requests, [])

    def test_malformed_body(self) -> None:
        resp = self.client.post(
            "/api/calculate-calories",
            content="not json",
            headers={"content-type": "application/json"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Invalid request body")

        resp = self.client.post("/api/calculate-calories", json={"workoutType": 123, "duration": 30})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("details", resp.json())

    def test_missing_api_key(self) -> None:
        service = self.use_service(completion_reply('{"calories": 1}'))
        os.environ.pop("OPENAI_API_KEY", None)
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Running", "duration": 30})
        self.assertEqual(resp.status_code, 500)
        self.assertIn("OPENAI_API_KEY", resp.json()["error"])
        self.assertEqual(service.requests, [])

    def test_malformed_api_key(self) -> None:
        service = self.use_service(completion_reply('{"calories": 1}'))
        os.environ["OPENAI_API_KEY"] = "pk-wrong"
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Running", "duration": 30})
        self.assertEqual(resp.status_code, 500)
        self.assertIn("Invalid API key format", resp.json()["error"])
        self.assertEqual(service.requests, [])

    def test_validation_checked_before_credentials(self) -> None:
        os.environ.pop("OPENAI_API_KEY", None)
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Running"})
        self.assertEqual(resp.status_code, 400)

    def test_upstream_error_propagates_code(self) -> None:
        self.use_service(
            httpx.Response(
                429,
                json={"error": {"message": "Rate limit reached", "type": "requests", "code": "rate_limit_exceeded"}},
            )
        )
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Running", "duration": 30})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(
            resp.json(),
            {"error": "OpenAI API error: Rate limit reached", "details": "Error code: rate_limit_exceeded"},
        )

    def test_empty_reply(self) -> None:
        self.use_service(completion_reply(""))
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Running", "duration": 30})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["error"], "No response from OpenAI")

    def test_unparseable_reply(self) -> None:
        self.use_service(completion_reply("no idea"))
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Running", "duration": 30})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["error"], "Could not parse OpenAI response")

    def test_invalid_calorie_field(self) -> None:
        self.use_service(completion_reply('{"calories": "a lot", "explanation": "?"}'))
        resp = self.client.post("/api/calculate-calories", json={"workoutType": "Running", "duration": 30})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["error"], "Invalid calorie calculation from OpenAI")

    def test_out_of_range_calorie_field(self) -> None:
        for content in ('{"calories": ' + "9" * 400 + "}", '{"calories": 1e999}', '{"calories": NaN}'):
            with self.subTest(content=content[:20]):
                self.use_service(completion_reply(content))
                resp = self.client.post("/api/calculate-calories", json={"workoutType": "Running", "duration": 30})
                self.assertEqual(resp.status_code, 500)
                self.assertEqual(resp.json()["error"], "Invalid calorie calculation from OpenAI")


if __name__ == "__main__":
    unittest.main()
