"""
Load test script for the Career Coach backend.

Simulates a realistic user flow:
  1. Health check
  2. Onboarding status
  3. Industry insights (cache hit after the first request per industry)
  4. Cover letter generation
  5. A short mock interview

Run:
    pip install -e ".[load]"
    LOAD_TEST_TOKEN=<jwt> locust -f tests/load/locustfile.py --host https://YOUR-RAILWAY-URL

Then open http://localhost:8089 to configure users/spawn rate and start.
Generation endpoints are rate limited per client; raise GENERATION_RATE_LIMIT
on the target before running large loads.
"""

import os
import random
import time
from locust import HttpUser, task, between, SequentialTaskSet


# ---------------------------------------------------------------------------
# Configuration: override with env vars for different environments
# ---------------------------------------------------------------------------
AUTH_TOKEN = os.getenv("LOAD_TEST_TOKEN", "")  # Identity provider JWT
INDUSTRIES = os.getenv("LOAD_TEST_INDUSTRIES", "Software Engineering,Data Analytics,Healthcare").split(",")


def auth_headers():
    headers = {"X-Correlation-ID": f"load-test-{time.monotonic()}"}
    if AUTH_TOKEN:
        headers["Authorization"] = f"Bearer {AUTH_TOKEN}"
    return headers


# ---------------------------------------------------------------------------
# Sequential flow: open interview -> answer -> answer
# ---------------------------------------------------------------------------
class MockInterviewFlow(SequentialTaskSet):
    """Simulate a user working through the first questions of a mock interview."""

    messages = None

    def on_start(self):
        self.messages = []

    def _turn(self, name):
        with self.client.post(
            "/api/interview",
            json={"targetRole": "Backend Engineer", "messages": self.messages},
            headers=auth_headers(),
            name=name,
            catch_response=True,
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Interview turn failed: {resp.status_code}")
                return False

            text = resp.json().get("text")
            if not text:
                resp.failure("Empty interviewer turn")
                return False

            self.messages.append({"role": "assistant", "content": text})
            return True

    @task
    def open_interview(self):
        if not self._turn("/api/interview (open)"):
            self.interrupt()

    @task
    def answer(self):
        self.messages.append({
            "role": "user",
            "content": "I would profile first, then add an index on the hot query.",
        })
        self._turn("/api/interview (answer)")

    @task
    def stop(self):
        self.interrupt()


# ---------------------------------------------------------------------------
# User class
# ---------------------------------------------------------------------------
class CareerCoachUser(HttpUser):
    """Simulates a typical user session."""

    wait_time = between(1, 3)

    @task(3)
    def health_check(self):
        """Lightweight liveness check, should always be fast."""
        self.client.get("/health", name="/health")

    @task(2)
    def onboarding_status(self):
        self.client.get(
            "/api/onboarding/status",
            headers=auth_headers(),
            name="/api/onboarding/status",
        )

    @task(3)
    def insights(self):
        """Mostly cache hits once each industry has been generated."""
        with self.client.post(
            "/api/insights",
            json={"industry": random.choice(INDUSTRIES).strip(), "skills": ["Python"], "experience": 3},
            headers=auth_headers(),
            name="/api/insights",
            catch_response=True,
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Insights failed: {resp.status_code}")
            elif not resp.json().get("nextUpdate"):
                resp.failure("Insight record has no nextUpdate")

    @task(1)
    def cover_letter(self):
        with self.client.post(
            "/api/cover-letter",
            json={
                "applicantName": "Load Tester",
                "companyName": "Test Corp",
                "jobTitle": "Senior Backend Engineer",
                "skills": "Python, PostgreSQL, AWS",
                "tone": "concise",
            },
            headers=auth_headers(),
            name="/api/cover-letter",
            catch_response=True,
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Cover letter failed: {resp.status_code}")
            elif not resp.json().get("paragraphs"):
                resp.failure("Cover letter has no paragraphs")

    @task(1)
    def metrics(self):
        """Fetch in-process metrics."""
        self.client.get("/metrics", name="/metrics")

    tasks = {MockInterviewFlow: 1}
