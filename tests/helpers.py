"""Test doubles and token helpers shared by the test modules."""

import os
import time

import jwt

from career_coach.services.ai_providers import DualProviderGenerator, GenerationRequest


class StubProvider:
    """Provider double: replays queued responses and records every request."""

    def __init__(self, name: str, responses=None, error: Exception = None):
        self.name = name
        self.responses = list(responses or [])
        self.error = error
        self.requests = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def complete(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


class ProviderPair:
    """Mutable holder so a test can configure providers after the client is built."""

    def __init__(self):
        self.primary = StubProvider("gemini", error=RuntimeError("primary not configured for this test"))
        self.secondary = StubProvider("groq", error=RuntimeError("secondary not configured for this test"))

    def succeed_with(self, text: str) -> None:
        self.primary = StubProvider("gemini", responses=[text])

    def generator(self) -> DualProviderGenerator:
        return DualProviderGenerator(self.primary, self.secondary)


def make_token(sub: str = "user_2abc", email: str = "jane@example.com", name: str = "Jane Doe", expires_in: int = 3600) -> str:
    payload = {"sub": sub, "email": email, "name": name, "exp": int(time.time()) + expires_in}
    return jwt.encode(payload, os.environ["AUTH_JWT_SECRET"], algorithm="HS256")


def auth_headers(**claims) -> dict:
    return {"Authorization": f"Bearer {make_token(**claims)}"}
