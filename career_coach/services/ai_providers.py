"""
Dual-provider text generation.

Every feature sends its request to the primary provider (Gemini) first. If
that call raises for any reason, the same request is reshaped for the
secondary provider (Groq, OpenAI-compatible chat completions) and tried once.
There is no retry loop: one attempt per provider per request.

Usage:
    generator = get_generator()
    text = await generator.generate(GenerationRequest(system_instruction, prompt))
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Tuple

import google.generativeai as genai
from openai import AsyncOpenAI

from career_coach.config import get_settings
from career_coach.services.errors import ProviderUnavailableError
from career_coach.utils.logger import logger
from career_coach.utils.metrics import inc, track_duration


# ---------------------------------------------------------------------------
# Request model
# ---------------------------------------------------------------------------

class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    role: Role
    content: str


@dataclass(frozen=True)
class GenerationRequest:
    system_instruction: str
    user_prompt: str
    history: Tuple[ConversationTurn, ...] = ()


# Chat endpoints on the secondary provider reject a conversation whose first
# non-system message comes from the assistant.
SYNTHETIC_OPENING_TURN = "Start the interview."


class ProviderNotConfiguredError(RuntimeError):
    def __init__(self, provider: str):
        super().__init__(f"{provider} API key is not configured")


class TextProvider(Protocol):
    name: str

    async def complete(self, request: GenerationRequest) -> str:
        ...


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------

class GeminiProvider:
    """Primary provider: Google Gemini."""

    name = "gemini"

    def __init__(self, api_key: str, model: str):
        self.model_name = model
        self.configured = bool(api_key)
        if self.configured:
            genai.configure(api_key=api_key)

    async def complete(self, request: GenerationRequest) -> str:
        if not self.configured:
            raise ProviderNotConfiguredError(self.name)

        model = genai.GenerativeModel(
            self.model_name,
            system_instruction=request.system_instruction or None,
        )

        async with track_duration(self.name):
            if request.history:
                chat = model.start_chat(history=[
                    {
                        "role": "user" if turn.role == Role.USER else "model",
                        "parts": [turn.content],
                    }
                    for turn in request.history
                ])
                response = await chat.send_message_async(request.user_prompt)
            else:
                response = await model.generate_content_async(request.user_prompt)

        return response.text or ""


class GroqProvider:
    """Secondary provider: Groq via its OpenAI-compatible endpoint."""

    name = "groq"

    def __init__(self, api_key: str, model: str, base_url: str):
        self.model = model
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url) if api_key else None

    @staticmethod
    def build_messages(request: GenerationRequest) -> List[dict]:
        messages = []
        if request.system_instruction:
            messages.append({"role": "system", "content": request.system_instruction})

        history = list(request.history)
        if history and history[0].role == Role.ASSISTANT:
            messages.append({"role": "user", "content": SYNTHETIC_OPENING_TURN})
        messages.extend({"role": turn.role.value, "content": turn.content} for turn in history)

        messages.append({"role": "user", "content": request.user_prompt})
        return messages

    async def complete(self, request: GenerationRequest) -> str:
        if self.client is None:
            raise ProviderNotConfiguredError(self.name)

        async with track_duration(self.name):
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(request),
            )

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""


# ---------------------------------------------------------------------------
# Fallback orchestration
# ---------------------------------------------------------------------------

class DualProviderGenerator:
    """Prefer the primary provider's output; survive its downtime via the secondary."""

    def __init__(self, primary: TextProvider, secondary: TextProvider):
        self.primary = primary
        self.secondary = secondary

    async def generate(self, request: GenerationRequest) -> str:
        try:
            return await self.primary.complete(request)
        except Exception as primary_error:
            inc("generation.fallback")
            logger.warning(
                f"[Generator] {self.primary.name} failed, falling back to {self.secondary.name}: {primary_error}",
                extra={"provider": self.primary.name, "error": str(primary_error)[:200]},
            )

            try:
                return await self.secondary.complete(request)
            except Exception as secondary_error:
                inc("generation.failed")
                logger.error(
                    f"[Generator] {self.secondary.name} also failed: {secondary_error}",
                    extra={"provider": self.secondary.name, "error": str(secondary_error)[:200]},
                )
                raise ProviderUnavailableError(primary_error, secondary_error) from secondary_error


# Singleton
_generator: Optional[DualProviderGenerator] = None


def get_generator() -> DualProviderGenerator:
    """Process-wide generator built from settings on first use."""
    global _generator
    if _generator is None:
        settings = get_settings()
        _generator = DualProviderGenerator(
            primary=GeminiProvider(settings.gemini_api_key, settings.gemini_model),
            secondary=GroqProvider(settings.groq_api_key, settings.groq_model, settings.groq_base_url),
        )
        logger.info(
            f"[Generator] Providers ready: {settings.gemini_model} -> {settings.groq_model}"
        )
    return _generator
