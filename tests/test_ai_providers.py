from types import SimpleNamespace

import pytest

from career_coach.services import ai_providers
from career_coach.services.ai_providers import (
    ConversationTurn,
    DualProviderGenerator,
    GeminiProvider,
    GenerationRequest,
    GroqProvider,
    ProviderNotConfiguredError,
    Role,
    SYNTHETIC_OPENING_TURN,
)
from career_coach.services.errors import ProviderUnavailableError
from career_coach.utils import metrics

from helpers import StubProvider


REQUEST = GenerationRequest(system_instruction="Return JSON.", user_prompt="Write it.")


class TestDualProviderGenerator:
    async def test_primary_success_never_calls_secondary(self):
        primary = StubProvider("gemini", responses=["primary text"])
        secondary = StubProvider("groq", responses=["secondary text"])

        text = await DualProviderGenerator(primary, secondary).generate(REQUEST)

        assert text == "primary text"
        assert primary.call_count == 1
        assert secondary.call_count == 0
        assert metrics.get_counter("generation.fallback") == 0

    async def test_falls_back_once_when_primary_fails(self):
        primary = StubProvider("gemini", error=RuntimeError("quota exceeded"))
        secondary = StubProvider("groq", responses=["secondary text"])

        text = await DualProviderGenerator(primary, secondary).generate(REQUEST)

        assert text == "secondary text"
        assert primary.call_count == 1
        assert secondary.call_count == 1
        assert secondary.requests[0] is REQUEST
        assert metrics.get_counter("generation.fallback") == 1

    async def test_both_failing_raises_provider_unavailable(self):
        primary_error = RuntimeError("quota exceeded")
        secondary_error = ConnectionError("network down")
        primary = StubProvider("gemini", error=primary_error)
        secondary = StubProvider("groq", error=secondary_error)

        with pytest.raises(ProviderUnavailableError) as exc_info:
            await DualProviderGenerator(primary, secondary).generate(REQUEST)

        assert exc_info.value.primary_error is primary_error
        assert exc_info.value.secondary_error is secondary_error
        assert primary.call_count == 1
        assert secondary.call_count == 1
        assert metrics.get_counter("generation.failed") == 1

    async def test_empty_primary_text_is_returned_without_fallback(self):
        primary = StubProvider("gemini", responses=[""])
        secondary = StubProvider("groq", responses=["unused"])

        assert await DualProviderGenerator(primary, secondary).generate(REQUEST) == ""
        assert secondary.call_count == 0


class TestGroqMessages:
    def test_plain_request(self):
        assert GroqProvider.build_messages(REQUEST) == [
            {"role": "system", "content": "Return JSON."},
            {"role": "user", "content": "Write it."},
        ]

    def test_history_starting_with_assistant_gets_opening_turn(self):
        request = GenerationRequest(
            system_instruction="Interview me.",
            user_prompt="I used a hash map.",
            history=(ConversationTurn(Role.ASSISTANT, "Tell me about a hard bug."),),
        )

        messages = GroqProvider.build_messages(request)

        assert messages == [
            {"role": "system", "content": "Interview me."},
            {"role": "user", "content": SYNTHETIC_OPENING_TURN},
            {"role": "assistant", "content": "Tell me about a hard bug."},
            {"role": "user", "content": "I used a hash map."},
        ]

    def test_history_starting_with_user_is_kept_as_is(self):
        request = GenerationRequest(
            system_instruction="",
            user_prompt="Next?",
            history=(
                ConversationTurn(Role.USER, "Hi"),
                ConversationTurn(Role.ASSISTANT, "Hello"),
            ),
        )

        messages = GroqProvider.build_messages(request)

        assert [m["role"] for m in messages] == ["user", "assistant", "user"]
        assert messages[0]["content"] == "Hi"


class TestProviderConfiguration:
    async def test_unconfigured_gemini_raises(self):
        with pytest.raises(ProviderNotConfiguredError):
            await GeminiProvider(api_key="", model="gemini-2.0-flash").complete(REQUEST)

    async def test_unconfigured_groq_raises(self):
        with pytest.raises(ProviderNotConfiguredError):
            await GroqProvider(api_key="", model="llama", base_url="https://example.invalid").complete(REQUEST)

    async def test_groq_returns_first_choice_content(self):
        provider = GroqProvider(api_key="", model="llama", base_url="https://example.invalid")
        captured = {}

        async def create(**kwargs):
            captured.update(kwargs)
            return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content='{"ok": true}'))])

        provider.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        assert await provider.complete(REQUEST) == '{"ok": true}'
        assert captured["model"] == "llama"
        assert captured["messages"][-1] == {"role": "user", "content": "Write it."}
        assert metrics.get_counter("groq.generate.success") == 1

    async def test_unconfigured_pair_raises_provider_unavailable(self):
        generator = DualProviderGenerator(
            GeminiProvider(api_key="", model="gemini-2.0-flash"),
            GroqProvider(api_key="", model="llama", base_url="https://example.invalid"),
        )
        with pytest.raises(ProviderUnavailableError):
            await generator.generate(REQUEST)


class FakeGeminiModel:
    """Stands in for genai.GenerativeModel; records how it was built and called."""

    instances = []

    def __init__(self, model_name, system_instruction=None):
        self.model_name = model_name
        self.system_instruction = system_instruction
        self.prompts = []
        self.chat_history = None
        FakeGeminiModel.instances.append(self)

    async def generate_content_async(self, prompt):
        self.prompts.append(prompt)
        return SimpleNamespace(text='{"from": "generate"}')

    def start_chat(self, history):
        self.chat_history = history
        model = self

        class _Chat:
            async def send_message_async(self, prompt):
                model.prompts.append(prompt)
                return SimpleNamespace(text="Next question?")

        return _Chat()


@pytest.fixture
def fake_gemini(monkeypatch):
    FakeGeminiModel.instances = []
    monkeypatch.setattr(ai_providers.genai, "configure", lambda **kwargs: None)
    monkeypatch.setattr(ai_providers.genai, "GenerativeModel", FakeGeminiModel)
    return FakeGeminiModel


class TestGeminiProvider:
    async def test_single_prompt_uses_generate_content(self, fake_gemini):
        provider = GeminiProvider(api_key="test-key", model="gemini-2.0-flash")

        text = await provider.complete(REQUEST)

        model = fake_gemini.instances[0]
        assert text == '{"from": "generate"}'
        assert model.model_name == "gemini-2.0-flash"
        assert model.system_instruction == "Return JSON."
        assert model.prompts == ["Write it."]
        assert model.chat_history is None
        assert metrics.get_counter("gemini.generate.success") == 1

    async def test_history_maps_assistant_turns_to_model_role(self, fake_gemini):
        request = GenerationRequest(
            system_instruction="Interview me.",
            user_prompt="I used a hash map.",
            history=(
                ConversationTurn(Role.ASSISTANT, "Tell me about a hard bug."),
                ConversationTurn(Role.USER, "It was a race condition."),
                ConversationTurn(Role.ASSISTANT, "How did you fix it?"),
            ),
        )

        text = await GeminiProvider(api_key="test-key", model="gemini-2.0-flash").complete(request)

        model = fake_gemini.instances[0]
        assert text == "Next question?"
        assert model.system_instruction == "Interview me."
        assert model.chat_history == [
            {"role": "model", "parts": ["Tell me about a hard bug."]},
            {"role": "user", "parts": ["It was a race condition."]},
            {"role": "model", "parts": ["How did you fix it?"]},
        ]
        assert model.prompts == ["I used a hash map."]

    async def test_empty_system_instruction_is_omitted(self, fake_gemini):
        await GeminiProvider(api_key="test-key", model="gemini-2.0-flash").complete(
            GenerationRequest(system_instruction="", user_prompt="Hi")
        )

        assert fake_gemini.instances[0].system_instruction is None

    async def test_provider_error_is_counted_and_raised(self, fake_gemini, monkeypatch):
        async def boom(self, prompt):
            raise RuntimeError("429 quota exceeded")

        monkeypatch.setattr(FakeGeminiModel, "generate_content_async", boom)

        with pytest.raises(RuntimeError):
            await GeminiProvider(api_key="test-key", model="gemini-2.0-flash").complete(REQUEST)
        assert metrics.get_counter("gemini.generate.error") == 1
