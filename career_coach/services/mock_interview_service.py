"""Mock Interview Service - one conversational turn of a recruiter-led interview"""

from typing import List, Optional

from career_coach.services.ai_providers import (
    ConversationTurn,
    DualProviderGenerator,
    GenerationRequest,
    Role,
    SYNTHETIC_OPENING_TURN,
    get_generator,
)


QUESTIONS_BEFORE_SUMMARY = 5


def system_instruction(target_role: str) -> str:
    return f"""You are an expert Technical Recruiter conducting a mock interview for a {target_role} position.

Rules:
1. Ask one question at a time.
2. Wait for the user's answer.
3. Provide brief, constructive feedback on their answer.
4. Then ask the next question.
5. Keep the tone professional but encouraging.
6. If the user asks for a hint, provide a small clue without giving away the answer.
7. After {QUESTIONS_BEFORE_SUMMARY} questions, provide a final summary of their performance."""


def build_request(messages: List[dict], target_role: str) -> GenerationRequest:
    """
    The last message is the turn to answer; everything before it is history.
    Any role other than "user" is treated as the interviewer.
    """
    if not messages:
        return GenerationRequest(system_instruction(target_role), SYNTHETIC_OPENING_TURN)

    history = tuple(
        ConversationTurn(
            role=Role.USER if m.get("role") == "user" else Role.ASSISTANT,
            content=m.get("content", ""),
        )
        for m in messages[:-1]
    )
    latest = messages[-1].get("content", "")

    return GenerationRequest(system_instruction(target_role), latest, history)


async def generate_interview_turn(
    messages: List[dict],
    target_role: str,
    generator: Optional[DualProviderGenerator] = None,
) -> dict:
    generator = generator or get_generator()
    text = await generator.generate(build_request(messages, target_role))
    return {"text": text}
