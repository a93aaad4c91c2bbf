"""Study assistant relay to an OpenAI-compatible chat completion gateway."""
import logging
from functools import lru_cache

import openai

import config
from errors import ServiceUnavailableError, UpstreamServiceError
from models import ChatTurn, PaperContext

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I'm sorry, I couldn't generate a response."

SYSTEM_PROMPT = """You are an intelligent study assistant for QPaperHub, an educational platform for question papers. Your role is to:

1. Help students understand difficult concepts and topics
2. Explain solutions and approaches to problems
3. Provide study tips and exam preparation strategies
4. Answer questions about academic subjects
5. Clarify doubts about question paper topics

Be friendly, encouraging, and educational. Give clear, concise explanations. When explaining concepts, use examples where helpful. If asked about something outside academics, politely redirect to educational topics."""


def build_system_prompt(paper: PaperContext | None = None) -> str:
    """Fixed preamble, plus a paragraph about the paper being viewed if any."""
    if paper is None:
        return SYSTEM_PROMPT

    lines = [
        "The student is currently viewing a question paper with the following details:",
        f"- Title: {paper.title}",
        f"- Subject: {paper.subject}",
        f"- Board: {paper.board}",
        f"- Class: {paper.class_level}",
        f"- Year: {paper.year}",
        f"- Exam Type: {paper.exam_type}",
    ]
    if paper.description:
        lines.append(f"- Description: {paper.description}")

    return (
        f"{SYSTEM_PROMPT}\n\n"
        + "\n".join(lines)
        + "\n\nWhen answering questions, you can reference this paper's context. "
        "If the student asks about topics from this paper, provide relevant explanations and study tips."
    )


def build_messages(
    message: str,
    paper: PaperContext | None = None,
    history: list[ChatTurn] | None = None,
) -> list[dict[str, str]]:
    """System prompt, then the last few turns, then the new message."""
    recent = (history or [])[-config.AI_CHAT_MAX_HISTORY:]
    return [
        {"role": "system", "content": build_system_prompt(paper)},
        *({"role": turn.role, "content": turn.content} for turn in recent),
        {"role": "user", "content": message},
    ]


class ChatRelay:
    """Sends one chat exchange to the gateway and returns the reply text.

    Holds no conversation state; callers resend history every time.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = config.AI_GATEWAY_URL,
        model: str = config.AI_CHAT_MODEL,
        http_client=None,
    ):
        if not api_key:
            raise ServiceUnavailableError("AI service not configured")
        self.model = model
        # No client-side retries: a failed call is reported straight back
        self.client = openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            http_client=http_client,
        )

    def reply(
        self,
        message: str,
        paper: PaperContext | None = None,
        history: list[ChatTurn] | None = None,
    ) -> str:
        """
        Get the assistant's answer to `message`.

        Raises:
            UpstreamServiceError: if the gateway is unreachable or returns an error status
        """
        messages = build_messages(message, paper, history)
        logger.info(f"Relaying chat message ({len(messages) - 2} history turns) to {self.model}")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=config.AI_CHAT_MAX_TOKENS,
                temperature=config.AI_CHAT_TEMPERATURE,
            )
        except openai.APIStatusError as e:
            logger.error(f"AI Gateway error ({e.status_code}): {e.response.text}")
            raise UpstreamServiceError("Failed to get AI response", status_code=e.status_code) from e
        except openai.APIError as e:
            logger.error(f"AI Gateway request failed: {e}")
            raise UpstreamServiceError("Failed to get AI response") from e

        content = response.choices[0].message.content if response.choices else None
        return content or FALLBACK_REPLY


@lru_cache()
def _relay_for_key(api_key: str) -> ChatRelay:
    return ChatRelay(api_key=api_key)


def get_chat_relay() -> ChatRelay:
    """One relay (and connection pool) per configured key. A missing key raises and is not cached."""
    return _relay_for_key(config.AI_GATEWAY_API_KEY)
