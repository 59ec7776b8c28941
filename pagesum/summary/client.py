"""Chat-completion client for the summarization step.

Calls an OpenAI-compatible ``/chat/completions`` endpoint with ``httpx``.
The bearer token is read from ``OPENAI_API_KEY`` (or the older
``OPENAI_API_TOKEN``) on every call, so a missing key fails only the request
that needs it.

``chat`` raises :class:`~pagesum.errors.SummarizationError` with the precise
cause; ``custom_gpt`` and ``summarize_text`` collapse every cause into
``None`` after logging it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from pagesum.config import settings
from pagesum.errors import SummarizationError
from pagesum.summary.prompts import SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)

_API_KEY_VARS = ("OPENAI_API_KEY", "OPENAI_API_TOKEN")


# ---------------------------------------------------------------------------
# Response schema
# ---------------------------------------------------------------------------

class ChatMessage(BaseModel):
    role: str
    content: str


class ChatChoice(BaseModel):
    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


class ChatResponse(BaseModel):
    id: str = ""
    choices: List[ChatChoice]


@dataclass(frozen=True)
class Completion:
    """The first choice of a chat completion."""

    text: str
    finish_reason: Optional[str]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _api_key() -> str:
    for name in _API_KEY_VARS:
        value = os.environ.get(name, "")
        if value:
            return value
    raise SummarizationError(
        "OPENAI_API_KEY environment variable is not set."
    )


def _completion_params(messages: List[dict], max_tokens: int) -> dict:
    return {
        "model": settings.summary_model,
        "messages": messages,
        "temperature": 0.7,
        "top_p": 1,
        "n": 1,
        "stream": False,
        "max_tokens": max_tokens,
        "presence_penalty": 0,
        "frequency_penalty": 0,
        "stop": "\n",
    }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def chat(messages: List[dict], max_tokens: int) -> Completion:
    """Send *messages* to the chat-completion endpoint and return choice 0.

    Args:
        messages: Ordered ``{"role": ..., "content": ...}`` records.
        max_tokens: Output token cap for the completion.

    Raises:
        SummarizationError: If the API key is missing, the request cannot be
            built, fails or returns a non-2xx status, the body does not parse, or there are
            no choices.
    """
    api_key = _api_key()

    try:
        with httpx.Client(timeout=settings.llm_timeout) as client:
            response = client.post(
                f"{settings.openai_base_url}/chat/completions",
                headers={"Authorization": f"Bearer {api_key}"},
                json=_completion_params(messages, max_tokens),
            )
            response.raise_for_status()
            body = response.content
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        # InvalidURL (bad base URL) and UnicodeEncodeError (non-ASCII key in
        # the header) are raised while building the request.
        raise SummarizationError(f"chat request failed: {exc}") from exc

    try:
        parsed = ChatResponse.model_validate_json(body)
    except ValidationError as exc:
        raise SummarizationError(f"unexpected chat response: {exc}") from exc

    if not parsed.choices:
        raise SummarizationError("chat response contained no choices")

    first = parsed.choices[0]
    return Completion(text=first.message.content, finish_reason=first.finish_reason)


def custom_gpt(system_prompt: str, user_prompt: str, max_tokens: int) -> Optional[str]:
    """Run a system + user prompt pair and return the reply, or ``None``."""
    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
    try:
        completion = chat(messages, max_tokens)
    except SummarizationError as exc:
        logger.warning("Chat completion failed: %s", exc)
        return None

    logger.debug("Chat completion finished (reason=%s)", completion.finish_reason)
    return completion.text


def summarize_text(bounded_text: str) -> Optional[str]:
    """Return a news-style summary of *bounded_text*, or ``None`` on failure."""
    return custom_gpt(
        SYSTEM_PROMPT,
        build_user_prompt(bounded_text),
        settings.summary_max_tokens,
    )
