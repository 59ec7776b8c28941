"""Tests for the summary stages — token bounding, prompts and the chat client.

The chat endpoint is mocked with ``respx`` at the httpx transport layer, so
no request ever leaves the process.  The credential is controlled with
``monkeypatch`` because the client reads it from the environment per call.
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from pagesum.config import settings
from pagesum.errors import SummarizationError
from pagesum.summary.client import Completion, chat, custom_gpt, summarize_text
from pagesum.summary.preprocess import bound_text, count_tokens
from pagesum.summary.prompts import SYSTEM_PROMPT, build_user_prompt

_BASE_URL = "https://llm.test/v1"
_ENDPOINT = f"{_BASE_URL}/chat/completions"


def _completion_body(content: str = "A short summary.", finish_reason: str = "stop") -> dict:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
        ],
    }


@pytest.fixture()
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("OPENAI_API_TOKEN", raising=False)
    monkeypatch.setattr(settings, "openai_base_url", _BASE_URL)
    return "sk-test"


@pytest.fixture()
def no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_TOKEN", raising=False)
    monkeypatch.setattr(settings, "openai_base_url", _BASE_URL)


# ---------------------------------------------------------------------------
# Preprocessor
# ---------------------------------------------------------------------------

class TestBoundText:
    def test_empty_text_returns_empty(self) -> None:
        assert bound_text("") == ""

    def test_whitespace_only_returns_empty(self) -> None:
        assert bound_text(" \t\n\r\x0c ") == ""

    def test_collapses_whitespace_runs(self) -> None:
        assert bound_text("alpha\n\n beta\tgamma  ") == "alpha beta gamma"

    def test_keeps_first_n_tokens_in_order(self) -> None:
        words = [f"w{i}" for i in range(10)]
        assert bound_text(" ".join(words), 4) == "w0 w1 w2 w3"

    def test_token_count_is_min_of_k_and_n(self) -> None:
        text = " ".join(f"t{i}" for i in range(25))
        for n in (0, 1, 24, 25, 26, 100):
            bounded = bound_text(text, n)
            assert count_tokens(bounded) == min(25, n)
            assert bounded.split() == text.split()[: min(25, n)]

    def test_idempotent(self) -> None:
        text = "Company X reported record profits today amid market turmoil. " * 50
        once = bound_text(text, 30)
        assert bound_text(once, 30) == once

    def test_default_budget_is_3000(self) -> None:
        text = "word " * 3500
        assert count_tokens(bound_text(text)) == 3000

    def test_non_ascii_space_stays_inside_token(self) -> None:
        assert count_tokens("a\u00a0b c") == 2


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

class TestPrompts:
    def test_system_prompt(self) -> None:
        assert SYSTEM_PROMPT == "You're a news reporter AI."

    def test_user_prompt_embeds_body(self) -> None:
        prompt = build_user_prompt("BODY TEXT")
        assert prompt.startswith("Given the news body text: BODY TEXT, ")
        assert "key arguments" in prompt
        assert "succinct summary" in prompt


# ---------------------------------------------------------------------------
# Chat client
# ---------------------------------------------------------------------------

class TestChat:
    def test_returns_first_choice_and_finish_reason(self, api_key: str) -> None:
        with respx.mock as mock:
            mock.post(_ENDPOINT).mock(
                return_value=httpx.Response(200, json=_completion_body("Hello.", "length"))
            )
            result = chat([{"role": "user", "content": "hi"}], 16)

        assert result == Completion(text="Hello.", finish_reason="length")

    def test_request_payload_and_auth(self, api_key: str) -> None:
        messages = [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "usr"},
        ]
        with respx.mock as mock:
            route = mock.post(_ENDPOINT).mock(
                return_value=httpx.Response(200, json=_completion_body())
            )
            chat(messages, 512)
            request = route.calls.last.request

        assert request.headers["Authorization"] == "Bearer sk-test"
        payload = json.loads(request.content)
        assert payload == {
            "model": settings.summary_model,
            "messages": messages,
            "temperature": 0.7,
            "top_p": 1,
            "n": 1,
            "stream": False,
            "max_tokens": 512,
            "presence_penalty": 0,
            "frequency_penalty": 0,
            "stop": "\n",
        }

    def test_legacy_token_variable_accepted(self, no_api_key: None, monkeypatch) -> None:
        monkeypatch.setenv("OPENAI_API_TOKEN", "sk-legacy")
        with respx.mock as mock:
            route = mock.post(_ENDPOINT).mock(
                return_value=httpx.Response(200, json=_completion_body())
            )
            chat([{"role": "user", "content": "hi"}], 8)
            request = route.calls.last.request

        assert request.headers["Authorization"] == "Bearer sk-legacy"

    def test_missing_key_fails_without_request(self, no_api_key: None) -> None:
        with respx.mock(assert_all_called=False) as mock:
            route = mock.post(_ENDPOINT)
            with pytest.raises(SummarizationError, match="OPENAI_API_KEY"):
                chat([{"role": "user", "content": "hi"}], 8)
            assert not route.called

    def test_non_ascii_key_is_summarization_error(self, no_api_key: None, monkeypatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-’abc")
        with respx.mock(assert_all_called=False) as mock:
            mock.post(_ENDPOINT).mock(
                return_value=httpx.Response(200, json=_completion_body())
            )
            with pytest.raises(SummarizationError):
                chat([{"role": "user", "content": "hi"}], 8)

    def test_malformed_base_url_is_summarization_error(self, api_key: str, monkeypatch) -> None:
        monkeypatch.setattr(settings, "openai_base_url", "http://[not-a-host")
        with pytest.raises(SummarizationError):
            chat([{"role": "user", "content": "hi"}], 8)

    def test_transport_error(self, api_key: str) -> None:
        with respx.mock as mock:
            mock.post(_ENDPOINT).mock(side_effect=httpx.ConnectError("refused"))
            with pytest.raises(SummarizationError):
                chat([{"role": "user", "content": "hi"}], 8)

    def test_error_status(self, api_key: str) -> None:
        with respx.mock as mock:
            mock.post(_ENDPOINT).mock(
                return_value=httpx.Response(401, json={"error": {"message": "bad key"}})
            )
            with pytest.raises(SummarizationError):
                chat([{"role": "user", "content": "hi"}], 8)

    def test_unparseable_body(self, api_key: str) -> None:
        with respx.mock as mock:
            mock.post(_ENDPOINT).mock(return_value=httpx.Response(200, text="<html>oops"))
            with pytest.raises(SummarizationError):
                chat([{"role": "user", "content": "hi"}], 8)

    def test_empty_choices(self, api_key: str) -> None:
        with respx.mock as mock:
            mock.post(_ENDPOINT).mock(
                return_value=httpx.Response(200, json={"id": "x", "choices": []})
            )
            with pytest.raises(SummarizationError, match="no choices"):
                chat([{"role": "user", "content": "hi"}], 8)


class TestCustomGpt:
    def test_returns_content(self, api_key: str) -> None:
        with respx.mock as mock:
            mock.post(_ENDPOINT).mock(
                return_value=httpx.Response(200, json=_completion_body("Done."))
            )
            assert custom_gpt("sys", "usr", 64) == "Done."

    def test_system_message_first(self, api_key: str) -> None:
        with respx.mock as mock:
            route = mock.post(_ENDPOINT).mock(
                return_value=httpx.Response(200, json=_completion_body())
            )
            custom_gpt("sys", "usr", 64)
            messages = json.loads(route.calls.last.request.content)["messages"]

        assert [m["role"] for m in messages] == ["system", "user"]

    def test_failure_collapses_to_none(self, no_api_key: None) -> None:
        assert custom_gpt("sys", "usr", 64) is None

    def test_malformed_request_collapses_to_none(self, no_api_key: None, monkeypatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-’abc")
        assert custom_gpt("sys", "usr", 64) is None


class TestSummarizeText:
    def test_uses_fixed_prompts_and_summary_budget(self, api_key: str) -> None:
        with respx.mock as mock:
            route = mock.post(_ENDPOINT).mock(
                return_value=httpx.Response(200, json=_completion_body("Profits rose."))
            )
            summary = summarize_text("Company X reported record profits.")
            payload = json.loads(route.calls.last.request.content)

        assert summary == "Profits rose."
        assert payload["max_tokens"] == settings.summary_max_tokens
        assert payload["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert payload["messages"][1] == {
            "role": "user",
            "content": build_user_prompt("Company X reported record profits."),
        }
