"""Tests for the Claude collaborator: prompt shape and failure mapping."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import anthropic
import httpx
import pytest

from hacksniff.detectors.llm import LLMAnalyzer, LLMResponse, build_prompt
from hacksniff.models import CommitSignals
from tests.conftest import make_commit

SIGNALS = CommitSignals(total_commits=3, verified_commits=1, verification_ratio=33, rapid_commit_count=2)


def _reply(*texts):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=t) for t in texts])


@pytest.fixture
def client():
    return MagicMock()


class TestLLMResponse:

    def test_success(self):
        assert LLMResponse.success('{"a": 1}').ok

    def test_failure(self):
        response = LLMResponse.failure("nope")
        assert not response.ok
        assert response.error == "nope"

    def test_blank_text_not_ok(self):
        assert not LLMResponse.success("  \n").ok


class TestBuildPrompt:

    def test_includes_signals_and_messages(self, repo_after_cutoff):
        commits = [make_commit(i, message=f"msg {i}") for i in range(20)]
        prompt = build_prompt(repo_after_cutoff, commits, SIGNALS, message_count=15)
        assert "Total commits: 3" in prompt
        assert "GitHub verified commits: 1 (33%)" in prompt
        assert "Rapid commits: 2" in prompt
        assert "Language: TypeScript" in prompt
        assert "- msg 0\n- msg 1" in prompt
        assert "msg 14" in prompt
        assert "msg 15" not in prompt
        assert '"keyFindings"' in prompt

    def test_unknown_language(self, repo_after_cutoff):
        from dataclasses import replace

        prompt = build_prompt(replace(repo_after_cutoff, language=None), [], SIGNALS)
        assert "Language: Unknown" in prompt


class TestComplete:

    def test_disabled_without_key(self):
        analyzer = LLMAnalyzer(api_key=None)
        assert not analyzer.enabled
        response = analyzer.complete("hi")
        assert not response.ok
        assert response.error == "LLM analysis disabled"

    def test_returns_text(self, client):
        client.messages.create.return_value = _reply('{"summary": ', '"x"}')
        response = LLMAnalyzer(client=client, model="m").complete("prompt")
        assert response.ok
        assert response.text == '{"summary": "x"}'
        kwargs = client.messages.create.call_args[1]
        assert kwargs["model"] == "m"
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 1024
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    def test_empty_reply_is_failure(self, client):
        client.messages.create.return_value = _reply("")
        response = LLMAnalyzer(client=client).complete("prompt")
        assert not response.ok
        assert response.error == "No response from Claude"

    def test_status_error_is_failure(self, client):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        error = anthropic.APIStatusError(
            "overloaded", response=httpx.Response(529, request=request), body=None
        )
        client.messages.create.side_effect = error
        response = LLMAnalyzer(client=client).complete("prompt")
        assert not response.ok
        assert "529" in response.error

    def test_timeout_is_failure(self, client):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client.messages.create.side_effect = anthropic.APITimeoutError(request=request)
        response = LLMAnalyzer(client=client).complete("prompt")
        assert not response.ok

    def test_analyze_builds_prompt(self, client, repo_after_cutoff):
        client.messages.create.return_value = _reply("{}")
        LLMAnalyzer(client=client).analyze(repo_after_cutoff, [make_commit(message="first")], SIGNALS)
        prompt = client.messages.create.call_args[1]["messages"][0]["content"]
        assert "- first" in prompt
