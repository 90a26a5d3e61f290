"""Tests for the single-attempt OpenAI-compatible client."""

import json

import pytest

from video_coach.ai import openai_client as openai_client_module
from video_coach.ai.openai_client import (
    OpenAIClient,
    extract_content,
    extract_refusal,
    strip_code_fence,
)


class _FakeCompletions:
    def __init__(self, owner):
        self._owner = owner

    def create(self, messages, model: str, **kwargs):
        self._owner.calls.append({"messages": messages, "model": model, **kwargs})
        if self._owner.api_key == "bad-key":
            raise RuntimeError("provider failed")
        message = {"role": "assistant", "content": self._owner.content, "refusal": self._owner.refusal}
        return {
            "choices": [{"message": message}],
            "model": model,
        }


class _FakeChat:
    def __init__(self, owner):
        self.completions = _FakeCompletions(owner)


class _FakeOpenAI:
    instances: list = []
    content = json.dumps({"ok": True})
    refusal = None

    def __init__(self, api_key: str, base_url=None, **kwargs):
        self.api_key = api_key
        self.base_url = base_url
        self.kwargs = kwargs
        self.calls: list = []
        self.chat = _FakeChat(self)
        _FakeOpenAI.instances.append(self)


@pytest.fixture
def fake_openai(monkeypatch):
    _FakeOpenAI.instances = []
    _FakeOpenAI.content = json.dumps({"ok": True})
    _FakeOpenAI.refusal = None
    monkeypatch.setattr(openai_client_module, "OpenAI", _FakeOpenAI)
    return _FakeOpenAI


def test_complete_json_sends_schema_and_parses(fake_openai):
    client = OpenAIClient(api_key="sk-test", base_url="https://gateway.example/v1")

    payload = client.complete_json(
        [{"role": "user", "content": "hi"}],
        schema_name="Thing",
        schema={"type": "object"},
        temperature=0.2,
    )

    assert payload == {"ok": True}
    instance = fake_openai.instances[0]
    assert instance.base_url == "https://gateway.example/v1"
    assert instance.kwargs["max_retries"] == 0
    call = instance.calls[0]
    assert call["model"] == client.default_chat_model
    assert call["response_format"]["json_schema"]["name"] == "Thing"
    assert call["temperature"] == 0.2


def test_failure_is_not_retried(fake_openai):
    client = OpenAIClient(api_key="bad-key")

    with pytest.raises(RuntimeError, match="provider failed"):
        client.chat(messages=[{"role": "user", "content": "hi"}])

    assert len(fake_openai.instances[0].calls) == 1


def test_missing_key_raises_on_use(fake_openai):
    client = OpenAIClient(api_key="   ")

    assert not client.configured
    with pytest.raises(RuntimeError):
        client.chat(messages=[])
    assert fake_openai.instances == []


def test_empty_or_non_object_content_is_an_error(fake_openai):
    client = OpenAIClient(api_key="sk-test")

    fake_openai.content = ""
    with pytest.raises(ValueError):
        client.complete_json([], schema_name="Thing", schema={})

    fake_openai.content = "[1, 2]"
    with pytest.raises(ValueError):
        client.complete_json([], schema_name="Thing", schema={})


def test_fenced_json_is_accepted(fake_openai):
    client = OpenAIClient(api_key="sk-test")
    fake_openai.content = '```json\n{"score": 80}\n```'

    assert client.complete_json([], schema_name="Thing", schema={}) == {"score": 80}


def test_extract_content_handles_part_lists():
    resp = {"choices": [{"message": {"content": [{"type": "text", "text": "a"}, {"text": "b"}]}}]}
    assert extract_content(resp) == "a\nb"
    assert extract_content({"choices": []}) is None


def test_strip_code_fence_leaves_plain_json():
    assert strip_code_fence(' {"a": 1} ') == '{"a": 1}'


def test_refusal_is_reported_instead_of_parsed(fake_openai):
    client = OpenAIClient(api_key="sk-test")
    fake_openai.content = None
    fake_openai.refusal = "I can't help with that video."

    with pytest.raises(ValueError, match="refused the request: I can't help"):
        client.complete_json([], schema_name="Thing", schema={})


def test_extract_content_reads_sdk_style_objects():
    class _Message:
        content = '{"a": 1}'
        refusal = None

    class _Choice:
        message = _Message()

    class _Response:
        choices = [_Choice()]

    assert extract_content(_Response()) == '{"a": 1}'
    assert extract_refusal(_Response()) is None

    _Message.refusal = "no"
    assert extract_content(_Response()) is None
    assert extract_refusal(_Response()) == "no"
