"""Shared fixtures: recording store and fake LLM backend."""
import json
from types import SimpleNamespace

import pytest

from chat_relay.inference.backend import LlmBackend
from chat_relay.shared_services.history import HistoryRepository
from chat_relay.shared_services.session_store import SessionStore


class RecordingStore(SessionStore):
    """Session store that records every call and can be told to fail."""

    backend_name = "recording"

    def __init__(self, initial=None, fail_on=()):
        self.data = dict(initial or {})
        self.calls = []
        self.fail_on = set(fail_on)

    def get(self, key):
        self.calls.append(("get", key))
        if "get" in self.fail_on:
            raise ConnectionError("store unreachable")
        return self.data.get(key)

    def put(self, key, value):
        self.calls.append(("put", key, value))
        if "put" in self.fail_on:
            raise ConnectionError("store unreachable")
        self.data[key] = value

    @property
    def puts(self):
        return [c for c in self.calls if c[0] == "put"]

    def stored_turns(self, session_id):
        return json.loads(self.data["session:" + session_id])


class FakeLlm:
    def __init__(self, reply, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def invoke(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.reply)


class FakeBackend(LlmBackend):
    """LlmBackend whose text LLM returns a canned reply and records prompts and sampling args."""

    def __init__(self, reply="Hello!", error=None):
        self.llm = FakeLlm(reply, error)
        self.calls = []

    def create_text_llm(self, model, *, temperature, max_tokens):
        self.calls.append({"model": model, "temperature": temperature, "max_tokens": max_tokens})
        return self.llm

    @property
    def prompts(self):
        return self.llm.prompts


def make_turns(count):
    """Alternating user/assistant turns with distinct contents msg-00, msg-01, ..."""
    return [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"msg-{i:02d}"}
        for i in range(count)
    ]


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def history(store):
    return HistoryRepository(store)


@pytest.fixture
def seeded_store():
    """Factory: store pre-loaded with `count` turns for a session."""
    def _make(session_id, count):
        return RecordingStore({"session:" + session_id: json.dumps(make_turns(count))})
    return _make


@pytest.fixture
def fake_backend():
    """Factory for FakeBackend with a custom reply or error."""
    return FakeBackend
