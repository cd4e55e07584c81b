import json

import pytest

from src.credentials import CredentialStore
from src.generation import GenerationOrchestrator

ANALYSIS_PAYLOAD = {
    "tone": "유머러스한",
    "targetAudience": "20-30대 직장인",
    "keyThemes": ["아침 루틴", "생산성", "자기계발"],
    "suggestedTopics": [
        {"title": f"제목 {n}", "reasoning": f"이유 {n}"} for n in range(1, 6)
    ],
}


class FakeGenerator:
    """Scripted stand-in for GeminiTextGenerator; records every prompt it receives."""

    def __init__(self, text="", json_payloads=None, error=None):
        self.text = text
        self.json_payloads = list(json_payloads or [])
        self.error = error
        self.calls = []

    def generate_text(self, prompt):
        self.calls.append(("text", prompt))
        if self.error is not None:
            raise self.error
        return self.text

    def generate_json(self, prompt, schema):
        self.calls.append(("json", prompt))
        if self.error is not None:
            raise self.error
        payload = self.json_payloads.pop(0)
        return payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)


@pytest.fixture
def credentials(tmp_path):
    store = CredentialStore(path=tmp_path / "credentials.json")
    store.set("AIzaSyTestKey1234567890")
    return store


@pytest.fixture
def fake_generator():
    return FakeGenerator(json_payloads=[ANALYSIS_PAYLOAD])


@pytest.fixture
def orchestrator(credentials, fake_generator):
    return GenerationOrchestrator(credentials, generator_factory=lambda api_key: fake_generator)
