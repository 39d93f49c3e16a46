"""
Pytest configuration and fixtures
"""
import os
from types import SimpleNamespace

import pytest

# main.py reads its configuration on import
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("OPENAI_BASE_URL", "http://localhost:9999/v1")

from services import Extractor, ExtractionError, PromptParts


class FakeExtractor(Extractor):
    """Deterministic stand-in for the AI assistant."""

    def __init__(self, parts=None, error=None):
        self.parts = parts or PromptParts()
        self.error = error
        self.calls = []

    def extract(self, raw_text):
        self.calls.append(raw_text)
        if self.error is not None:
            raise self.error
        return self.parts


def tool_call_response(arguments):
    """Builds a chat completion whose answer is a forced function call."""
    call = SimpleNamespace(function=SimpleNamespace(name="extract_prompt_parts", arguments=arguments))
    message = SimpleNamespace(tool_calls=[call], content=None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def content_response(content):
    message = SimpleNamespace(tool_calls=None, content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def dress_parts():
    return PromptParts(
        target="woman's dress",
        change="blue color",
        preserve="face, hair, background",
        style="highly detailed, photorealistic",
    )


@pytest.fixture
def fake_extractor(dress_parts):
    return FakeExtractor(parts=dress_parts)


@pytest.fixture
def failing_extractor():
    return FakeExtractor(error=ExtractionError("Failed to generate prompt structure: 503 Service Unavailable"))
