"""Shared pytest fixtures."""

import logging
import os
import tempfile
from typing import Any

import pytest

from quire.errors import ProviderError
from quire.loaders import ExtractedText, TextExtractor
from quire.pacing import PacingGate
from quire.providers import EmbeddingClient, LLMClient

DEFAULT_VECTOR = [0.1, 0.2, 0.3]


class FakeEmbeddingClient(EmbeddingClient):
    """Embedding client returning canned vectors.

    Texts found in `vectors` get that vector, others get `default`. When
    `fail_on_call` is set, that call (1-based) and every later one raise
    `error`.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
        fail_on_call: int | None = None,
        error: ProviderError | None = None,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default if default is not None else DEFAULT_VECTOR
        self.fail_on_call = fail_on_call
        self.error = error or ProviderError("embedding failed")
        self.calls: list[list[str]] = []

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if self.fail_on_call is not None and len(self.calls) >= self.fail_on_call:
            raise self.error
        return [list(self.vectors.get(text, self.default)) for text in texts]


class FakeLLMClient(LLMClient):
    """Chat client that records prompts and returns a fixed answer."""

    def __init__(self, answer: str = "A generated answer.", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def complete(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float | None = None,
    ) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_message": user_message,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return self.answer


class FakeExtractor(TextExtractor):
    """Extractor that ignores the bytes and returns fixed text."""

    def __init__(self, text: str = "", page_count: int = 1) -> None:
        self.text = text
        self.page_count = page_count
        self.calls = 0

    def supports(self, filename: str) -> bool:
        return filename.lower().endswith(".pdf")

    def extract(self, data: bytes) -> ExtractedText:
        self.calls += 1
        return ExtractedText(text=self.text, page_count=self.page_count)


class RecordingSleep:
    """Sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class CountingGate(PacingGate):
    """PacingGate with no interval that counts acquisitions."""

    def __init__(self) -> None:
        super().__init__(0.0)
        self.acquired = 0

    def acquire(self) -> None:
        self.acquired += 1
        super().acquire()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def store(temp_dir):
    """Create an empty SQLite document store."""
    from quire.stores import SQLiteDocumentStore

    return SQLiteDocumentStore(os.path.join(temp_dir, "quire.db"))


@pytest.fixture
def embedding_client():
    return FakeEmbeddingClient()


@pytest.fixture
def llm_client():
    return FakeLLMClient()


@pytest.fixture
def recorded_sleep():
    return RecordingSleep()


@pytest.fixture
def counting_gate():
    return CountingGate()


@pytest.fixture
def make_embedding_client():
    """Factory for FakeEmbeddingClient."""
    return FakeEmbeddingClient


@pytest.fixture
def make_llm_client():
    """Factory for FakeLLMClient."""
    return FakeLLMClient


@pytest.fixture
def make_extractor():
    """Factory for FakeExtractor."""
    return FakeExtractor


@pytest.fixture
def make_quire(store):
    """Factory for a Quire wired to fakes, with pacing disabled."""
    from quire import Quire, Settings

    def _make(
        text: str = "",
        embedding_client: EmbeddingClient | None = None,
        llm_client: LLMClient | None = None,
        **settings: Any,
    ):
        settings.setdefault("min_interval_seconds", 0.0)
        return Quire(
            store=store,
            embedding_client=embedding_client or FakeEmbeddingClient(),
            llm_client=llm_client or FakeLLMClient(),
            settings=Settings(**settings),
            extractor=FakeExtractor(text),
        )

    return _make


@pytest.fixture(autouse=True)
def reset_quire_logger():
    """Undo configure_logging() so caplog sees quire records in every test."""
    yield
    logger = logging.getLogger("quire")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Hide QUIRE_* and OpenAI variables from the host environment."""
    for name in list(os.environ):
        if name.startswith("QUIRE_") or name == "OPENAI_API_KEY":
            monkeypatch.delenv(name, raising=False)
