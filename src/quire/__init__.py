"""Quire - question answering over your PDFs.

Uploaded documents are split into overlapping sentence-aware chunks, embedded
through a paced and retried provider client, and stored in SQLite. Questions
are answered by ranking stored chunks by cosine similarity and handing the
best ones to a chat model as context.

Quick Start (OpenAI + Local Storage):
    from quire import Quire, OpenAIProvider, LocalStorage

    quire = Quire(
        provider=OpenAIProvider(api_key="sk-..."),
        storage=LocalStorage("./data"),
    )

    result = quire.ingest_file("notes.pdf")
    answer = quire.answer_question("What is photosynthesis?")
    print(answer.answer)

Any LiteLLM model:
    from quire import Quire, LiteLLMProvider, LocalStorage

    quire = Quire(
        provider=LiteLLMProvider(
            llm="anthropic/claude-3-5-haiku-latest",
            embedding="openai/text-embedding-3-small",
        ),
        storage=LocalStorage("./data"),
    )
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("quire-rag")
except PackageNotFoundError:
    # Running from a source tree without an installed distribution.
    __version__ = "unknown"

from quire.configuration import LiteLLMProvider, LocalStorage, OpenAIProvider
from quire.errors import (
    AnswerGenerationError,
    DocumentNotFoundError,
    ExtractionError,
    FatalProviderError,
    ProviderError,
    ProviderRetriesExhaustedError,
    QuireError,
    TransientProviderError,
    ValidationError,
)
from quire.models import (
    Answer,
    Chunk,
    CorpusStats,
    Document,
    DocumentDetail,
    IngestResult,
    Source,
)
from quire.pacing import PacingGate
from quire.quire import Quire
from quire.settings import Settings

__all__ = [
    "__version__",
    # Entry point
    "Quire",
    "Settings",
    "PacingGate",
    # Configuration
    "OpenAIProvider",
    "LiteLLMProvider",
    "LocalStorage",
    # Models
    "Document",
    "Chunk",
    "DocumentDetail",
    "IngestResult",
    "Answer",
    "Source",
    "CorpusStats",
    # Errors
    "QuireError",
    "ValidationError",
    "ExtractionError",
    "ProviderError",
    "TransientProviderError",
    "FatalProviderError",
    "ProviderRetriesExhaustedError",
    "AnswerGenerationError",
    "DocumentNotFoundError",
]
