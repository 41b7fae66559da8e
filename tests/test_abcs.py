# tests/test_abcs.py
"""Tests for the abstract base classes behind the pipeline seams."""

from abc import ABC

import pytest

from quire.chunker import Chunker
from quire.embedder import Embedder
from quire.errors import FatalProviderError
from quire.loaders import TextExtractor
from quire.providers import EmbeddingClient, LLMClient
from quire.retrieval import Ranker
from quire.stores import DocumentStore

ABCS = [
    (Chunker, ["chunk"]),
    (Embedder, ["embed_texts", "embed_text"]),
    (TextExtractor, ["extract", "supports"]),
    (EmbeddingClient, ["embed"]),
    (LLMClient, ["complete"]),
    (Ranker, ["top_k"]),
    (
        DocumentStore,
        [
            "add_document",
            "get_document",
            "list_documents",
            "get_chunks",
            "embedded_chunks",
            "chunks_missing_embeddings",
            "update_embeddings",
            "delete_document",
            "stats",
        ],
    ),
]


@pytest.mark.parametrize("cls,methods", ABCS, ids=[cls.__name__ for cls, _ in ABCS])
class TestABCs:
    def test_is_abstract(self, cls, methods):
        assert issubclass(cls, ABC)

    def test_cannot_instantiate(self, cls, methods):
        with pytest.raises(TypeError):
            cls()

    def test_has_required_methods(self, cls, methods):
        for name in methods:
            assert callable(getattr(cls, name))


class TestEmbedderDefaults:
    def test_embed_text_uses_embed_texts(self):
        class Doubling(Embedder):
            def embed_texts(self, texts):
                return [[float(len(t))] * 2 for t in texts]

        assert Doubling().embed_text("abc") == [3.0, 3.0]

    def test_embed_batch_checks_vector_count(self):
        class Dropping(Embedder):
            def embed_texts(self, texts):
                return [[1.0] for _ in texts[1:]]

        assert Dropping().embed_batch([]) == []
        with pytest.raises(FatalProviderError, match="mismatch"):
            Dropping().embed_batch(["a", "b"])
