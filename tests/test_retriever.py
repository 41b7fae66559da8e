# tests/test_retriever.py
"""Tests for the question answering pipeline."""

import pytest

from quire.embedder import ClientEmbedder
from quire.errors import (
    AnswerGenerationError,
    FatalProviderError,
    ProviderRetriesExhaustedError,
    ValidationError,
)
from quire.models import Chunk, Document, NoAnswerableContext, ScoredChunk
from quire.retriever import INSUFFICIENT_CONTEXT_ANSWER, QueryPipeline, build_user_message
from quire.settings import DEFAULT_SYSTEM_PROMPT

QUERY_VECTOR = [1.0, 0.0]


def add_document(store, filename, contents_and_vectors):
    document = Document(
        filename=filename,
        size_bytes=100,
        page_count=1,
        chunk_count=len(contents_and_vectors),
    )
    chunks = []
    offset = 0
    for i, (content, vector) in enumerate(contents_and_vectors):
        chunks.append(
            Chunk(
                document_id=document.id,
                index=i,
                content=content,
                start_offset=offset,
                end_offset=offset + len(content),
                embedding=vector,
            )
        )
        offset += len(content) + 1
    store.add_document(document, chunks)
    return document, chunks


@pytest.fixture
def make_pipeline(store, make_embedding_client, llm_client):
    def _make(embedding_client=None, **kwargs):
        client = embedding_client or make_embedding_client(
            vectors={"What do mitochondria do?": QUERY_VECTOR}
        )
        return QueryPipeline(
            store=store,
            embedder=ClientEmbedder(client),
            llm_client=kwargs.pop("llm_client", llm_client),
            **kwargs,
        )

    return _make


@pytest.fixture
def populated_store(store):
    add_document(
        store,
        "biology.pdf",
        [
            ("Mitochondria produce energy.", [1.0, 0.0]),
            ("Ribosomes make proteins.", [0.0, 1.0]),
            ("The nucleus holds DNA.", [0.7, 0.7]),
            ("Not yet embedded.", []),
        ],
    )
    return store


class TestBuildUserMessage:
    def test_format(self):
        document_id = "doc"
        chunks = [
            ScoredChunk(
                chunk=Chunk(
                    document_id=document_id,
                    index=i,
                    content=text,
                    start_offset=0,
                    end_offset=len(text),
                ),
                score=1.0,
            )
            for i, text in enumerate(["First chunk.", "Second chunk."])
        ]

        message = build_user_message("Why?", chunks)

        assert message == "Context:\nFirst chunk.\n\nSecond chunk.\n\nQuestion: Why?"


class TestRetrieve:
    def test_ranks_by_similarity(self, make_pipeline, populated_store):
        ranked = make_pipeline().retrieve("What do mitochondria do?", k=2)

        assert [s.chunk.content for s in ranked] == [
            "Mitochondria produce energy.",
            "The nucleus holds DNA.",
        ]
        assert ranked[0].score == pytest.approx(1.0)
        assert ranked[0].document_name == "biology.pdf"

    def test_unembedded_chunks_are_never_returned(self, make_pipeline, populated_store):
        ranked = make_pipeline().retrieve("What do mitochondria do?", k=10)

        assert len(ranked) == 3
        assert "Not yet embedded." not in [s.chunk.content for s in ranked]

    def test_empty_store_has_no_context(self, make_pipeline):
        assert isinstance(make_pipeline().retrieve("What do mitochondria do?"), NoAnswerableContext)

    def test_uses_default_k(self, make_pipeline, populated_store):
        assert len(make_pipeline(default_k=1).retrieve("What do mitochondria do?")) == 1

    @pytest.mark.parametrize("question", ["", "   ", "\n\t"])
    def test_blank_question_is_rejected(self, make_pipeline, embedding_client, question):
        with pytest.raises(ValidationError):
            make_pipeline(embedding_client).retrieve(question)

        assert embedding_client.calls == []

    def test_k_below_one_is_rejected(self, make_pipeline):
        with pytest.raises(ValidationError, match="k must be at least 1"):
            make_pipeline().retrieve("What do mitochondria do?", k=0)

    def test_embedding_failure(self, make_pipeline, make_embedding_client):
        client = make_embedding_client(
            fail_on_call=1, error=ProviderRetriesExhaustedError("gave up", attempts=10)
        )

        with pytest.raises(AnswerGenerationError, match="Could not embed"):
            make_pipeline(client).retrieve("What do mitochondria do?")


class TestAnswer:
    def test_answer_with_sources(self, make_pipeline, populated_store, llm_client):
        answer = make_pipeline().answer("What do mitochondria do?", k=2)

        assert answer.answer == "A generated answer."
        assert answer.question == "What do mitochondria do?"
        assert not answer.insufficient_context
        assert [s.content for s in answer.sources] == [
            "Mitochondria produce energy.",
            "The nucleus holds DNA.",
        ]
        assert answer.sources[0].document_name == "biology.pdf"
        assert answer.sources[0].chunk_index == 0

    def test_prompt_contains_ranked_context(self, make_pipeline, populated_store, llm_client):
        make_pipeline().answer("What do mitochondria do?", k=2)

        call = llm_client.calls[0]
        assert call["system_prompt"] == DEFAULT_SYSTEM_PROMPT
        assert call["user_message"] == (
            "Context:\nMitochondria produce energy.\n\nThe nucleus holds DNA."
            "\n\nQuestion: What do mitochondria do?"
        )
        assert call["temperature"] == 0.7

    def test_custom_prompt_and_temperature(self, make_pipeline, populated_store, llm_client):
        make_pipeline(system_prompt="Answer in French.", temperature=0.1).answer(
            "What do mitochondria do?"
        )

        assert llm_client.calls[0]["system_prompt"] == "Answer in French."
        assert llm_client.calls[0]["temperature"] == 0.1

    def test_insufficient_context_skips_chat(self, make_pipeline, store, llm_client):
        """Only unembedded chunks: a fixed answer comes back without a chat call."""
        add_document(store, "scan.pdf", [("Pending chunk.", [])])

        answer = make_pipeline().answer("What do mitochondria do?")

        assert answer.insufficient_context
        assert answer.answer == INSUFFICIENT_CONTEXT_ANSWER
        assert answer.sources == []
        assert llm_client.calls == []

    def test_mismatched_dimensions_only(self, make_pipeline, store, llm_client):
        add_document(store, "other.pdf", [("Three dims.", [0.1, 0.2, 0.3])])

        answer = make_pipeline().answer("What do mitochondria do?")

        assert answer.insufficient_context
        assert llm_client.calls == []

    def test_chat_failure(self, make_pipeline, populated_store, make_llm_client):
        failing = make_llm_client(error=FatalProviderError("bad request", status_code=400))

        with pytest.raises(AnswerGenerationError, match="Answer generation failed"):
            make_pipeline(llm_client=failing).answer("What do mitochondria do?")


class TestSearch:
    def test_returns_sources(self, make_pipeline, populated_store, llm_client):
        sources = make_pipeline().search("What do mitochondria do?", k=1)

        assert [s.content for s in sources] == ["Mitochondria produce energy."]
        assert llm_client.calls == []

    def test_no_context_returns_empty(self, make_pipeline):
        assert make_pipeline().search("What do mitochondria do?") == []
