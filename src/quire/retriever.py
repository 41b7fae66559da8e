"""Question answering pipeline for Quire."""

from __future__ import annotations

import logging

from quire.embedder import Embedder
from quire.errors import AnswerGenerationError, ProviderError, ValidationError
from quire.models import Answer, NoAnswerableContext, ScoredChunk, Source
from quire.providers import LLMClient
from quire.retrieval import BruteForceRanker, Ranker
from quire.settings import DEFAULT_SYSTEM_PROMPT
from quire.stores import DocumentStore

logger = logging.getLogger(__name__)

INSUFFICIENT_CONTEXT_ANSWER = "No valid embeddings found. Try re-uploading your document."


def build_user_message(question: str, chunks: list[ScoredChunk]) -> str:
    """Format retrieved chunks and the question as the user turn."""
    context = "\n\n".join(scored.chunk.content for scored in chunks)
    return "Context:\n" + context + "\n\nQuestion: " + question


class QueryPipeline:
    """Orchestrates question answering.

    Pipeline:
    1. Embed the question
    2. Read every embedded chunk from the store (one snapshot)
    3. Rank candidates and keep the top K
    4. Ask the chat model, with the ranked chunks as context

    When no stored chunk can be compared to the question, the pipeline stops
    before step 4 and returns a fixed insufficient-context answer.
    """

    def __init__(
        self,
        store: DocumentStore,
        embedder: Embedder,
        llm_client: LLMClient,
        ranker: Ranker | None = None,
        default_k: int = 5,
        system_prompt: str | None = None,
        temperature: float | None = 0.7,
    ) -> None:
        """Initialize the pipeline.

        Args:
            store: Store to read candidate chunks from
            embedder: Embedder for the question
            llm_client: Chat client for the answer
            ranker: Top-K ranker (default: BruteForceRanker)
            default_k: Number of chunks used when k is not given
            system_prompt: Custom system prompt
            temperature: Sampling temperature for the chat call
        """
        self.store = store
        self.embedder = embedder
        self.llm_client = llm_client
        self.ranker = ranker or BruteForceRanker()
        self.default_k = default_k
        self.system_prompt = system_prompt or DEFAULT_SYSTEM_PROMPT
        self.temperature = temperature

    def retrieve(
        self,
        question: str,
        k: int | None = None,
    ) -> list[ScoredChunk] | NoAnswerableContext:
        """Get the chunks most relevant to a question.

        Args:
            question: User's question
            k: Number of chunks to return (default: self.default_k)

        Returns:
            Ranked chunks, or NoAnswerableContext if nothing is scorable

        Raises:
            ValidationError: If the question is blank or k is below 1
            AnswerGenerationError: If the question cannot be embedded
        """
        if not question or not question.strip():
            raise ValidationError("Question must not be empty")
        k = self.default_k if k is None else k
        if k < 1:
            raise ValidationError(f"k must be at least 1, got {k}")

        try:
            query_vector = self.embedder.embed_text(question)
        except ProviderError as e:
            raise AnswerGenerationError(f"Could not embed the question: {e}") from e

        candidates = self.store.embedded_chunks()
        return self.ranker.top_k(query_vector, candidates, k)

    def search(self, question: str, k: int | None = None) -> list[Source]:
        """Retrieve sources without generating an answer."""
        ranked = self.retrieve(question, k)
        if isinstance(ranked, NoAnswerableContext):
            return []
        return [Source.from_scored(scored) for scored in ranked]

    def answer(self, question: str, k: int | None = None) -> Answer:
        """Answer a question from the stored documents.

        Args:
            question: User's question
            k: Number of chunks to use as context (default: self.default_k)

        Returns:
            Answer with generated text and its sources

        Raises:
            ValidationError: If the question is blank or k is below 1
            AnswerGenerationError: If embedding the question or the chat call fails
        """
        ranked = self.retrieve(question, k)

        if isinstance(ranked, NoAnswerableContext):
            return Answer(
                question=question,
                answer=INSUFFICIENT_CONTEXT_ANSWER,
                sources=[],
                insufficient_context=True,
            )

        user_message = build_user_message(question, ranked)
        try:
            text = self.llm_client.complete(
                self.system_prompt,
                user_message,
                temperature=self.temperature,
            )
        except ProviderError as e:
            raise AnswerGenerationError(f"Answer generation failed: {e}") from e

        logger.info("Answered question using %d chunks", len(ranked))
        return Answer(
            question=question,
            answer=text,
            sources=[Source.from_scored(scored) for scored in ranked],
        )
