# src/quire/commands/query.py
"""Query command - answer a question from the stored documents.

This module provides the core query logic that the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from quire.commands.base import QueryResult, SearchResult
from quire.config import (
    ConfigError,
    create_quire,
    get_quire_config,
    load_config,
    resolve_data_dir,
)
from quire.errors import QuireError

if TYPE_CHECKING:
    from quire.models import Source
    from quire.quire import Quire


def _to_search_results(sources: list[Source]) -> list[SearchResult]:
    return [
        SearchResult(
            source=s.document_name,
            content=s.content,
            score=s.score,
            chunk_index=s.chunk_index,
            chunk_id=s.chunk_id,
        )
        for s in sources
    ]


def query(
    question: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    k: int | None = None,
    raw: bool = False,
) -> QueryResult:
    """Answer a question from the stored documents.

    Args:
        question: The question to ask
        data_dir: Override data directory
        config_path: Override config file path
        k: Number of chunks to use as context (None for default)
        raw: If True, return the ranked chunks without calling the chat model

    Returns:
        QueryResult with answer and sources
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return QueryResult(
            success=False,
            query=question,
            error=f"Data directory not found: {effective_data_dir}. Run 'quire ingest' first.",
        )

    quire_config = get_quire_config(data_dir, config_path)
    if isinstance(quire_config, ConfigError):
        return QueryResult(success=False, query=question, error=quire_config.message)

    try:
        quire = create_quire(quire_config)
    except (OSError, ValueError) as e:
        return QueryResult(success=False, query=question, error=f"Failed to create Quire: {e}")

    return query_with_quire(quire, question, k=k, raw=raw)


def query_with_quire(
    quire: Quire,
    question: str,
    k: int | None = None,
    raw: bool = False,
) -> QueryResult:
    """Query using an existing Quire instance.

    Args:
        quire: Existing Quire instance
        question: The question to ask
        k: Number of chunks to use as context
        raw: If True, don't call the chat model

    Returns:
        QueryResult with answer and sources
    """
    try:
        if raw:
            sources = quire.search(question, k)
            return QueryResult(
                success=True,
                query=question,
                results=_to_search_results(sources),
                insufficient_context=not sources,
            )
        answer = quire.answer_question(question, k)
    except QuireError as e:
        return QueryResult(success=False, query=question, error=f"Query failed: {e}")

    return QueryResult(
        success=True,
        query=question,
        answer=answer.answer,
        results=_to_search_results(answer.sources),
        insufficient_context=answer.insufficient_context,
    )
