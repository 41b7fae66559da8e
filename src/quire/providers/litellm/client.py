# src/quire/providers/litellm/client.py
"""LiteLLM client implementations for chat and embedding APIs."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import litellm

from quire.errors import FatalProviderError, TransientProviderError
from quire.providers.base import EmbeddingClient, LLMClient
from quire.providers.litellm.models import ChatModels, EmbeddingModels
from quire.providers.openai.client import parse_chat_response
from quire.providers.retry import RetryPolicy, call_with_retry, error_for_status

if TYPE_CHECKING:
    from quire.pacing import PacingGate


def _classify(error: Exception, description: str) -> Exception:
    """Map a LiteLLM exception onto the transient/fatal split."""
    if isinstance(error, (litellm.APIConnectionError, litellm.Timeout)):
        return TransientProviderError(f"{description}: {error}")
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        response = getattr(error, "response", None)
        headers = getattr(response, "headers", None) or {}
        return error_for_status(status_code, f"{description} ({error})", headers.get("retry-after"))
    return FatalProviderError(f"{description}: {error}")


class _LiteLLMBase:
    """Pacing and retry wiring shared by the LiteLLM clients.

    LiteLLM's own retries are disabled (num_retries=0) so attempts are paced
    and counted by Quire's retry policy.
    """

    def __init__(
        self,
        *,
        model: str,
        api_key: str | None = None,
        api_base: str | None = None,
        gate: PacingGate | None = None,
        retry_policy: RetryPolicy | None = None,
        timeout: float = 60.0,
        sleep: Callable[[float], None] = time.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self.model = model
        self.api_key = api_key
        self.api_base = api_base
        self.timeout = timeout
        self._gate = gate
        self._policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._rng = rng

    def _call_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "num_retries": 0,
            "timeout": self.timeout,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.api_base:
            kwargs["api_base"] = self.api_base
        return kwargs

    def _run(self, fn: Callable[[], Any], description: str) -> Any:
        def attempt() -> Any:
            try:
                return fn()
            except (TransientProviderError, FatalProviderError):
                raise
            except Exception as e:
                raise _classify(e, description) from e

        return call_with_retry(
            attempt,
            policy=self._policy,
            gate=self._gate,
            sleep=self._sleep,
            rng=self._rng,
            description=description,
        )


class LiteLLMClient(_LiteLLMBase, LLMClient):
    """LiteLLM-based chat client.

    Supports any model available through LiteLLM (OpenAI, Anthropic, Gemini,
    Bedrock, Ollama, etc.).

    Example:
        from quire.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GPT_4O_MINI, gate=PacingGate(0.8))
        answer = client.complete("You are helpful.", "Hello")
    """

    def __init__(
        self,
        model: str = ChatModels.GPT_4O_MINI,
        temperature: float | None = 0.7,
        **kwargs: Any,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
                   Examples: "openai/gpt-4o-mini", "anthropic/claude-sonnet-4-5-20250929"
            temperature: Default sampling temperature.
            **kwargs: api_key, api_base, gate, retry_policy, timeout, sleep, rng.
        """
        super().__init__(model=model, **kwargs)
        self.temperature = temperature

    def complete(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        completion_kwargs = self._call_kwargs()
        completion_kwargs["messages"] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]
        completion_kwargs["drop_params"] = True
        effective_temperature = temperature if temperature is not None else self.temperature
        if effective_temperature is not None:
            completion_kwargs["temperature"] = effective_temperature

        response = self._run(
            lambda: litellm.completion(**completion_kwargs),
            description="Chat request",
        )
        if not response.choices:
            raise FatalProviderError(f"LLM returned no choices for model {self.model}")
        message = response.choices[0].message
        return parse_chat_response({"choices": [{"message": {"content": message.content}}]})


class LiteLLMEmbeddingClient(_LiteLLMBase, EmbeddingClient):
    """LiteLLM-based embedding client.

    Example:
        from quire.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.TEXT_3_SMALL)
        embeddings = client.embed(["Hello world", "How are you?"])
    """

    def __init__(self, model: str = EmbeddingModels.TEXT_3_SMALL, **kwargs: Any) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
                   Examples: "openai/text-embedding-3-small", "gemini/gemini-embedding-001"
            **kwargs: api_key, api_base, gate, retry_policy, timeout, sleep, rng.
        """
        super().__init__(model=model, **kwargs)

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        embedding_kwargs = self._call_kwargs()
        embedding_kwargs["input"] = texts
        response = self._run(
            lambda: litellm.embedding(**embedding_kwargs),
            description=f"Embedding request ({len(texts)} texts)",
        )

        try:
            # Sort by index to maintain order
            sorted_data = sorted(response.data, key=lambda x: x["index"])
            vectors = [list(item["embedding"]) for item in sorted_data]
        except (KeyError, TypeError, AttributeError) as e:
            raise FatalProviderError(f"Malformed embedding response: {e!r}") from e

        if len(vectors) != len(texts):
            raise FatalProviderError(
                f"Embedding count mismatch: sent {len(texts)} texts, got {len(vectors)} vectors"
            )
        return vectors
