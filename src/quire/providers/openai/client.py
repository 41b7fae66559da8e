# src/quire/providers/openai/client.py
"""HTTP clients for OpenAI-compatible embedding and chat endpoints."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import requests

from quire.errors import FatalProviderError, TransientProviderError
from quire.providers.base import EmbeddingClient, LLMClient
from quire.providers.openai.models import DEFAULT_BASE_URL, ChatModels, EmbeddingModels
from quire.providers.retry import RetryPolicy, call_with_retry, error_for_status

if TYPE_CHECKING:
    from quire.pacing import PacingGate

logger = logging.getLogger(__name__)


class OpenAIHTTPClient:
    """Shared transport: bearer auth, pacing, retries and status classification.

    Each POST is one paced attempt; 429/5xx responses and connection errors
    are retried according to the retry policy, every other non-2xx status
    and any non-JSON body fails immediately.
    """

    def __init__(
        self,
        *,
        model: str,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        gate: PacingGate | None = None,
        retry_policy: RetryPolicy | None = None,
        timeout: float = 60.0,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        """Initialize the transport.

        Args:
            model: Model identifier sent with every request.
            api_key: Bearer credential. Omitted from headers when None.
            base_url: API root, e.g. "https://api.openai.com/v1".
            gate: Shared pacing gate acquired before every attempt.
            retry_policy: Retry limits and backoff. Defaults to RetryPolicy().
            timeout: Per-request timeout in seconds.
            session: requests session to use (a new one by default).
            sleep: Function used to wait between retries.
            rng: Random source for backoff jitter.
        """
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self._gate = gate
        self._policy = retry_policy or RetryPolicy()
        self._session = session or requests.Session()
        self._sleep = sleep
        self._rng = rng

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _post_once(self, path: str, payload: dict[str, Any], description: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.post(
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except (
            requests.ConnectionError,
            requests.Timeout,
            requests.exceptions.ChunkedEncodingError,
            requests.exceptions.ContentDecodingError,
        ) as e:
            # the connection failed or broke mid-body
            raise TransientProviderError(f"{description}: {e}") from e
        except requests.RequestException as e:
            raise FatalProviderError(f"{description}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise error_for_status(
                response.status_code,
                description,
                response.headers.get("Retry-After"),
            )

        try:
            return response.json()
        except ValueError as e:
            raise FatalProviderError(f"{description}: response body is not JSON") from e

    def _post(self, path: str, payload: dict[str, Any], description: str) -> Any:
        return call_with_retry(
            lambda: self._post_once(path, payload, description),
            policy=self._policy,
            gate=self._gate,
            sleep=self._sleep,
            rng=self._rng,
            description=description,
        )


class OpenAIEmbeddingClient(OpenAIHTTPClient, EmbeddingClient):
    """Embedding client for POST {base_url}/embeddings.

    Example:
        gate = PacingGate(0.8)
        client = OpenAIEmbeddingClient(
            model=EmbeddingModels.TEXT_3_SMALL,
            api_key=os.environ["OPENAI_API_KEY"],
            gate=gate,
        )
        vectors = client.embed(["Hello world", "How are you?"])
    """

    def __init__(self, *, model: str = EmbeddingModels.TEXT_3_SMALL, **kwargs: Any) -> None:
        super().__init__(model=model, **kwargs)

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed texts with a single request (plus retries)."""
        if not texts:
            return []

        body = self._post(
            "/embeddings",
            {"model": self.model, "input": texts},
            description=f"Embedding request ({len(texts)} texts)",
        )
        return parse_embedding_response(body, expected=len(texts))


class OpenAIChatClient(OpenAIHTTPClient, LLMClient):
    """Chat client for POST {base_url}/chat/completions."""

    def __init__(
        self,
        *,
        model: str = ChatModels.GPT_4O_MINI,
        temperature: float | None = 0.7,
        **kwargs: Any,
    ) -> None:
        super().__init__(model=model, **kwargs)
        self.temperature = temperature

    def complete(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float | None = None,
    ) -> str:
        """Generate an answer with a single request (plus retries)."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        }
        effective_temperature = temperature if temperature is not None else self.temperature
        if effective_temperature is not None:
            payload["temperature"] = effective_temperature

        body = self._post("/chat/completions", payload, description="Chat request")
        return parse_chat_response(body)


def parse_embedding_response(body: Any, expected: int) -> list[list[float]]:
    """Extract vectors from an embeddings response, ordered by input position.

    Raises:
        FatalProviderError: If the body is missing fields or has the wrong
            number of vectors.
    """
    try:
        data = body["data"]
        items = sorted(
            enumerate(data),
            key=lambda pair: pair[1].get("index", pair[0]),
        )
        vectors = [[float(x) for x in item["embedding"]] for _, item in items]
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise FatalProviderError(f"Malformed embedding response: {e!r}") from e

    if len(vectors) != expected:
        raise FatalProviderError(
            f"Embedding count mismatch: sent {expected} texts, got {len(vectors)} vectors"
        )
    return vectors


def parse_chat_response(body: Any) -> str:
    """Extract choices[0].message.content from a chat completion response.

    Raises:
        FatalProviderError: If the content is missing or null.
    """
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise FatalProviderError(f"Malformed chat response: {e!r}") from e
    if content is None:
        raise FatalProviderError("Chat response has no content")
    return str(content)
