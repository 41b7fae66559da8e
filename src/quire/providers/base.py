# src/quire/providers/base.py
"""Abstract base classes for chat and embedding providers."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Abstract base class for chat completion providers.

    Implementations are expected to pace and retry their own HTTP calls
    (see quire.providers.retry) and to raise ProviderError subclasses on
    failure, so callers only ever see an answer or a Quire error.

    Example:
        class MyLLMClient(LLMClient):
            def complete(self, system_prompt, user_message, temperature=None):
                return my_api.chat(system_prompt, user_message, temp=temperature)
    """

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float | None = None,
    ) -> str:
        """Generate an answer for a single-turn conversation.

        Args:
            system_prompt: Instructions sent with the "system" role.
            user_message: Content sent with the "user" role.
            temperature: Optional sampling temperature. If None, use the
                         client's default.

        Returns:
            The generated text.

        Raises:
            FatalProviderError: The provider rejected the request or returned
                an unusable body.
            ProviderRetriesExhaustedError: Transient failures outlasted the
                retry policy.
        """
        ...


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            def embed(self, texts):
                return my_api.embed_batch(texts)
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for a batch of texts in one call.

        Args:
            texts: Texts to embed. An empty list returns [] without calling
                   the provider.

        Returns:
            One vector per input text; result[i] corresponds to texts[i].
        """
        ...
