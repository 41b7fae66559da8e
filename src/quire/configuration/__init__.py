"""Configuration objects for Quire.

Instead of factory methods, you pass configuration objects that know how to
build their components.

Provider configurations (build the remote clients):
- OpenAIProvider: OpenAI-compatible REST API via requests
- LiteLLMProvider: Any model supported by LiteLLM

Storage configurations (build the document store):
- LocalStorage: SQLite file in a local directory

Example:
    from quire import Quire, OpenAIProvider, LocalStorage

    quire = Quire(
        provider=OpenAIProvider(api_key="sk-..."),
        storage=LocalStorage("./data"),
    )
"""

from quire.configuration.base import ProviderConfig, StorageConfig
from quire.configuration.providers import LiteLLMProvider, OpenAIProvider
from quire.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "OpenAIProvider",
    "LocalStorage",
]
