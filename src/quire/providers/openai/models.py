# src/quire/providers/openai/models.py
"""Model constants for OpenAI-compatible endpoints.

These are convenience constants for IDE autocomplete. Any model string the
endpoint accepts can be passed directly.
"""

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class ChatModels:
    """Chat completion models."""

    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4O = "gpt-4o"
    GPT_41_MINI = "gpt-4.1-mini"


class EmbeddingModels:
    """Embedding models."""

    TEXT_3_SMALL = "text-embedding-3-small"
    TEXT_3_LARGE = "text-embedding-3-large"
    ADA_002 = "text-embedding-ada-002"
