"""Enumeration types for OmniRecall data models."""

from enum import Enum


class EmbeddingProviderType(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"
    OLLAMA = "ollama"
    LOCAL = "local"


class EmbeddingErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    INVALID_KEY = "invalid_key"
    NETWORK_ERROR = "network_error"
    BAD_RESPONSE = "bad_response"
