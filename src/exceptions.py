"""Error taxonomy shared by the retrieval engine and its collaborators."""

from __future__ import annotations

from src.models.enums import EmbeddingErrorKind


class OmniRecallError(Exception):
    def __init__(self, message: str, error_code: str) -> None:
        super().__init__(message)
        self.error_code = error_code


class ExtractionError(OmniRecallError):
    """A file could not be read or its format is not supported."""

    def __init__(self, detail: str) -> None:
        super().__init__(message=detail, error_code="EXTRACTION_ERROR")


_EMBEDDING_MESSAGES = {
    EmbeddingErrorKind.RATE_LIMITED: "Rate limited",
    EmbeddingErrorKind.INVALID_KEY: "Invalid API key",
    EmbeddingErrorKind.NETWORK_ERROR: "Network error",
    EmbeddingErrorKind.BAD_RESPONSE: "Bad response",
}


class EmbeddingError(OmniRecallError):
    """An embedding provider failed to turn text into a vector."""

    def __init__(self, kind: EmbeddingErrorKind, detail: str = "") -> None:
        message = _EMBEDDING_MESSAGES[kind]
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message=message, error_code=kind.value.upper())
        self.kind = kind


class DatabaseError(OmniRecallError):
    def __init__(self, detail: str) -> None:
        super().__init__(
            message=f"Database error: {detail}",
            error_code="DATABASE_ERROR",
        )


class ConfigurationError(OmniRecallError):
    def __init__(self, detail: str) -> None:
        super().__init__(
            message=f"Configuration error: {detail}",
            error_code="CONFIGURATION_ERROR",
        )
