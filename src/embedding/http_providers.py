"""Embedding providers backed by hosted HTTP APIs (Gemini, OpenAI, Ollama).

Each adapter sends one text per request. HTTP failures are mapped onto
EmbeddingError kinds: 429 is RATE_LIMITED, 401/403 is INVALID_KEY, any other
non-2xx status or an unusable body is BAD_RESPONSE, and transport failures
(connection refused, DNS, timeouts) are NETWORK_ERROR. No retries happen
here; callers decide what to do with a failed chunk.
"""

import logging
from abc import abstractmethod

import requests

from src.embedding.provider import EmbeddingProvider
from src.exceptions import EmbeddingError
from src.models.enums import EmbeddingErrorKind, EmbeddingProviderType

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

DEFAULT_MODELS = {
    EmbeddingProviderType.GEMINI: "text-embedding-004",
    EmbeddingProviderType.OPENAI: "text-embedding-3-small",
    EmbeddingProviderType.OLLAMA: "nomic-embed-text",
}

# Known (provider, model) output sizes
EMBEDDING_DIMENSIONS = {
    (EmbeddingProviderType.GEMINI, "text-embedding-004"): 768,
    (EmbeddingProviderType.OPENAI, "text-embedding-3-small"): 1536,
    (EmbeddingProviderType.OPENAI, "text-embedding-3-large"): 3072,
    (EmbeddingProviderType.OLLAMA, "nomic-embed-text"): 768,
    (EmbeddingProviderType.OLLAMA, "mxbai-embed-large"): 1024,
}
FALLBACK_DIMENSION = 768

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
OPENAI_EMBEDDINGS_URL = "https://api.openai.com/v1/embeddings"
OLLAMA_BASE_URL = "http://localhost:11434"


def lookup_dimension(provider: EmbeddingProviderType, model: str) -> int:
    """Return the embedding size of a provider/model pair (768 if unknown)."""
    return EMBEDDING_DIMENSIONS.get((provider, model), FALLBACK_DIMENSION)


class HTTPEmbeddingProvider(EmbeddingProvider):
    """Shared request/response handling for HTTP embedding APIs."""

    provider_type: EmbeddingProviderType

    def __init__(
        self,
        model: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        dimension: int | None = None,
    ):
        self._model = model or DEFAULT_MODELS[self.provider_type]
        self._timeout = timeout
        self._dimension = dimension or lookup_dimension(self.provider_type, self._model)

    @property
    def model(self) -> str:
        return self._model

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, text: str) -> list[float]:
        url, body, headers = self._build_request(text)
        payload = self._post(url, body, headers)
        try:
            values = self._parse_embedding(payload)
            embedding = [float(v) for v in values]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise EmbeddingError(
                EmbeddingErrorKind.BAD_RESPONSE,
                f"{self.provider_type.value} response has no embedding ({e!r})",
            ) from e
        if not embedding:
            raise EmbeddingError(
                EmbeddingErrorKind.BAD_RESPONSE,
                f"{self.provider_type.value} returned an empty embedding",
            )
        return embedding

    def _post(self, url: str, body: dict, headers: dict) -> dict:
        name = self.provider_type.value
        try:
            response = requests.post(
                url,
                json=body,
                headers={"Content-Type": "application/json", **headers},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise EmbeddingError(EmbeddingErrorKind.NETWORK_ERROR, f"{name}: {e}") from e

        status = response.status_code
        if status == 429:
            raise EmbeddingError(EmbeddingErrorKind.RATE_LIMITED, f"{name} embedding API")
        if status in (401, 403):
            raise EmbeddingError(EmbeddingErrorKind.INVALID_KEY, f"{name} embedding API")
        if not 200 <= status < 300:
            raise EmbeddingError(
                EmbeddingErrorKind.BAD_RESPONSE, f"{name} embedding error: {status}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise EmbeddingError(
                EmbeddingErrorKind.BAD_RESPONSE, f"{name} returned invalid JSON"
            ) from e

    @abstractmethod
    def _build_request(self, text: str) -> tuple[str, dict, dict]:
        """Return (url, json body, extra headers) for one text."""
        ...

    @abstractmethod
    def _parse_embedding(self, payload: dict) -> list:
        """Pull the raw vector out of a decoded response body."""
        ...


class GeminiEmbeddingProvider(HTTPEmbeddingProvider):
    """Google Gemini ``embedContent`` endpoint."""

    provider_type = EmbeddingProviderType.GEMINI

    def __init__(self, api_key: str, model: str | None = None, **kwargs):
        super().__init__(model=model, **kwargs)
        self._api_key = api_key

    def _build_request(self, text: str) -> tuple[str, dict, dict]:
        url = f"{GEMINI_BASE_URL}/models/{self._model}:embedContent"
        body = {
            "model": f"models/{self._model}",
            "content": {"parts": [{"text": text}]},
        }
        # Key goes in a header so it never shows up in logged URLs
        return url, body, {"x-goog-api-key": self._api_key}

    def _parse_embedding(self, payload: dict) -> list:
        return payload["embedding"]["values"]


class OpenAIEmbeddingProvider(HTTPEmbeddingProvider):
    """OpenAI ``/v1/embeddings`` endpoint."""

    provider_type = EmbeddingProviderType.OPENAI

    def __init__(self, api_key: str, model: str | None = None, **kwargs):
        super().__init__(model=model, **kwargs)
        self._api_key = api_key

    def _build_request(self, text: str) -> tuple[str, dict, dict]:
        body = {"model": self._model, "input": text}
        return OPENAI_EMBEDDINGS_URL, body, {"Authorization": f"Bearer {self._api_key}"}

    def _parse_embedding(self, payload: dict) -> list:
        return payload["data"][0]["embedding"]


class OllamaEmbeddingProvider(HTTPEmbeddingProvider):
    """Local Ollama server ``/api/embeddings`` endpoint. Needs no API key."""

    provider_type = EmbeddingProviderType.OLLAMA

    def __init__(self, model: str | None = None, base_url: str = OLLAMA_BASE_URL, **kwargs):
        super().__init__(model=model, **kwargs)
        self._base_url = base_url.rstrip("/")

    def _build_request(self, text: str) -> tuple[str, dict, dict]:
        body = {"model": self._model, "prompt": text}
        return f"{self._base_url}/api/embeddings", body, {}

    def _parse_embedding(self, payload: dict) -> list:
        return payload["embedding"]
