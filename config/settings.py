"""Application configuration management."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """OmniRecall application settings loaded from environment variables."""

    # Provider credentials
    gemini_api_key: str = ""
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # Embedding
    omnirecall_embedding_provider: str = "gemini"
    omnirecall_embedding_model: str = ""
    omnirecall_ollama_base_url: str = "http://localhost:11434"
    omnirecall_request_timeout: float = 30.0

    # LLM
    omnirecall_llm_provider: str = "anthropic"
    omnirecall_llm_model: str = "claude-sonnet-4-5-20250929"

    # Storage
    omnirecall_db_path: str = "./data/vectors.db"

    # Indexing
    omnirecall_chunk_size: int = 512
    omnirecall_chunk_overlap: int = 50

    # Context assembly
    omnirecall_context_max_tokens: int = 4000
    omnirecall_search_k: int = 10
    omnirecall_min_relevance: float = 0.5
    omnirecall_min_context_results: int = 3

    @property
    def db_path(self) -> Path:
        return Path(self.omnirecall_db_path)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
