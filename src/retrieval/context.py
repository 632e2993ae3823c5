"""Semantic search and grounding-context assembly.

The assembled context is a plain string meant to be prepended to a user's
prompt. It is bounded by an estimated token budget and cut short once enough
results are in and the remaining ones fall below a relevance threshold.
"""

import logging

from src.embedding.provider import EmbeddingProvider
from src.models.search import SearchResult
from src.vectorstore.sqlite_store import SQLiteVectorStore

logger = logging.getLogger(__name__)

CONTEXT_PREAMBLE = "Relevant document context:\n\n"

DEFAULT_MAX_TOKENS = 4000
DEFAULT_SEARCH_K = 10

# Below this score a result is only used to fill the first few slots
MIN_RELEVANCE = 0.5
MIN_CONTEXT_RESULTS = 3

CHARS_PER_TOKEN = 4


def context_tokens(content: str) -> int:
    """Estimate a chunk's cost in the context budget (rounded down)."""
    return len(content) // CHARS_PER_TOKEN


def format_result(result: SearchResult) -> str:
    """Render one result as a header line followed by the chunk content."""
    header = f"--- {result.chunk.document_name} (relevance: {result.score:.2f}) ---\n"
    return f"{header}{result.chunk.content}\n\n"


def build_context(
    results: list[SearchResult],
    max_tokens: int = DEFAULT_MAX_TOKENS,
    min_score: float = MIN_RELEVANCE,
    min_results: int = MIN_CONTEXT_RESULTS,
) -> str:
    """Assemble search results, best first, into a token-budgeted context.

    Stops at the first result that would overflow ``max_tokens`` (no partial
    chunks), and once ``min_results`` results are included, at the first
    result scoring below ``min_score``. Returns "" when nothing was included.
    """
    parts = []
    total_tokens = 0

    for result in results:
        if len(parts) >= min_results and result.score < min_score:
            break

        tokens = context_tokens(result.chunk.content)
        if total_tokens + tokens > max_tokens:
            break

        parts.append(format_result(result))
        total_tokens += tokens

    if not parts:
        return ""

    logger.debug("Built context from %d chunks (~%d tokens)", len(parts), total_tokens)
    return CONTEXT_PREAMBLE + "".join(parts)


def semantic_search(
    query: str,
    embedding_provider: EmbeddingProvider,
    store: SQLiteVectorStore,
    top_k: int = 5,
) -> list[SearchResult]:
    """Embed a query and return the top_k most similar stored chunks.

    Raises:
        EmbeddingError: If the query itself cannot be embedded.
    """
    query_embedding = embedding_provider.embed_query(query)
    return store.search(query_embedding, top_k=top_k)


def retrieve_context(
    query: str,
    embedding_provider: EmbeddingProvider,
    store: SQLiteVectorStore,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    search_k: int = DEFAULT_SEARCH_K,
    min_score: float = MIN_RELEVANCE,
    min_results: int = MIN_CONTEXT_RESULTS,
) -> str:
    """Build the grounding context for a query.

    An empty string means no grounding is available and is a valid answer,
    not an error.

    Raises:
        EmbeddingError: If the query itself cannot be embedded.
    """
    results = semantic_search(query, embedding_provider, store, top_k=search_k)
    if not results:
        logger.info("No indexed chunks matched the query")
        return ""

    return build_context(
        results,
        max_tokens=max_tokens,
        min_score=min_score,
        min_results=min_results,
    )
