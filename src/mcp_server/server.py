"""MCP server exposing document search and grounding-context tools."""

import asyncio
import json
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from config.settings import get_settings
from src.embedding.config import get_embedding_provider
from src.embedding.provider import EmbeddingProvider
from src.exceptions import ConfigurationError, DatabaseError, EmbeddingError
from src.models.search import IndexStats
from src.retrieval.context import retrieve_context, semantic_search
from src.vectorstore.sqlite_store import SQLiteVectorStore

logger = logging.getLogger(__name__)

MAX_QUERY_CHARS = 1000
MAX_TOP_K = 20

server = Server("omnirecall")
_store: SQLiteVectorStore | None = None
_embedding_provider: EmbeddingProvider | None = None


def _get_store() -> SQLiteVectorStore:
    global _store
    if _store is None:
        settings = get_settings()
        _store = SQLiteVectorStore(path=str(settings.db_path))
    return _store


def _get_embedding_provider() -> EmbeddingProvider:
    global _embedding_provider
    if _embedding_provider is None:
        _embedding_provider = get_embedding_provider()
    return _embedding_provider


def _json_content(payload) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload))]


@server.list_tools()
async def list_tools() -> list[Tool]:
    query_schema = {"type": "string", "description": "Natural language search query"}
    return [
        Tool(
            name="search_documents",
            description="Search indexed documents by semantic similarity.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": query_schema,
                    "top_k": {"type": "integer", "default": 5, "description": "Number of results (max 20)"},
                },
                "required": ["query"],
            },
        ),
        Tool(
            name="get_relevant_context",
            description="Assemble a token-budgeted grounding context for a question.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": query_schema,
                    "max_tokens": {"type": "integer", "default": 4000, "description": "Context token budget"},
                },
                "required": ["query"],
            },
        ),
        Tool(
            name="get_document",
            description="Retrieve an indexed document's chunks in order.",
            inputSchema={
                "type": "object",
                "properties": {
                    "document_id": {"type": "string", "description": "Unique document identifier"},
                },
                "required": ["document_id"],
            },
        ),
        Tool(
            name="get_index_stats",
            description="Report how many chunks are indexed.",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    handlers = {
        "search_documents": _handle_search_documents,
        "get_relevant_context": _handle_get_relevant_context,
        "get_document": _handle_get_document,
        "get_index_stats": _handle_get_index_stats,
    }
    handler = handlers.get(name)
    if handler is None:
        return [TextContent(type="text", text=f"Unknown tool: {name}")]

    try:
        return await handler(arguments or {})
    except EmbeddingError as e:
        logger.warning("Query embedding failed: %s", e)
        return _json_content({"error": e.error_code.lower(), "detail": str(e)})
    except DatabaseError as e:
        logger.error("Vector store failure: %s", e)
        return _json_content({"error": "database_error", "detail": str(e)})
    except ConfigurationError as e:
        logger.error("Server is misconfigured: %s", e)
        return _json_content({"error": "configuration_error", "detail": str(e)})


def _valid_query(arguments: dict) -> str | None:
    query = arguments.get("query", "")
    if not isinstance(query, str) or not query or len(query) > MAX_QUERY_CHARS:
        return None
    return query


def _positive_int(arguments: dict, key: str, default: int) -> int | None:
    """Read an optional positive integer argument; None when it is unusable."""
    value = arguments.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


async def _handle_search_documents(arguments: dict) -> list[TextContent]:
    query = _valid_query(arguments)
    if query is None:
        return _json_content({"error": "invalid_query"})
    top_k = _positive_int(arguments, "top_k", 5)
    if top_k is None:
        return _json_content({"error": "invalid_argument", "detail": "top_k must be a positive integer"})
    top_k = min(top_k, MAX_TOP_K)

    store = _get_store()
    if store.count() == 0:
        return _json_content({"error": "empty_index"})

    results = semantic_search(query, _get_embedding_provider(), store, top_k=top_k)
    return _json_content([
        {
            "chunk_id": r.chunk.id,
            "document_id": r.chunk.document_id,
            "document_name": r.chunk.document_name,
            "chunk_index": r.chunk.chunk_index,
            "content": r.chunk.content,
            "score": round(r.score, 4),
        }
        for r in results
    ])


async def _handle_get_relevant_context(arguments: dict) -> list[TextContent]:
    query = _valid_query(arguments)
    if query is None:
        return _json_content({"error": "invalid_query"})

    settings = get_settings()
    max_tokens = _positive_int(arguments, "max_tokens", settings.omnirecall_context_max_tokens)
    if max_tokens is None:
        return _json_content({"error": "invalid_argument", "detail": "max_tokens must be a positive integer"})

    context = retrieve_context(
        query,
        _get_embedding_provider(),
        _get_store(),
        max_tokens=max_tokens,
        search_k=settings.omnirecall_search_k,
        min_score=settings.omnirecall_min_relevance,
        min_results=settings.omnirecall_min_context_results,
    )
    return _json_content({"context": context, "grounded": bool(context)})


async def _handle_get_document(arguments: dict) -> list[TextContent]:
    doc_id = arguments.get("document_id", "")
    if not doc_id:
        return _json_content({"error": "not_found"})

    chunks = _get_store().get_document_chunks(doc_id)
    if not chunks:
        return _json_content({"error": "not_found"})

    return _json_content({
        "id": doc_id,
        "name": chunks[0].document_name,
        "chunk_count": len(chunks),
        "chunks": [
            {"chunk_index": c.chunk_index, "token_count": c.token_count, "content": c.content}
            for c in chunks
        ],
    })


async def _handle_get_index_stats(arguments: dict) -> list[TextContent]:
    stats = IndexStats(chunk_count=_get_store().count())
    return _json_content(stats.to_dict())


async def main():
    async with stdio_server() as (read, write):
        await server.run(read, write, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
