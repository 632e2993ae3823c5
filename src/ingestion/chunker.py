"""Sentence-based text chunker with approximate token accounting.

Text is split into sentence-like units, which are packed greedily into
chunks of at most ``max_tokens`` estimated tokens. A sentence is never split,
so one oversized sentence becomes a chunk of its own. Consecutive chunks
overlap by a trailing window of whole sentences.
"""

from src.models.chunk import ChunkDraft

SENTENCE_BOUNDARIES = frozenset(".!?\n")

# ~4 chars per token for English
CHARS_PER_TOKEN = 4

# Overlap is expressed in sentences: one sentence per 50 overlap tokens
OVERLAP_TOKENS_PER_SENTENCE = 50


def estimate_tokens(text: str) -> int:
    """Rough token count estimate, rounded up."""
    return (len(text) + CHARS_PER_TOKEN - 1) // CHARS_PER_TOKEN


def split_sentences(text: str) -> list[str]:
    """Split text into sentence units on ``. ! ?`` and newlines.

    The boundary character stays with its sentence. Units are stripped and
    empty ones are dropped; an unterminated tail counts as a unit.
    """
    sentences = []
    current: list[str] = []

    for char in text:
        current.append(char)
        if char in SENTENCE_BOUNDARIES:
            sentence = "".join(current).strip()
            if sentence:
                sentences.append(sentence)
            current = []

    tail = "".join(current).strip()
    if tail:
        sentences.append(tail)

    return sentences


def _overlap_sentences(overlap_tokens: int) -> int:
    return overlap_tokens // OVERLAP_TOKENS_PER_SENTENCE


def chunk_text(
    text: str,
    max_tokens: int = 512,
    overlap_tokens: int = 50,
) -> list[ChunkDraft]:
    """Split text into overlapping chunks of roughly ``max_tokens`` tokens.

    Args:
        text: Already-extracted document text.
        max_tokens: Target upper bound for a chunk's estimated token count.
        overlap_tokens: Approximate overlap between consecutive chunks. Every
            50 tokens carry one trailing sentence of the previous chunk over.

    Returns:
        Chunk drafts in document order. Empty input yields an empty list.
    """
    if max_tokens <= 0:
        raise ValueError("max_tokens must be > 0")
    if overlap_tokens < 0:
        raise ValueError("overlap_tokens must be >= 0")

    sentences = split_sentences(text)
    carry = _overlap_sentences(overlap_tokens)

    drafts = []
    buffer: list[str] = []
    buffer_tokens = 0

    for i, sentence in enumerate(sentences):
        sentence_tokens = estimate_tokens(sentence)

        if buffer and buffer_tokens + sentence_tokens > max_tokens:
            drafts.append(ChunkDraft(text=" ".join(buffer), token_count=buffer_tokens))

            # Seed the next chunk with the sentences just before this one
            buffer = sentences[max(0, i - carry):i] if carry else []
            buffer_tokens = sum(estimate_tokens(s) for s in buffer)

        buffer.append(sentence)
        buffer_tokens += sentence_tokens

    if buffer:
        drafts.append(ChunkDraft(text=" ".join(buffer), token_count=buffer_tokens))

    return drafts
