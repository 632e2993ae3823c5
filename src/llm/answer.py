"""Grounded question answering over an assembled document context."""

import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant. When document context is provided, answer "
    "from it and name the documents you relied on. If the context does not "
    "contain the answer, say so before answering from general knowledge."
)

CONTEXT_INSTRUCTION = "Use the following document context to answer the question:\n\n"


def build_prompt(question: str, context: str) -> str:
    """Prepend the grounding context (if any) to the user's question."""
    if not context:
        return question
    return f"{CONTEXT_INSTRUCTION}{context}\nQuestion: {question}"


def answer_question(question: str, context: str, llm: BaseChatModel) -> str:
    """Ask the chat model a question grounded in the given context."""
    messages = [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=build_prompt(question, context)),
    ]
    logger.info("Sending question to chat model (context: %d chars)", len(context))
    response = llm.invoke(messages)
    return response.content if isinstance(response.content, str) else str(response.content)
