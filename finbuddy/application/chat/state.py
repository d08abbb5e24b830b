"""
LangGraph chat pipeline state definition.
langgraph is the orchestration framework and is allowed in the application layer.
"""

from typing import Any, Optional, TypedDict

from finbuddy.domain.entities.chat import (
    ChatResponse,
    PromptContext,
    RelevanceSignal,
    ValidationResult,
)
from finbuddy.domain.entities.news import NewsRecord


class ChatState(TypedDict, total=False):
    """State threaded through every node of the chat pipeline.

    user_message:     raw input, possibly not a string.
    news_records:     caller-supplied records, or None to let fetch_context decide.
    error:            the exception that diverted the run to map_error.
    response:         the final ChatResponse, written by a terminal node.
    """

    user_message: Any
    news_records: Optional[list[NewsRecord]]
    validation: ValidationResult
    signal: RelevanceSignal
    requires_context: bool
    context: PromptContext
    raw_response: str
    error: Optional[BaseException]
    response: ChatResponse
