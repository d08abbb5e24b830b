"""
Application service: turn a user message into a sanitized ChatResponse.

This is the single seam where lower-level exceptions are converted into the
ChatResponse.error shape. The generation call is made once; retrying is left
to the caller.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

from finbuddy.application.chat.error_mapping import map_error
from finbuddy.application.chat.graph import build_chat_graph
from finbuddy.application.chat.prompt_builder import PromptBuilder
from finbuddy.application.services.news_service import NewsService
from finbuddy.domain.entities.chat import ChatResponse
from finbuddy.domain.entities.news import NewsRecord
from finbuddy.domain.ports.llm_port import ITextGenerator
from finbuddy.domain.ports.observability_port import IObservabilityHandler

logger = logging.getLogger(__name__)


class ResponseGenerator:
    GENERATION_TIMEOUT: float = 25.0
    CONNECTION_CHECK_MESSAGE: str = "Hello, can you help me with investing?"
    RUN_NAME: str = "finbuddy-chat"

    def __init__(
        self,
        text_generator: ITextGenerator,
        news_service: Optional[NewsService] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        observability: Optional[IObservabilityHandler] = None,
        generation_timeout: Optional[float] = None,
    ) -> None:
        """
        Args:
            text_generator:     ITextGenerator implementation (e.g. BedrockTextGenerator).
            news_service:       Loads context headlines when generate() gets no records.
            prompt_builder:     Defaults to a PromptBuilder with the FinBuddy persona; its
                                classifier also decides whether news is loaded.
            observability:      IObservabilityHandler whose trace config is attached to each run.
            generation_timeout: Seconds before the provider call counts as timed out.
        """
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._observability = observability
        self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="generation")
        self._graph = build_chat_graph(
            text_generator=text_generator,
            prompt_builder=self._prompt_builder,
            classifier=self._prompt_builder.classifier,
            executor=self._executor,
            generation_timeout=generation_timeout or self.GENERATION_TIMEOUT,
            news_service=news_service,
        )

    def generate(
        self,
        user_message: Any,
        news_records: Optional[list[NewsRecord]] = None,
    ) -> ChatResponse:
        """Run the chat pipeline for *user_message*.

        Args:
            user_message: The user's question; non-strings are rejected by validation.
            news_records: Newest-first context records. None lets the pipeline
                          load them itself when the question needs current news.
        """
        return self._run(user_message, news_records, tags=["chat"])

    def test_connection(self) -> bool:
        """Send a fixed sample question and report whether it succeeded."""
        response = self._run(self.CONNECTION_CHECK_MESSAGE, [], tags=["connection-check"])
        if not response.success:
            logger.warning("Response generator connection check failed: %s", response.error)
        return response.success

    def _run(
        self,
        user_message: Any,
        news_records: Optional[list[NewsRecord]],
        tags: list[str],
    ) -> ChatResponse:
        config: dict = {"run_name": self.RUN_NAME}
        if self._observability is not None:
            config.update(self._observability.trace_config(self.RUN_NAME, tags))

        try:
            final_state = self._graph.invoke(
                {"user_message": user_message, "news_records": news_records},
                config=config,
            )
        except Exception as exc:
            logger.exception("Chat pipeline failed")
            return ChatResponse(success=False, message="", error=map_error(exc))
        return final_state["response"]

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
