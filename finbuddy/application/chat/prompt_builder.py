"""
Prompt assembly: persona + optional news block + user message, bounded by a
global token budget.

Tokens are estimated at 4 characters per token. When the budget is exceeded the
system prompt is shortened; the user's message is never truncated.
"""

import logging
import math
from typing import Optional

from finbuddy.application.chat.prompts import (
    NEWS_CONTEXT_HEADING,
    NEWS_USAGE_INSTRUCTION,
    RESPONSE_CUE_MARKER,
    SYSTEM_PROMPT,
    USER_QUESTION_MARKER,
)
from finbuddy.application.chat.relevance import RelevanceClassifier
from finbuddy.domain.entities.chat import PromptContext, TokenUsage
from finbuddy.domain.entities.news import NewsRecord
from finbuddy.domain.errors import PromptTooLongError

logger = logging.getLogger(__name__)

_SENTENCE_ENDINGS = ".!?"
_ELLIPSIS = "..."


class PromptBuilder:
    MAX_PROMPT_TOKENS: int = 2000
    CHARS_PER_TOKEN: int = 4
    FORMAT_BUFFER_TOKENS: int = 100
    MAX_NEWS_ITEMS: int = 3
    # A sentence cut is only used when it keeps at least this share of the allowance.
    SENTENCE_CUT_RATIO: float = 0.8

    def __init__(
        self,
        classifier: Optional[RelevanceClassifier] = None,
        system_prompt: str = SYSTEM_PROMPT,
        max_prompt_tokens: Optional[int] = None,
    ) -> None:
        self._classifier = classifier or RelevanceClassifier()
        self._system_prompt = system_prompt
        self._max_prompt_tokens = max_prompt_tokens or self.MAX_PROMPT_TOKENS

    @property
    def classifier(self) -> RelevanceClassifier:
        return self._classifier

    @property
    def max_prompt_tokens(self) -> int:
        return self._max_prompt_tokens

    @classmethod
    def estimate_tokens(cls, text: Optional[str]) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / cls.CHARS_PER_TOKEN)

    def build_context(
        self,
        user_message: str,
        news_records: Optional[list[NewsRecord]] = None,
    ) -> PromptContext:
        """Assemble the PromptContext for *user_message*.

        Raises:
            PromptTooLongError: if the user message alone exhausts the budget.
        """
        system_prompt = self._system_prompt
        news_context = None

        if news_records and self._classifier.requires_context(user_message):
            news_context = self.format_news_context(news_records)
            system_prompt = self._with_news(news_context)

        return PromptContext(
            system_prompt=self._fit_to_budget(system_prompt, user_message),
            user_message=user_message.strip(),
            news_context=news_context,
        )

    def format_news_context(self, news_records: list[NewsRecord]) -> str:
        lines = []
        for index, record in enumerate(news_records[: self.MAX_NEWS_ITEMS], start=1):
            source = f" ({record.source})" if record.source else ""
            lines.append(f"{index}. {record.headline.strip()}{source}")
        return "\n".join(lines)

    def _with_news(self, news_context: str) -> str:
        return (
            f"{self._system_prompt}\n\n"
            f"{NEWS_CONTEXT_HEADING}\n{news_context}\n\n"
            f"{NEWS_USAGE_INSTRUCTION}"
        )

    def _fit_to_budget(self, system_prompt: str, user_message: str) -> str:
        available = (
            self._max_prompt_tokens
            - self.estimate_tokens(user_message)
            - self.FORMAT_BUFFER_TOKENS
        )
        if available <= 0:
            raise PromptTooLongError("User message is too long")

        if self.estimate_tokens(system_prompt) <= available:
            return system_prompt

        max_chars = available * self.CHARS_PER_TOKEN
        truncated = system_prompt[:max_chars]
        last_sentence_end = max(truncated.rfind(mark) for mark in _SENTENCE_ENDINGS)
        logger.warning(
            "System prompt truncated from %d to at most %d characters",
            len(system_prompt),
            max_chars,
        )

        if last_sentence_end > max_chars * self.SENTENCE_CUT_RATIO:
            return truncated[: last_sentence_end + 1]
        return truncated[: max_chars - len(_ELLIPSIS)] + _ELLIPSIS

    @staticmethod
    def format_prompt_for_model(context: PromptContext) -> str:
        """Render the fixed three-part skeleton handed to the generation provider."""
        return (
            f"{context.system_prompt}\n\n"
            f"{USER_QUESTION_MARKER} {context.user_message}\n\n"
            f"{RESPONSE_CUE_MARKER}"
        )

    def get_token_usage(self, context: PromptContext) -> TokenUsage:
        system_tokens = self.estimate_tokens(context.system_prompt)
        user_tokens = self.estimate_tokens(context.user_message)
        total = system_tokens + user_tokens
        return TokenUsage(
            system_prompt_tokens=system_tokens,
            user_message_tokens=user_tokens,
            total_tokens=total,
            within_limit=total <= self._max_prompt_tokens,
        )
