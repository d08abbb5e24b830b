"""
Rule-based relevance classifier: does this question need current news?

Two independent signals are OR-ed together: a lexical vocabulary hit and an
interrogative pattern hit. A weighted question-type analysis can also tip the
decision for news or market questions that neither signal caught.
"""

from typing import Any

from finbuddy.application.chat.relevance_rules import DEFAULT_RULES, ClassifierRules
from finbuddy.domain.entities.chat import RelevanceSignal


class RelevanceClassifier:
    def __init__(self, rules: ClassifierRules = DEFAULT_RULES) -> None:
        self._rules = rules

    @staticmethod
    def _normalize(text: Any) -> str:
        if not text or not isinstance(text, str):
            return ""
        return text.lower().strip()

    def matches_vocabulary_or_pattern(self, text: Any) -> bool:
        normalized = self._normalize(text)
        if not normalized:
            return False
        if any(term in normalized for term in self._rules.terms):
            return True
        return any(pattern.search(normalized) for pattern in self._rules.patterns)

    def analyze_type(self, text: Any) -> RelevanceSignal:
        """Score the question type; confidence is the capped sum of fired group weights."""
        normalized = self._normalize(text)
        if not normalized:
            return RelevanceSignal()

        rules = self._rules
        fired = {
            "market": rules.market.matches(normalized),
            "educational": rules.educational.matches(normalized),
            "news": rules.news.matches(normalized),
            "company": rules.company.matches(normalized),
        }
        weights = {
            "market": rules.market.weight,
            "educational": rules.educational.weight,
            "news": rules.news.weight,
            "company": rules.company.weight,
        }
        confidence = sum(weights[name] for name, hit in fired.items() if hit)

        return RelevanceSignal(
            is_market_query=fired["market"],
            is_educational_query=fired["educational"],
            is_news_query=fired["news"],
            is_company_specific=fired["company"],
            confidence=round(min(confidence, rules.max_confidence), 4),
        )

    def requires_context(self, text: Any) -> bool:
        if self.matches_vocabulary_or_pattern(text):
            return True
        signal = self.analyze_type(text)
        return (signal.is_news_query and signal.confidence > self._rules.news_threshold) or (
            signal.is_market_query and signal.confidence > self._rules.market_threshold
        )
