"""
Rule data for the relevance classifier.

The classifier's control flow lives in relevance.py; everything it matches
against is defined here so the rule set can be tested and extended without
touching the code that applies it. Matching is case-insensitive substring
search for vocabulary and re.search for patterns.

Generic words ("stock", "budget", ...) deliberately over-trigger: missing
context costs more user trust than adding a possibly irrelevant headline.
"""

import re
from dataclasses import dataclass, field


def _compile(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


MARKET_TERMS = (
    "market", "markets", "stock", "stocks", "share", "shares", "equity", "equities",
    "nifty", "sensex", "bse", "nse", "index", "indices",
)

TEMPORAL_TERMS = (
    "current", "today", "now", "recent", "latest", "new", "breaking",
    "this week", "this month", "yesterday", "tomorrow",
)

NEWS_TERMS = (
    "news", "update", "updates", "announcement", "report", "reports",
    "headline", "headlines", "happening", "event", "events",
)

CORPORATE_TERMS = (
    "earnings", "results", "quarterly", "ipo", "merger", "acquisition",
    "dividend", "split", "bonus", "rights issue",
    "company", "companies", "corporate", "business", "industry",
    "sector", "performance", "growth", "decline", "rise", "fall",
)

MACRO_TERMS = (
    "inflation", "gdp", "interest rate", "repo rate", "policy",
    "budget", "rbi", "sebi", "government",
)

CONTEXT_PATTERNS = _compile(
    r"what.*happening",
    r"what.*news",
    r"any.*update",
    r"latest.*on",
    r"how.*market",
    r"market.*doing",
    r"stock.*performing",
    r"should.*buy",
    r"should.*sell",
    r"good.*time.*invest",
    r"what.*current",
    r"how.*today",
    r"right.*now",
    r"at.*moment",
    r"how.*\w+.*stock",
    r"\w+.*share.*price",
    r"tell.*about.*\w+.*company",
)


@dataclass(frozen=True)
class SignalGroup:
    """One question-type detector: fires on its first keyword or pattern hit."""

    weight: float
    keywords: tuple[str, ...] = ()
    patterns: tuple[re.Pattern, ...] = ()

    def matches(self, text: str) -> bool:
        return any(k in text for k in self.keywords) or any(
            p.search(text) for p in self.patterns
        )


@dataclass(frozen=True)
class ClassifierRules:
    vocabulary: dict[str, tuple[str, ...]]
    patterns: tuple[re.Pattern, ...]
    market: SignalGroup
    educational: SignalGroup
    news: SignalGroup
    company: SignalGroup
    news_threshold: float = 0.3
    market_threshold: float = 0.4
    max_confidence: float = 1.0
    terms: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        flat = tuple(t.lower() for bucket in self.vocabulary.values() for t in bucket)
        object.__setattr__(self, "terms", flat)


DEFAULT_RULES = ClassifierRules(
    vocabulary={
        "market": MARKET_TERMS,
        "temporal": TEMPORAL_TERMS,
        "news": NEWS_TERMS,
        "corporate": CORPORATE_TERMS,
        "macro": MACRO_TERMS,
    },
    patterns=CONTEXT_PATTERNS,
    market=SignalGroup(
        weight=0.20,
        keywords=("market", "stock", "share", "nifty", "sensex", "trading", "investment"),
    ),
    educational=SignalGroup(
        weight=0.15,
        keywords=("how to", "what is", "explain", "learn", "understand", "basics", "beginner"),
    ),
    news=SignalGroup(
        weight=0.25,
        keywords=("news", "update", "latest", "current", "today", "recent"),
    ),
    company=SignalGroup(
        weight=0.20,
        patterns=_compile(r"tell.*about.*\w+", r"\w+.*company", r"\w+.*stock", r"\w+.*share"),
    ),
)
