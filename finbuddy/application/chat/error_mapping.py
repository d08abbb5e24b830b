"""
Maps provider exceptions onto short, user-facing messages.

Rules are evaluated in order and the first matching predicate wins. Most
providers only expose free-text errors, so predicates match on substrings of
the lower-cased exception message.
"""

from concurrent.futures import CancelledError
from typing import Callable

ErrorPredicate = Callable[[BaseException], bool]

TIMEOUT_MESSAGE = "The AI service is taking too long to respond. Please try again."
BUSY_MESSAGE = "The AI service is currently busy. Please try again in a few minutes."
UNAVAILABLE_MESSAGE = "The AI service is temporarily unavailable. Please try again later."
CONFIGURATION_MESSAGE = (
    "There is a configuration issue with the AI service. Please contact support."
)
GENERIC_MESSAGE = (
    "I encountered an unexpected error. Please try again, "
    "and if the problem persists, contact support."
)


def _mentions(*needles: str) -> ErrorPredicate:
    def predicate(exc: BaseException) -> bool:
        text = str(exc).lower()
        return any(needle in text for needle in needles)

    return predicate


def _is_timeout(exc: BaseException) -> bool:
    return isinstance(exc, (TimeoutError, CancelledError)) or _mentions("timeout")(exc)


ERROR_RULES: list[tuple[ErrorPredicate, str]] = [
    (_is_timeout, TIMEOUT_MESSAGE),
    (_mentions("rate limit", "quota"), BUSY_MESSAGE),
    (_mentions("unavailable", "service"), UNAVAILABLE_MESSAGE),
    (_mentions("api key", "authentication"), CONFIGURATION_MESSAGE),
]


def map_error(exc: BaseException, rules: list[tuple[ErrorPredicate, str]] = ERROR_RULES) -> str:
    for predicate, message in rules:
        if predicate(exc):
            return message
    return GENERIC_MESSAGE
