"""
Tests for provider error → user message mapping
"""
from concurrent.futures import CancelledError

import pytest

from finbuddy.application.chat.error_mapping import (
    BUSY_MESSAGE,
    CONFIGURATION_MESSAGE,
    GENERIC_MESSAGE,
    TIMEOUT_MESSAGE,
    UNAVAILABLE_MESSAGE,
    map_error,
)
from finbuddy.domain.errors import GenerationTimeout


@pytest.mark.parametrize(
    "exc, expected",
    [
        (GenerationTimeout("took 25s"), TIMEOUT_MESSAGE),
        (TimeoutError(), TIMEOUT_MESSAGE),
        (CancelledError(), TIMEOUT_MESSAGE),
        (RuntimeError("Request TIMEOUT from upstream"), TIMEOUT_MESSAGE),
        (RuntimeError("Rate limit exceeded"), BUSY_MESSAGE),
        (RuntimeError("Monthly quota reached"), BUSY_MESSAGE),
        (RuntimeError("Model temporarily unavailable"), UNAVAILABLE_MESSAGE),
        (RuntimeError("Service error 503"), UNAVAILABLE_MESSAGE),
        (RuntimeError("Invalid API key"), CONFIGURATION_MESSAGE),
        (RuntimeError("Authentication failed"), CONFIGURATION_MESSAGE),
        (RuntimeError("boom"), GENERIC_MESSAGE),
        (ValueError(""), GENERIC_MESSAGE),
    ],
)
def test_categories(exc, expected):
    assert map_error(exc) == expected


def test_priority_order():
    assert map_error(RuntimeError("rate limit service timeout")) == TIMEOUT_MESSAGE
    assert map_error(RuntimeError("quota service unavailable")) == BUSY_MESSAGE
    assert map_error(RuntimeError("service rejected api key")) == UNAVAILABLE_MESSAGE


def test_custom_rules():
    rules = [(lambda exc: isinstance(exc, KeyError), "missing")]
    assert map_error(KeyError("x"), rules) == "missing"
    assert map_error(RuntimeError("timeout"), rules) == GENERIC_MESSAGE
