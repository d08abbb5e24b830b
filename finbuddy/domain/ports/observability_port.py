"""
Port (interface) for tracing chat pipeline runs.
Infrastructure adapters (e.g. LangfuseTracer) must implement this interface.
"""

from abc import ABC, abstractmethod


class IObservabilityHandler(ABC):
    @abstractmethod
    def trace_config(self, run_name: str, tags: list[str]) -> dict:
        """Return run-config entries (callbacks, metadata) that trace one graph invocation."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Send buffered traces before the process exits."""
        ...
