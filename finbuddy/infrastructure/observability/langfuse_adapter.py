"""
Infrastructure adapter: Langfuse → IObservabilityHandler.

Each chat request becomes one Langfuse trace via the LangChain callback
handler; tags travel in run metadata under the "langfuse_tags" key.

Langfuse is imported lazily so the module loads without LANGFUSE_* variables.
Secrets loaded by SecretsManagerAdapter.load_into_env() must be in place
before the tracer is constructed.
"""

from typing import Optional

from finbuddy.domain.ports.observability_port import IObservabilityHandler


class LangfuseTracer(IObservabilityHandler):
    def __init__(self, default_tags: Optional[list[str]] = None) -> None:
        from langfuse.langchain import CallbackHandler
        self._handler = CallbackHandler()
        self._default_tags = list(default_tags or ["finbuddy"])

    def trace_config(self, run_name: str, tags: list[str]) -> dict:
        return {
            "run_name": run_name,
            "callbacks": [self._handler],
            "metadata": {"langfuse_tags": [*self._default_tags, *tags]},
        }

    def flush(self) -> None:
        from langfuse import get_client
        get_client().flush()
