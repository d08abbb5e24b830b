"""
Tests for the Langfuse tracer (callback handler replaced, no network)
"""
import langfuse.langchain

from finbuddy.infrastructure.observability.langfuse_adapter import LangfuseTracer


class FakeCallbackHandler:
    pass


def test_trace_config_carries_run_name_and_tags(monkeypatch):
    monkeypatch.setattr(langfuse.langchain, "CallbackHandler", FakeCallbackHandler)
    tracer = LangfuseTracer()

    config = tracer.trace_config("finbuddy-chat", ["connection-check"])

    assert config["run_name"] == "finbuddy-chat"
    assert len(config["callbacks"]) == 1
    assert isinstance(config["callbacks"][0], FakeCallbackHandler)
    assert config["metadata"] == {"langfuse_tags": ["finbuddy", "connection-check"]}
