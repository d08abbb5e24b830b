"""
LangGraph chat pipeline factory.

    validate ─┬─► reject
              └─► classify ─► fetch_context ─► build_prompt ─┬─► generate ─┬─► clean
                                                             └─► map_error ◄┘

Dependency-injection contract:
  - Receives ITextGenerator, PromptBuilder, RelevanceClassifier and an optional
    NewsService.
  - Never imports ChatBedrock, httpx, sqlalchemy or langfuse directly.
"""

import logging
from concurrent.futures import Executor
from concurrent.futures import TimeoutError as FuturesTimeoutError

from langgraph.graph import END, START, StateGraph

from finbuddy.application.chat.error_mapping import map_error
from finbuddy.application.chat.prompt_builder import PromptBuilder
from finbuddy.application.chat.relevance import RelevanceClassifier
from finbuddy.application.chat.response_cleaner import clean_response
from finbuddy.application.chat.state import ChatState
from finbuddy.application.chat.validator import validate_message
from finbuddy.domain.entities.chat import ChatResponse
from finbuddy.domain.errors import GenerationTimeout
from finbuddy.domain.ports.llm_port import ITextGenerator

logger = logging.getLogger(__name__)


def build_chat_graph(
    text_generator: ITextGenerator,
    prompt_builder: PromptBuilder,
    classifier: RelevanceClassifier,
    executor: Executor,
    generation_timeout: float,
    news_service=None,
):
    """Build and compile the chat pipeline graph.

    Args:
        text_generator:     ITextGenerator implementation, injected with no direct SDK reference.
        prompt_builder:     Assembles the bounded prompt.
        classifier:         Decides whether news context is needed.
        executor:           Runs the generation call so it can be abandoned on timeout.
        generation_timeout: Seconds to wait for the provider.
        news_service:       Optional NewsService used when the caller passes no records.

    Returns:
        Compiled LangGraph CompiledStateGraph ready for invoke() calls.
    """

    def validate(state: ChatState) -> dict:
        return {"validation": validate_message(state.get("user_message"))}

    def reject(state: ChatState) -> dict:
        error = state["validation"].error
        logger.info("Rejected chat message: %s", error)
        return {"response": ChatResponse(success=False, message="", error=error)}

    def classify(state: ChatState) -> dict:
        message = state["user_message"]
        return {
            "signal": classifier.analyze_type(message),
            "requires_context": classifier.requires_context(message),
        }

    def fetch_context(state: ChatState) -> dict:
        records = state.get("news_records")
        if records is None and state["requires_context"] and news_service is not None:
            records = news_service.get_latest_for_context()
        return {"news_records": list(records or [])}

    def build_prompt(state: ChatState) -> dict:
        try:
            context = prompt_builder.build_context(state["user_message"], state["news_records"])
        except Exception as exc:
            return {"error": exc}
        usage = prompt_builder.get_token_usage(context)
        if not usage.within_limit:
            logger.warning("Token usage exceeds limit: %s", usage)
        return {"context": context}

    def generate(state: ChatState) -> dict:
        prompt = prompt_builder.format_prompt_for_model(state["context"])
        future = executor.submit(text_generator.generate_text, prompt)
        try:
            return {"raw_response": future.result(timeout=generation_timeout)}
        except FuturesTimeoutError:
            future.cancel()
            return {
                "error": GenerationTimeout(
                    f"Generation request timeout after {generation_timeout:g}s"
                )
            }
        except Exception as exc:
            return {"error": exc}

    def clean(state: ChatState) -> dict:
        message = clean_response(state.get("raw_response"))
        return {"response": ChatResponse(success=True, message=message)}

    def map_failure(state: ChatState) -> dict:
        exc = state["error"]
        logger.error("AI response generation failed: %r", exc, exc_info=exc)
        return {"response": ChatResponse(success=False, message="", error=map_error(exc))}

    def after_validate(state: ChatState) -> str:
        return "classify" if state["validation"].is_valid else "reject"

    def after_build_prompt(state: ChatState) -> str:
        return "map_error" if state.get("error") else "generate"

    def after_generate(state: ChatState) -> str:
        return "map_error" if state.get("error") else "clean"

    workflow = StateGraph(ChatState)
    workflow.add_node("validate", validate)
    workflow.add_node("reject", reject)
    workflow.add_node("classify", classify)
    workflow.add_node("fetch_context", fetch_context)
    workflow.add_node("build_prompt", build_prompt)
    workflow.add_node("generate", generate)
    workflow.add_node("clean", clean)
    workflow.add_node("map_error", map_failure)

    workflow.add_edge(START, "validate")
    workflow.add_conditional_edges("validate", after_validate, ["classify", "reject"])
    workflow.add_edge("reject", END)
    workflow.add_edge("classify", "fetch_context")
    workflow.add_edge("fetch_context", "build_prompt")
    workflow.add_conditional_edges("build_prompt", after_build_prompt, ["generate", "map_error"])
    workflow.add_conditional_edges("generate", after_generate, ["clean", "map_error"])
    workflow.add_edge("clean", END)
    workflow.add_edge("map_error", END)
    return workflow.compile()
