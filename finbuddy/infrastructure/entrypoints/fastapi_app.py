"""
FastAPI entry point: thin HTTP surface over the chat pipeline.

build_app() is the Composition Root: it loads configuration, wires all
infrastructure adapters and passes them to create_app(). Tests call
create_app() directly with fakes.

Run locally:
    uvicorn finbuddy.infrastructure.entrypoints.fastapi_app:build_app --factory --reload --port 8000
"""

import dataclasses
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from finbuddy.application.chat.validator import validate_message
from finbuddy.application.services.news_service import NewsService
from finbuddy.application.services.response_generator import ResponseGenerator
from finbuddy.domain.entities.chat import ChatResponse, RefreshResult
from finbuddy.domain.ports.observability_port import IObservabilityHandler


class ChatRequest(BaseModel):
    message: str


def _chat_payload(response: ChatResponse) -> dict:
    payload = {"success": response.success, "message": response.message}
    if response.error is not None:
        payload["error"] = response.error
    return payload


def _refresh_payload(result: RefreshResult) -> dict:
    payload = {
        "success": result.success,
        "inserted": result.inserted,
        "deleted": result.deleted,
        "totalStored": result.total_stored,
    }
    if result.error is not None:
        payload["error"] = result.error
    return payload


def create_app(
    response_generator: ResponseGenerator,
    news_service: NewsService,
    observability: Optional[IObservabilityHandler] = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        response_generator.close()
        if observability is not None:
            observability.flush()

    app = FastAPI(title="FinBuddy API", lifespan=lifespan)

    @app.post("/chat")
    def chat(body: ChatRequest):
        """Answer a financial question; pipeline failures still return 200."""
        validation = validate_message(body.message)
        if not validation.is_valid:
            rejected = ChatResponse(success=False, message="", error=validation.error)
            return JSONResponse(status_code=400, content=_chat_payload(rejected))
        return _chat_payload(response_generator.generate(body.message))

    @app.post("/news/refresh")
    def refresh_news():
        """Run one news refresh cycle (normally triggered by a scheduler)."""
        return _refresh_payload(news_service.refresh())

    @app.get("/health")
    def health():
        status = news_service.get_health_status()
        return {"status": "ok", **jsonable_encoder(dataclasses.asdict(status))}

    return app


def build_app() -> FastAPI:
    load_dotenv()

    from finbuddy.infrastructure.config import get_settings
    from finbuddy.infrastructure.entrypoints.wiring import (
        build_news_service,
        build_observability,
        build_response_generator,
    )
    from finbuddy.infrastructure.logging_config import configure_logging
    from finbuddy.infrastructure.secrets.secrets_manager_adapter import bootstrap_secrets

    bootstrap_secrets()
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    news_service = build_news_service(settings)
    observability = build_observability(settings)
    generator = build_response_generator(settings, news_service, observability)

    return create_app(generator, news_service, observability)
