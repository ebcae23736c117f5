from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from .classifier import classify
from .dispatch import render_events
from .logs import configure_logging
from .models import Classification, RenderedEvent, Scope
from .settings import Settings, get_settings


settings = get_settings()
logger = configure_logging(settings.log_level)

app = FastAPI(title="LoRaWAN Events", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


class EventEnvelope(BaseModel):
    """Stream event as emitted by the stack; unknown keys pass through."""

    model_config = ConfigDict(extra="allow")

    name: Any = None
    time: Any = None
    identifiers: List[Dict[str, Any]] = Field(default_factory=list)
    data: Optional[Dict[str, Any]] = None

    def as_event(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ClassifyRequest(BaseModel):
    events: List[EventEnvelope]


class RenderRequest(BaseModel):
    scope: Scope
    widget: Optional[bool] = None
    events: List[EventEnvelope]


def require_api_key(
    x_api_key: Optional[str] = Header(default=None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> None:
    if not settings.api_key:
        return
    if not x_api_key:
        logger.info("Missing API key", extra={"status": 401})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "missing_api_key", "message": "Missing X-API-Key header"},
        )
    if x_api_key != settings.api_key:
        logger.info("Invalid API key", extra={"status": 403})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": "invalid_api_key", "message": "Invalid API key"},
        )


def check_batch_size(events: List[EventEnvelope], settings: Settings, path: str) -> None:
    if len(events) > settings.max_batch:
        logger.info("Batch too large", extra={"path": path, "status": 413})
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={
                "code": "batch_too_large",
                "message": f"At most {settings.max_batch} events per request",
            },
        )


@app.get("/health")
async def health() -> Dict[str, str]:
    """Health check endpoint returning static JSON."""
    return {"status": "ok"}


@app.post(
    "/v1/events/classify",
    response_model=List[Classification],
    dependencies=[Depends(require_api_key)],
)
async def classify_events(
    request: ClassifyRequest,
    settings: Settings = Depends(get_settings),
) -> List[Classification]:
    """Classify a batch of events by name and payload type."""
    check_batch_size(request.events, settings, "/v1/events/classify")
    results = [classify(envelope.as_event()) for envelope in request.events]
    logger.info("Events classified", extra={"path": "/v1/events/classify", "status": 200})
    return results


@app.post(
    "/v1/events/render",
    response_model=List[RenderedEvent],
    dependencies=[Depends(require_api_key)],
)
async def render(
    request: RenderRequest,
    settings: Settings = Depends(get_settings),
) -> List[RenderedEvent]:
    """Classify a batch of events and extract their display fields for one scope."""
    check_batch_size(request.events, settings, "/v1/events/render")
    widget = settings.widget_mode if request.widget is None else request.widget
    results = render_events(
        (envelope.as_event() for envelope in request.events), request.scope, widget=widget
    )
    logger.info(
        "Events rendered",
        extra={"path": "/v1/events/render", "scope": request.scope.value, "status": 200},
    )
    return results
