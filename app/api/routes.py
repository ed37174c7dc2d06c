"""
API route aggregator: register endpoints; no logic — only delegate to handlers.
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api.handlers import handle_envelope
from app.core.config import AGENT_NAME, AGENT_ORGANIZATION, SERVICE_URL, SPEAKER_URI
from app.services.agent_service import BotAgent, create_agent

logger = logging.getLogger(__name__)
router = APIRouter()


@lru_cache(maxsize=1)
def get_agent() -> BotAgent:
    """One agent per process so every request shares the same rate limiter."""
    return create_agent(
        speaker_uri=SPEAKER_URI,
        service_url=SERVICE_URL,
        name=AGENT_NAME,
        organization=AGENT_ORGANIZATION,
    )


# --- System ---

@router.get("/health", tags=["system"])
def health():
    return {
        "status": "healthy",
        "agent": "github-technology-agent",
        "capabilities": ["technology trends", "github analysis", "development metrics"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# --- Open Floor ---

@router.post(
    "/",
    tags=["openfloor"],
    summary="Open Floor envelope endpoint",
    description="Accepts an Open Floor payload and returns the agent's reply envelope. 400 on an invalid payload, 500 on agent failure.",
)
async def post_envelope(request: Request, agent: BotAgent = Depends(get_agent)) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid OpenFloor payload", "details": ["Body is not valid JSON"]},
        )
    logger.info("[api:post_envelope] IN  body_keys=%s", list(body) if isinstance(body, dict) else type(body).__name__)
    return await handle_envelope(body, agent)
