"""
API handlers: decode the Open Floor payload, call the agent, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.schemas.envelope import Payload
from app.services.agent_service import BotAgent

logger = logging.getLogger(__name__)


@dataclass
class DecodeResult:
    """Outcome of validating a raw payload. payload is set only when valid."""

    valid: bool
    errors: list[dict[str, Any]] = field(default_factory=list)
    payload: Payload | None = None


def decode_payload(raw: Any) -> DecodeResult:
    """Validate a decoded JSON body as an Open Floor payload."""
    try:
        payload = Payload.model_validate(raw)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        return DecodeResult(valid=False, errors=errors)
    return DecodeResult(valid=True, payload=payload)


async def handle_envelope(raw: Any, agent: BotAgent) -> JSONResponse:
    """
    Validate the payload (400 when invalid), let the agent answer it, and
    return the reply payload. Failures the agent does not catch become 500.
    """
    result = decode_payload(raw)
    if not result.valid:
        logger.error("Validation errors: %s", result.errors)
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid OpenFloor payload", "details": result.errors},
        )

    in_envelope = result.payload.open_floor
    logger.info("Processing technology research from: %s", in_envelope.sender.speaker_uri)
    try:
        out_envelope = await agent.process_envelope(in_envelope)
    except Exception as e:
        logger.exception("Error processing technology request")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(e) or "Unknown error"},
        )

    response = Payload(open_floor=out_envelope).to_wire()
    logger.info("[api:handle_envelope] OUT events=%d", len(out_envelope.events))
    return JSONResponse(content=response)
