from __future__ import annotations

import logging

from dlcity.schemas.centers import HealthOut
from dlcity.services.encoder import encode_model
from dlcity.services.errors import EncodeError
from fastapi import APIRouter, HTTPException, Response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthOut)
def health() -> Response:
    try:
        body = encode_model(HealthOut(status="ok"))
    except EncodeError:
        logger.exception("error encoding health check response")
        raise HTTPException(status_code=500, detail="Failed to create health check response")
    return Response(content=body, media_type="application/json")
