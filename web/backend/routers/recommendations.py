#!/usr/bin/env python3
"""
Recommendation endpoints - recalculate, list and dismiss profile recommendations.
"""

import logging
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from ..dependencies import get_recommendation_service
from ..services.recommendation_service import RecommendationService
from ..models.requests import RecalculateRequest
from ..models.responses import (
    DismissResponse,
    ErrorResponse,
    RecalculateResponse,
    RecommendationsResponse,
)

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": str(exc)}
    )


@router.post(
    "/calculate",
    response_model=RecalculateResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@limiter.limit("30/minute")
def calculate_recommendations(
    request: Request,
    body: RecalculateRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """
    Recompute the recommendations of one profile.

    - full: scores every open subsidy
    - incremental: only subsidies created since the profile's last refresh

    Existing recommendations are never overwritten; only new pairs are added.
    """
    return service.recalculate(body.profile_id, body.mode)


@router.get("/{profile_id}", response_model=RecommendationsResponse)
def get_recommendations(
    profile_id: str,
    include_dismissed: bool = Query(default=False, description="Include dismissed recommendations"),
    service: RecommendationService = Depends(get_recommendation_service)
):
    """Get the stored recommendations of a profile, highest score first."""
    items = service.list_recommendations(profile_id, include_dismissed=include_dismissed)
    return RecommendationsResponse(
        profile_id=profile_id,
        count=len(items),
        recommendations=items
    )


@router.post("/{profile_id}/{subsidy_id}/dismiss", response_model=DismissResponse)
def dismiss_recommendation(
    profile_id: str,
    subsidy_id: str,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """Dismiss a recommendation so it no longer counts as active."""
    service.dismiss(profile_id, subsidy_id)
    return DismissResponse(
        profile_id=profile_id,
        subsidy_id=subsidy_id,
        message="Recommendation dismissed"
    )
