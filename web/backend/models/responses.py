#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union


class RecalculateResponse(BaseModel):
    """Outcome of a profile recalculation."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "profile_id": "3f2b6a1c-2c1d-4a8e-9b7f-0e5d2c4a1b9e",
                "total_matches": 42,
                "new_matches": 5,
                "processing_time_ms": 812,
                "mode": "incremental"
            }
        }
    )

    profile_id: str
    total_matches: int = Field(ge=0)
    new_matches: int = Field(ge=0)
    processing_time_ms: int = Field(ge=0)
    mode: str


class ErrorResponse(BaseModel):
    """Fatal refresh error."""
    error: str
    processing_time_ms: int = 0


class CronRefreshResults(BaseModel):
    success: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)


class CronRefreshResponse(BaseModel):
    """Outcome of a cron batch refresh."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "profiles_processed": 3,
                "partition": 3,
                "total_partitions": 7,
                "results": {"success": 2, "failed": 1, "errors": ["b1e2...: Failed to fetch subsidies: timeout"]},
                "processing_time_ms": 2410
            }
        }
    )

    success: bool = True
    message: Optional[str] = None
    profiles_processed: int = Field(ge=0)
    partition: Union[int, str]
    total_partitions: int
    results: CronRefreshResults
    processing_time_ms: int = Field(ge=0)


class RecommendationItem(BaseModel):
    """A stored recommendation."""
    subsidy_id: str
    title: Optional[str] = None
    agency: Optional[str] = None
    match_score: int = Field(ge=0, le=100)
    match_reasons: List[str] = Field(default_factory=list)
    first_matched_at: Optional[datetime] = None
    dismissed_at: Optional[datetime] = None
    deadline: Optional[date] = None
    amount_max: Optional[float] = None


class RecommendationsResponse(BaseModel):
    """Recommendations of a profile, highest score first."""
    success: bool = True
    profile_id: str
    count: int
    recommendations: List[RecommendationItem]


class DismissResponse(BaseModel):
    success: bool = True
    profile_id: str
    subsidy_id: str
    message: str
