#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Literal, Optional, Union


class RecalculateRequest(BaseModel):
    """Request to recompute the recommendations of one profile."""
    profile_id: str = Field(..., min_length=1, description="Company profile id")
    mode: Literal["full", "incremental"] = Field(
        default="full",
        description="full: score every open subsidy; incremental: only subsidies created since the last refresh"
    )


class CronRefreshRequest(BaseModel):
    """Request to run a batch refresh of stale profiles."""
    partition: Optional[Union[int, str]] = Field(
        default=None,
        description="Partition 0-6, 'auto' for today's partition, or null for all profiles"
    )
