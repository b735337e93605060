#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from fastapi import Depends

from core.app_context import AppContext
from core.config_loader import AppConfig
from .config import get_config
from .services.recommendation_service import RecommendationService


@lru_cache()
def _build_app_context() -> AppContext:
    return AppContext.build(get_config())


def get_app_config() -> AppConfig:
    """FastAPI dependency returning the application configuration."""
    return get_config()


def get_app_context() -> AppContext:
    """
    FastAPI dependency returning the wired application context.

    Built lazily on first use so importing the app does not open a
    database connection. Tests override this dependency.
    """
    return _build_app_context()


def get_recommendation_service(ctx: AppContext = Depends(get_app_context)) -> RecommendationService:
    """
    FastAPI dependency that yields the recommendation service.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(service: RecommendationService = Depends(get_recommendation_service)):
            ...
    """
    return RecommendationService(ctx)
