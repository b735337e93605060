"""Business logic services."""

from .recommendation_service import RecommendationService
