"""
Domain exceptions for the recommendation pipeline.
"""


class RecommendationError(Exception):
    """Base exception for recommendation refresh errors."""
    pass


class ProfileNotFoundError(RecommendationError):
    """Raised when the profile to refresh does not exist or cannot be loaded."""

    def __init__(self, profile_id: str, detail: str = "Unknown"):
        self.profile_id = profile_id
        super().__init__(f"Profile not found: {detail}")


class CandidateFetchError(RecommendationError):
    """Raised when the candidate subsidy query fails."""

    def __init__(self, detail: str):
        super().__init__(f"Failed to fetch subsidies: {detail}")
