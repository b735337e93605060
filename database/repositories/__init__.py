from database.repositories.base import BaseRepository
from database.repositories.profile import ProfileRepository
from database.repositories.subsidy import SubsidyRepository
from database.repositories.recommendation import RecommendationRepository

__all__ = [
    'BaseRepository',
    'ProfileRepository',
    'SubsidyRepository',
    'RecommendationRepository',
]
