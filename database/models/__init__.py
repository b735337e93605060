from .base import Base, JSONType
from .profile import CompanyProfile
from .subsidy import Subsidy
from .recommendation import ProfileRecommendedSubsidy

__all__ = [
    'Base',
    'JSONType',
    'CompanyProfile',
    'Subsidy',
    'ProfileRecommendedSubsidy',
]
