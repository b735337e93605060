from sqlalchemy.orm import Session

from database.repositories.profile import ProfileRepository
from database.repositories.subsidy import SubsidyRepository
from database.repositories.recommendation import RecommendationRepository


class RefreshRepository:
    """
    All repositories a recommendation refresh needs, bound to one Session.

    Attributes:
        profiles: ProfileStore
        subsidies: CandidateRepository
        recommendations: RecommendationStore
    """

    def __init__(self, db: Session):
        self.db = db
        self.profiles = ProfileRepository(db)
        self.subsidies = SubsidyRepository(db)
        self.recommendations = RecommendationRepository(db)
