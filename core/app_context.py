from dataclasses import dataclass
from typing import Callable, Optional

from core.config_loader import AppConfig
from core.interfaces import UnitOfWorkFactory
from core.scorer import ScoringEngine
from pipeline.orchestrator import RefreshOrchestrator
from pipeline.cron import PartitionedCronDriver


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    This eliminates duplicate wiring code and provides a single source
    of truth for service instantiation. DB access is obtained through
    uow_factory inside each profile refresh.
    """
    config: AppConfig
    uow_factory: UnitOfWorkFactory
    scoring_engine: ScoringEngine
    orchestrator: RefreshOrchestrator
    cron_driver: PartitionedCronDriver

    @classmethod
    def build(
        cls,
        config: AppConfig,
        uow_factory: Optional[UnitOfWorkFactory] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            uow_factory: Unit of work factory, defaults to the SQL refresh_uow
            sleep: Pause used between cron profiles, defaults to time.sleep

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        if uow_factory is None:
            from database.uow import refresh_uow
            uow_factory = refresh_uow

        scoring_engine = ScoringEngine(config.matching.scorer)
        orchestrator = RefreshOrchestrator(uow_factory, config.matching, engine=scoring_engine)

        cron_kwargs = {}
        if sleep is not None:
            cron_kwargs['sleep'] = sleep
        cron_driver = PartitionedCronDriver(uow_factory, orchestrator, config.cron, **cron_kwargs)

        return cls(
            config=config,
            uow_factory=uow_factory,
            scoring_engine=scoring_engine,
            orchestrator=orchestrator,
            cron_driver=cron_driver,
        )
