from app.progress.services.aggregation_service import ProgressAggregator, RollupResult
from app.progress.services.progress_service import ProgressService

__all__ = ["ProgressAggregator", "ProgressService", "RollupResult"]
