from .job import ImageReconciliationJob, ReconciliationSummary
from .worker import ImageReconciliationWorker

__all__ = [
    "ImageReconciliationJob",
    "ImageReconciliationWorker",
    "ReconciliationSummary",
]
