from .cache import AvailabilityCache
from .results_store import ResultsStore

__all__ = ['AvailabilityCache', 'ResultsStore']
