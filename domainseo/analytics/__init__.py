from .generator import TIME_FRAMES, DataPoint, date_labels, label_for
from .service import AnalyticsReport, AnalyticsService, fallback_analytics

__all__ = [
    'TIME_FRAMES', 'DataPoint', 'date_labels', 'label_for',
    'AnalyticsReport', 'AnalyticsService', 'fallback_analytics',
]
