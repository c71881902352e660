from .metric_delta import get_histogram_count, histogram_observes, metric_delta
from .site import FakeSite, make_response

__all__ = ["FakeSite", "get_histogram_count", "histogram_observes", "make_response", "metric_delta"]
