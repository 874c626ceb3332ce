#Expose the high-level pipeline pieces:
#DispatchService (the "one object" entry point for callers)
#Settings (environment driven tunables)
#Statistics over served customers

from .config import DispatcherSettings, configure_logging, load_settings
from .service import CustomerNotFoundError, DispatchService
from .statistics import ServiceStatistics, compute_statistics

__all__ = [
    "DispatcherSettings",
    "configure_logging",
    "load_settings",
    "CustomerNotFoundError",
    "DispatchService",
    "ServiceStatistics",
    "compute_statistics",
]
