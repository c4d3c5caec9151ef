# src/flight_stats/utils/error_handler.py
from functools import wraps
from typing import Callable

from ..errors import FlightStatsError
from .logger import get_logger

logger = get_logger(__name__)


def handle_errors(func: Callable) -> Callable:
    """
    Funnel every failure of func into FlightStatsError.

    Errors from the pipeline already carry a readable message and pass
    through untouched. Anything else (google-auth transport errors, OAuth
    flow errors, a corrupt token file) is logged with its traceback and
    re-raised as FlightStatsError so the CLI can report it.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FlightStatsError:
            raise
        except Exception as e:
            logger.debug(f"Unexpected error in {func.__name__}", exc_info=True)
            raise FlightStatsError(f"{func.__name__}: {type(e).__name__}: {e}") from e
    return wrapper
