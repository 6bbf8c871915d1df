import time
import logging
from functools import wraps

logger = logging.getLogger(__name__)

def time_external_call(func):
    """A decorator to time Admin SDK and REST calls and log the duration."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration = time.perf_counter() - start_time
            logger.debug(f"External call '{func.__name__}' took {duration:.4f} seconds.")
    return wrapper
