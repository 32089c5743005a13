import logging
import time
from functools import wraps

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from limits.storage import MemoryStorage

logger = logging.getLogger(__name__)

# Rate limit requests (applied to POST /search only)
limiter = Limiter(
    key_func=get_remote_address,
    strategy="moving-window",
    storage_uri="memory://",
)


def search_rate_limit() -> str:
    config = current_app.config
    return f"{config['SEARCH_RATE_LIMIT_MAX']} per {config['SEARCH_RATE_LIMIT_WINDOW']} seconds"


class SlowDown:
    """Delay requests past a per-client threshold instead of rejecting them.

    Within one window, request number ``n > SEARCH_SLOW_DOWN_AFTER`` waits
    ``(n - SEARCH_SLOW_DOWN_AFTER) * SEARCH_SLOW_DOWN_DELAY`` seconds before
    the view runs. Each app keeps its own counters.
    """

    def __init__(self, key_func=get_remote_address):
        self.key_func = key_func

    def init_app(self, app):
        app.extensions['slow_down'] = MemoryStorage()

    @staticmethod
    def delay_for(storage: MemoryStorage, key: str, delay_after: int, delay: float,
                  window: int) -> float:
        hits = storage.incr(f"slow-down/{key}", window)
        if hits <= delay_after:
            return 0.0
        return (hits - delay_after) * delay

    def __call__(self, view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            config = current_app.config
            key = self.key_func()
            delay = self.delay_for(current_app.extensions['slow_down'], key,
                                   config['SEARCH_SLOW_DOWN_AFTER'],
                                   config['SEARCH_SLOW_DOWN_DELAY'],
                                   config['SEARCH_RATE_LIMIT_WINDOW'])
            if delay > 0:
                logger.info(f"Slowing down {key} by {delay:.1f}s")
                time.sleep(delay)
            return view(*args, **kwargs)
        return wrapped


# Slow down requests (applied to POST /search only)
slow_down = SlowDown()
