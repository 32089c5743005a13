import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Settings read from the environment, with production defaults."""

    # Server
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 3000))

    # Metropolitan Museum collection API
    MET_API_BASE = os.environ.get(
        'MET_API_BASE', 'https://collectionapi.metmuseum.org/public/collection/v1')
    REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT', 10))

    # Artwork rotation
    ROTATION_INTERVAL = float(os.environ.get('ROTATION_INTERVAL', 10))
    ROTATION_ENABLED = _env_bool('ROTATION_ENABLED', True)

    # Throttling (POST /search only)
    SEARCH_RATE_LIMIT_WINDOW = int(os.environ.get('SEARCH_RATE_LIMIT_WINDOW', 60))
    SEARCH_RATE_LIMIT_MAX = int(os.environ.get('SEARCH_RATE_LIMIT_MAX', 500))
    SEARCH_RATE_LIMIT_MESSAGE = "Too many API requests, please try again later..."
    SEARCH_SLOW_DOWN_AFTER = int(os.environ.get('SEARCH_SLOW_DOWN_AFTER', 500))
    SEARCH_SLOW_DOWN_DELAY = float(os.environ.get('SEARCH_SLOW_DOWN_DELAY', 1.0))

    # Logging
    LOG_FILE = os.environ.get('LOG_FILE', 'metropolitan-museum-api.log')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
