import logging
from typing import Any, Dict, Optional

from flask import Blueprint, Flask, current_app, jsonify, render_template, request
from flask_bootstrap import Bootstrap

from config import Config
from met_client import MetCollectionClient
from rotator import ArtworkRotator
from search import department_name, search_first_artwork
from throttle import limiter, search_rate_limit, slow_down

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

views = Blueprint('views', __name__)


def configure_logging(level: str, log_file: str):
    """Log to the console and to the application log file."""
    logging.basicConfig(level=level,
                        format=LOG_FORMAT,
                        datefmt=LOG_DATE_FORMAT,
                        handlers=[
                            logging.StreamHandler(),
                            logging.FileHandler(log_file, delay=True)
                        ])


def create_app(config_overrides: Optional[Dict[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app.config['LOG_LEVEL'], app.config['LOG_FILE'])
    Bootstrap(app)
    limiter.init_app(app)
    slow_down.init_app(app)

    client = MetCollectionClient(app.config['MET_API_BASE'], timeout=app.config['REQUEST_TIMEOUT'])
    rotator = ArtworkRotator(client, interval=app.config['ROTATION_INTERVAL'])
    app.extensions['met_client'] = client
    app.extensions['rotator'] = rotator

    app.register_blueprint(views)
    app.register_error_handler(404, not_found)
    app.register_error_handler(405, not_found)
    app.register_error_handler(429, too_many_requests)

    if app.config['ROTATION_ENABLED']:
        # Show a different artwork every ROTATION_INTERVAL seconds
        rotator.start()
    return app


# -------------------------------------------------------------------------------------
# Routes

@views.route('/')
def index():
    """Landing page: the current artwork, or a loading page before the first one arrives."""
    state = current_app.extensions['rotator'].snapshot()
    refresh_interval = current_app.config['ROTATION_INTERVAL']
    if state.loading:
        return render_template('loading.html', refreshInterval=refresh_interval)
    return render_template('layout.html', artwork=state.artwork, refreshInterval=refresh_interval)


def _form_field(payload, name: str) -> str:
    value = payload.get(name)
    return '' if value is None else str(value)


@views.route('/search', methods=['POST'])
@limiter.limit(search_rate_limit)
@slow_down
def search():
    """Search a department and show its first matching artwork."""
    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
    else:
        payload = request.form

    department_id = _form_field(payload, 'departmentId')
    search_term = _form_field(payload, 'searchTerm')

    first_search_result = search_first_artwork(current_app.extensions['met_client'],
                                               department_id, search_term)
    return render_template('layout.html',
                           firstSearchResult=first_search_result,
                           departmentName=department_name(department_id))


@views.route('/health')
def health():
    state = current_app.extensions['rotator'].snapshot()
    return jsonify({"status": "healthy", "loading": state.loading, "cursor": state.cursor})


@views.route('/error-route')
def error_route():
    """Always fails, to check how server errors are presented."""
    msg = 'GET /error-route: Error: route is broken!'
    logger.error(msg)
    return render_template('5xxerrors.html', msg=msg), 500


# -------------------------------------------------------------------------------------
# Error handling: 404 & 429

def not_found(error):
    msg = 'Error! No matching route was found!'
    logger.error(f"{msg} {request.method} {request.path}")
    return render_template('404.html', msg=msg), 404


def too_many_requests(error):
    msg = current_app.config['SEARCH_RATE_LIMIT_MESSAGE']
    logger.warning(f"Rate limit exceeded for {request.remote_addr}: {msg}")
    return render_template('429.html', msg=msg), 429


if __name__ == '__main__':
    app = create_app()
    logger.info(f"Metropolitan Museum's API is running on port {app.config['PORT']} ...")
    app.run(host=app.config['HOST'], port=app.config['PORT'])
