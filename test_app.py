import logging
import re

from app import create_app
from results import Failure, FailureKind, Success

ARTWORK = {
    'objectID': 436535,
    'title': 'Wheat Field with Cypresses',
    'artistDisplayName': 'Vincent van Gogh',
    'objectDate': '1889',
    'primaryImageSmall': 'https://images.metmuseum.org/CRDImages/ep/web-large/DT1567.jpg',
}


def test_home_shows_loading_before_first_tick(client, met_client):
    response = client.get('/')

    assert response.status_code == 200
    assert b'Loading artwork' in response.data
    assert b'Wheat Field' not in response.data


def test_home_shows_loading_after_failed_tick(app, client, met_client):
    met_client.list_object_ids.return_value = Failure(FailureKind.TRANSPORT, 'HTTP 503', 503)
    app.extensions['rotator'].tick()

    response = client.get('/')

    assert b'Loading artwork' in response.data


def test_home_shows_current_artwork(app, client, met_client):
    met_client.list_object_ids.return_value = Success([436535])
    met_client.fetch_object.return_value = Success(dict(ARTWORK))
    app.extensions['rotator'].tick()

    response = client.get('/')

    assert response.status_code == 200
    assert b'Wheat Field with Cypresses' in response.data
    assert b'Vincent van Gogh' in response.data


def test_search_form_encoded(client, met_client):
    met_client.search_objects.return_value = Success({'total': 1, 'objectIDs': [436535]})
    met_client.fetch_object.return_value = Success(dict(ARTWORK))

    response = client.post('/search', data={'departmentId': '11', 'searchTerm': 'cypresses'})

    assert response.status_code == 200
    assert b'Wheat Field with Cypresses' in response.data
    assert b'European Paintings' in response.data
    met_client.search_objects.assert_called_once_with('11', 'cypresses')


def test_search_json_body(client, met_client):
    met_client.search_objects.return_value = Success({'total': 1, 'objectIDs': [436535]})
    met_client.fetch_object.return_value = Success(dict(ARTWORK))

    response = client.post('/search', json={'departmentId': '11', 'searchTerm': 'cypresses'})

    assert response.status_code == 200
    assert b'Wheat Field with Cypresses' in response.data


def test_search_without_results(client, met_client):
    met_client.search_objects.return_value = Success({'total': 0, 'objectIDs': None})

    response = client.post('/search', data={'departmentId': '6', 'searchTerm': 'nothing'})

    assert response.status_code == 200
    assert b'No matching search results were found!' in response.data
    assert b'nothing' in response.data


def test_search_does_not_touch_rotation(app, client, met_client):
    met_client.search_objects.return_value = Success({'total': 1, 'objectIDs': [436535]})
    met_client.fetch_object.return_value = Success(dict(ARTWORK))

    client.post('/search', data={'departmentId': '11', 'searchTerm': 'cypresses'})

    assert app.extensions['rotator'].snapshot().loading
    met_client.list_object_ids.assert_not_called()


def test_error_route(client):
    response = client.get('/error-route')

    assert response.status_code == 500
    assert b'GET /error-route: Error: route is broken!' in response.data


def test_unmatched_routes_are_not_found(client):
    for response in (client.get('/no/such/page'), client.post('/nowhere'), client.get('/search')):
        assert response.status_code == 404
        assert b'Error! No matching route was found!' in response.data


def test_health(app, client, met_client):
    assert client.get('/health').get_json() == {'status': 'healthy', 'loading': True, 'cursor': 0}

    met_client.list_object_ids.return_value = Success([436535])
    met_client.fetch_object.return_value = Success(dict(ARTWORK))
    app.extensions['rotator'].tick()

    assert client.get('/health').get_json() == {'status': 'healthy', 'loading': False, 'cursor': 1}


def test_search_json_nulls_become_empty_strings(client, met_client):
    met_client.search_objects.return_value = Success({'total': 0, 'objectIDs': None})

    response = client.post('/search', json={'departmentId': None, 'searchTerm': None})

    assert response.status_code == 200
    assert b'None' not in response.data
    met_client.search_objects.assert_called_once_with('', '')


def test_search_json_numbers_become_strings(client, met_client):
    met_client.search_objects.return_value = Success({'total': 0, 'objectIDs': None})

    response = client.post('/search', json={'departmentId': 11, 'searchTerm': 1889})

    assert b'European Paintings' in response.data
    met_client.search_objects.assert_called_once_with('11', '1889')


LOG_LINE = re.compile(r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} - [\w.]+ - [A-Z]+ - ')


def test_logs_go_to_log_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    log_file = tmp_path / 'metropolitan-museum-api.log'
    try:
        create_app({'TESTING': True, 'ROTATION_ENABLED': False, 'LOG_FILE': str(log_file)})
        logging.getLogger('gallery').error('Fetching artwork failed')
        added = root.handlers[:]
        for handler in added:
            handler.flush()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)

    assert any(isinstance(handler, logging.FileHandler) for handler in added)
    lines = log_file.read_text().splitlines()
    assert lines
    assert all(LOG_LINE.match(line) for line in lines)
    assert lines[-1].endswith(' - gallery - ERROR - Fetching artwork failed')
