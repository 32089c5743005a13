import logging
from typing import Any, Dict, Optional

import requests

from results import Failure, FailureKind, Result, Success

logger = logging.getLogger(__name__)

MET_API_BASE = "https://collectionapi.metmuseum.org/public/collection/v1"


class MetCollectionClient:
    """Thin client for the three Metropolitan Museum collection endpoints.

    Every call returns a ``Success`` or a ``Failure``; nothing raised by the
    transport escapes this class.
    """

    def __init__(self, base_url: str = MET_API_BASE, timeout: float = 10,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Result:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {str(e)}")
            return Failure(FailureKind.TRANSPORT, str(e))

        if not response.ok:
            msg = f"HTTP {response.status_code} from {url}"
            logger.error(msg)
            return Failure(FailureKind.TRANSPORT, msg, status_code=response.status_code)

        if not response.content:
            logger.error(f"Empty response from {url}")
            return Failure(FailureKind.EMPTY_RESPONSE, f"Empty response from {url}",
                           status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {str(e)}")
            return Failure(FailureKind.TRANSPORT, str(e), status_code=response.status_code)

        if not data:
            logger.error(f"Empty response from {url}")
            return Failure(FailureKind.EMPTY_RESPONSE, f"Empty response from {url}",
                           status_code=response.status_code)
        return Success(data)

    # Endpoint: /objects
    def list_object_ids(self) -> Result:
        """Fetch the full object ID listing."""
        url = f"{self.base_url}/objects"
        result = self._get_json(url)
        if not result.ok:
            return result

        object_ids = result.value.get('objectIDs') if isinstance(result.value, dict) else None
        if not object_ids:
            logger.error(f"No objectIDs in listing from {url}")
            return Failure(FailureKind.EMPTY_RESPONSE, f"No objectIDs in listing from {url}")
        return Success(list(object_ids))

    # Endpoint: /objects/[objectID]
    def fetch_object(self, object_id: int) -> Result:
        """Fetch one artwork record by its object ID."""
        logger.info(f"Fetching artwork objectID: {object_id} from Metropolitan Museum's API ...")
        return self._get_json(f"{self.base_url}/objects/{object_id}")

    # Endpoint: /search?hasImages=true&departmentId=6&q=example
    def search_objects(self, department_id: str, term: str) -> Result:
        """Search a department for objects with images matching a keyword."""
        logger.info(f"Searching departmentId: {department_id} for artwork search keyword: {term} ...")
        params = {
            'hasImages': 'true',
            'departmentId': department_id,
            'q': term
        }
        return self._get_json(f"{self.base_url}/search", params=params)
