import logging
from typing import Any, Dict, Optional

from met_client import MetCollectionClient

logger = logging.getLogger(__name__)

# Met Museum Department IDs and Names
MET_DEPARTMENTS = {
    1: "The American Wing",
    3: "Ancient Near Eastern Art",
    4: "Arms and Armor",
    5: "Arts of Africa, Oceania, and the Americas",
    6: "Asian Art",
    7: "The Cloisters",
    8: "The Costume Institute",
    9: "Drawings and Prints",
    10: "Egyptian Art",
    11: "European Paintings",
    12: "European Sculpture and Decorative Arts",
    13: "Greek and Roman Art",
    14: "Islamic Art",
    15: "The Robert Lehman Collection",
    16: "The Libraries",
    17: "Medieval Art",
    18: "Musical Instruments",
    19: "Photographs",
    21: "Modern and Contemporary Art"
}


def department_name(department_id: Any) -> Optional[str]:
    """Display name for a department ID, or None if it is not a known one."""
    try:
        return MET_DEPARTMENTS.get(int(department_id))
    except (TypeError, ValueError):
        return None


def search_first_artwork(client: MetCollectionClient, department_id: str,
                         search_term: str) -> Dict[str, Any]:
    """Return the first matching artwork with the searched fields attached.

    When nothing matches, or either remote call fails, the result holds only
    ``searchedDepartment`` and ``searchedTerm``.
    """
    first_search_result = {}

    search = client.search_objects(department_id, search_term)
    object_ids = None
    if search.ok and isinstance(search.value, dict):
        object_ids = search.value.get('objectIDs')

    # Just pick the first result if the API has results for this term and department
    if object_ids:
        artwork = client.fetch_object(object_ids[0])
        if artwork.ok and isinstance(artwork.value, dict):
            first_search_result = dict(artwork.value)
        else:
            logger.warning(f"Could not load first search result objectID: {object_ids[0]}")
    else:
        logger.info(f"No matching artwork for departmentId: {department_id}, keyword: {search_term}")

    first_search_result['searchedDepartment'] = department_id
    first_search_result['searchedTerm'] = search_term
    return first_search_result
