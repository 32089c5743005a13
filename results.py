from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class FailureKind(Enum):
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"


@dataclass(frozen=True)
class Success:
    value: Any
    ok = True


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    status_code: Optional[int] = None
    ok = False


Result = Union[Success, Failure]


def is_failure(result: Any) -> bool:
    """Return True for anything that is not a Success carrying a value."""
    return not isinstance(result, Success)
