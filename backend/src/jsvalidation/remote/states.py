"""Client-side state model for remote rule checks.

Each (field, rule) pair moves through:

    PENDING -> VALIDATING          on blur/change (begin)
    VALIDATING -> VALID | INVALID  on server response (resolve)
    VALIDATING -> ERROR            on network failure or token rejection (fail)
    any -> PENDING                 on a new edit of the field (edit)

Only the response to the latest request for a pair may move its state;
late responses are discarded. Retrying after ERROR is up to the user.
"""

from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import Any


class RemoteState(Enum):
    """State of one remote rule on one field."""

    PENDING = "pending"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"
    ERROR = "error"


@dataclass
class RemoteCheck:
    """Tracked state for a (field, rule) pair.

    Attributes:
        state: Current state
        request_id: Id of the latest request issued, or None
        value: Field value the latest request was issued for
    """

    state: RemoteState = RemoteState.PENDING
    request_id: int | None = None
    value: Any = None


class RemoteCheckTracker:
    """Tracks remote checks and enforces latest-response-wins ordering.

    Pairs are independent: a check stuck in VALIDATING never affects
    another field or rule.
    """

    def __init__(self):
        self._checks: dict[tuple[str, str], RemoteCheck] = {}
        self._requests: dict[int, tuple[str, str]] = {}
        self._ids = count(1)

    def state(self, field: str, rule: str) -> RemoteState:
        return self._check(field, rule).state

    def begin(self, field: str, rule: str, value: Any) -> int | None:
        """Issue a request for a PENDING pair.

        Returns:
            The request id, or None when the pair is not PENDING (a check
            is in flight or settled; only an edit makes it checkable again)
        """
        check = self._check(field, rule)
        if check.state is not RemoteState.PENDING:
            return None

        request_id = next(self._ids)
        check.state = RemoteState.VALIDATING
        check.request_id = request_id
        check.value = value
        self._requests[request_id] = (field, rule)
        return request_id

    def resolve(self, request_id: int, valid: bool) -> bool:
        """Apply a server response.

        Returns:
            False if the response is stale and was discarded
        """
        check = self._current(request_id)
        if check is None:
            return False
        check.state = RemoteState.VALID if valid else RemoteState.INVALID
        return True

    def fail(self, request_id: int) -> bool:
        """Record a network failure or token rejection for a request."""
        check = self._current(request_id)
        if check is None:
            return False
        check.state = RemoteState.ERROR
        return True

    def edit(self, field: str, value: Any) -> None:
        """The user changed a field: every rule on it goes back to PENDING.

        In-flight requests for the field become stale.
        """
        for (check_field, _), check in self._checks.items():
            if check_field == field:
                check.state = RemoteState.PENDING
                check.request_id = None
                check.value = value

    def _check(self, field: str, rule: str) -> RemoteCheck:
        key = (field, rule)
        if key not in self._checks:
            self._checks[key] = RemoteCheck()
        return self._checks[key]

    def _current(self, request_id: int) -> RemoteCheck | None:
        key = self._requests.pop(request_id, None)
        if key is None:
            return None
        check = self._checks[key]
        if check.request_id != request_id or check.state is not RemoteState.VALIDATING:
            return None
        return check
