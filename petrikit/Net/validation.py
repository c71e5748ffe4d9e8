from __future__ import annotations

import operator
from typing import Any, Optional

from ..exceptions import BipartitionViolation, InvalidData
from .refs import NodeRef

__all__ = ["check_bipartition", "as_count", "as_name"]


def check_bipartition(a: Any, b: Any) -> None:
    """
    Check that two endpoints are of different node kinds.

    Pure function without side effects; used by
    :meth:`~petrikit.Net.net.PetriNet.add_arc` before any mutation.

    :param a: First endpoint (``NodeRef``, ``PlaceRef`` or ``TransitionRef``).
    :type a: Any
    :param b: Second endpoint.
    :type b: Any
    :raises BipartitionViolation: If both endpoints are places or both are
                                  transitions.
    :raises InvalidData: If an endpoint is not a node handle.
    """
    if NodeRef.of(a).kind is NodeRef.of(b).kind:
        raise BipartitionViolation()


def as_count(value: Any, what: str) -> int:
    """
    Validate a token count or multiplicity.

    :param value: Candidate value.
    :type value: Any
    :param what: Name of the quantity, used in the error message.
    :type what: str
    :returns: ``value`` as a plain ``int``.
    :rtype: int
    :raises InvalidData: If ``value`` is not a non-negative integer.
    """
    if isinstance(value, bool):
        raise InvalidData(f"{what} must be an integer, got bool")
    if not isinstance(value, int):
        # numpy integers and the like expose __index__
        try:
            value = operator.index(value)
        except TypeError:
            raise InvalidData(
                f"{what} must be an integer, got {type(value).__name__}"
            ) from None
    if value < 0:
        raise InvalidData(f"{what} must be >= 0, got {value}")
    return int(value)


def as_name(value: Any) -> Optional[str]:
    """
    Validate a display name; ``None`` clears the name.

    :raises InvalidData: If ``value`` is neither ``None`` nor a ``str``.
    """
    if value is None or isinstance(value, str):
        return value
    raise InvalidData(f"name must be a str or None, got {type(value).__name__}")
