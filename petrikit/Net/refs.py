"""
Opaque handles identifying places, transitions and arcs of a
:class:`~petrikit.Net.net.PetriNet`.

Handles wrap a plain arena index. They are small immutable values that can be
copied, compared, hashed and sorted freely. A handle is only meaningful for
the net that produced it; resolving a handle against another net is a caller
error that is **not** detected (it either resolves to an unrelated entity or
raises the matching ``*NotFound`` error when the index is out of range).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any, Tuple, Union

from ..exceptions import InvalidData, WrongNodeKind


def _check_index(owner: str, index: Any) -> None:
    # bool is an int subclass but never a meaningful index
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidData(f"{owner} index must be an int, got {type(index).__name__}")


@dataclass(frozen=True, order=True)
class PlaceRef:
    """
    Handle of a place.

    :param index: Position of the place in the net's place arena.
    :type index: int
    """

    index: int

    def __post_init__(self) -> None:
        _check_index("PlaceRef", self.index)

    @classmethod
    def from_node(cls, node: NodeRef) -> PlaceRef:
        """
        Narrow a node handle to a place handle.

        :param node: Node handle to narrow.
        :type node: NodeRef
        :returns: The wrapped place handle.
        :rtype: PlaceRef
        :raises WrongNodeKind: If ``node`` refers to a transition.
        """
        return NodeRef.of(node).as_place()


@dataclass(frozen=True, order=True)
class TransitionRef:
    """
    Handle of a transition.

    :param index: Position of the transition in the net's transition arena.
    :type index: int
    """

    index: int

    def __post_init__(self) -> None:
        _check_index("TransitionRef", self.index)

    @classmethod
    def from_node(cls, node: NodeRef) -> TransitionRef:
        """
        Narrow a node handle to a transition handle.

        :param node: Node handle to narrow.
        :type node: NodeRef
        :returns: The wrapped transition handle.
        :rtype: TransitionRef
        :raises WrongNodeKind: If ``node`` refers to a place.
        """
        return NodeRef.of(node).as_transition()


@dataclass(frozen=True, order=True)
class ArcRef:
    """
    Handle of an arc.

    :param index: Position of the arc in the net's arc arena.
    :type index: int
    """

    index: int

    def __post_init__(self) -> None:
        _check_index("ArcRef", self.index)


class NodeKind(Enum):
    """The two node kinds of a Petri net."""

    PLACE = "place"
    TRANSITION = "transition"


@total_ordering
@dataclass(frozen=True)
class NodeRef:
    """
    Tagged union over :class:`PlaceRef` and :class:`TransitionRef`.

    Used wherever an endpoint may be either kind of node. Narrow it back with
    :meth:`as_place` / :meth:`as_transition`, which fail with
    :class:`~petrikit.exceptions.WrongNodeKind` on a tag mismatch.

    Node handles sort places before transitions, then by index.

    :param ref: The wrapped typed handle.
    :type ref: Union[PlaceRef, TransitionRef]
    """

    ref: Union[PlaceRef, TransitionRef]

    def __post_init__(self) -> None:
        if not isinstance(self.ref, (PlaceRef, TransitionRef)):
            raise InvalidData(
                f"NodeRef wraps a PlaceRef or TransitionRef, got {type(self.ref).__name__}"
            )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def place(cls, index: int) -> NodeRef:
        """Build a node handle for the place at ``index``."""
        return cls(PlaceRef(index))

    @classmethod
    def transition(cls, index: int) -> NodeRef:
        """Build a node handle for the transition at ``index``."""
        return cls(TransitionRef(index))

    @classmethod
    def of(cls, handle: Any) -> NodeRef:
        """
        Coerce a node-like handle into a :class:`NodeRef`.

        :param handle: A ``NodeRef``, ``PlaceRef`` or ``TransitionRef``.
        :type handle: Any
        :returns: Node handle.
        :rtype: NodeRef
        :raises InvalidData: If ``handle`` is not a node handle (e.g. an ``ArcRef``).
        """
        if isinstance(handle, NodeRef):
            return handle
        if isinstance(handle, (PlaceRef, TransitionRef)):
            return cls(handle)
        raise InvalidData(f"expected a node handle, got {type(handle).__name__}")

    # ------------------------------------------------------------------
    # Tag inspection
    # ------------------------------------------------------------------
    @property
    def kind(self) -> NodeKind:
        return NodeKind.PLACE if isinstance(self.ref, PlaceRef) else NodeKind.TRANSITION

    @property
    def index(self) -> int:
        return self.ref.index

    @property
    def is_place(self) -> bool:
        return isinstance(self.ref, PlaceRef)

    @property
    def is_transition(self) -> bool:
        return isinstance(self.ref, TransitionRef)

    # ------------------------------------------------------------------
    # Narrowing
    # ------------------------------------------------------------------
    def as_place(self) -> PlaceRef:
        """
        Return the wrapped place handle.

        :raises WrongNodeKind: If this handle refers to a transition.
        """
        if isinstance(self.ref, PlaceRef):
            return self.ref
        raise WrongNodeKind("conversion from transition node to place reference")

    def as_transition(self) -> TransitionRef:
        """
        Return the wrapped transition handle.

        :raises WrongNodeKind: If this handle refers to a place.
        """
        if isinstance(self.ref, TransitionRef):
            return self.ref
        raise WrongNodeKind("conversion from place node to transition reference")

    def _sort_key(self) -> Tuple[int, int]:
        return (0 if self.is_place else 1, self.ref.index)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NodeRef):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __repr__(self) -> str:
        return f"NodeRef({self.ref!r})"
