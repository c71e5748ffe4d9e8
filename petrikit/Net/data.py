from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .refs import NodeRef


@dataclass(frozen=True)
class Place:
    """
    A passive node holding tokens.

    :param name: Optional display name.
    :type name: Optional[str]
    :param marking: Number of tokens on the place (>= 0).
    :type marking: int
    """

    name: Optional[str] = None
    marking: int = 0


@dataclass(frozen=True)
class Transition:
    """
    An active node representing a firing rule.

    :param name: Optional display name.
    :type name: Optional[str]
    """

    name: Optional[str] = None


@dataclass(frozen=True)
class Arc:
    """
    A directed, weighted edge between a place and a transition.

    :param source: Node the arc starts from.
    :type source: NodeRef
    :param sink: Node the arc points to.
    :type sink: NodeRef
    :param mult: Multiplicity: tokens consumed/produced per firing. ``0``
                 means "no edge" for export purposes.
    :type mult: int
    :param name: Optional display name.
    :type name: Optional[str]
    """

    source: NodeRef
    sink: NodeRef
    mult: int = 1
    name: Optional[str] = None

    def is_consuming(self) -> bool:
        """Return ``True`` for place -> transition arcs."""
        return self.source.is_place

    def __repr__(self) -> str:
        src = f"{self.source.kind.value}_{self.source.index}"
        dst = f"{self.sink.kind.value}_{self.sink.index}"
        label = f" {self.name!r}" if self.name is not None else ""
        return f"Arc({src} -> {dst}, mult={self.mult}{label})"
