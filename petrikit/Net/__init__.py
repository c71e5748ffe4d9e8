"""
Core data model of :mod:`petrikit`.

Re-exported names
-----------------
- Handles: :class:`PlaceRef`, :class:`TransitionRef`, :class:`ArcRef`,
  :class:`NodeRef`, :class:`NodeKind`
- Records: :class:`Place`, :class:`Transition`, :class:`Arc`
- :class:`PetriNet` and :func:`check_bipartition`
"""

from __future__ import annotations

from typing import List

from .refs import ArcRef, NodeKind, NodeRef, PlaceRef, TransitionRef
from .data import Arc, Place, Transition
from .validation import check_bipartition
from .net import PetriNet

__all__: List[str] = [
    "ArcRef",
    "NodeKind",
    "NodeRef",
    "PlaceRef",
    "TransitionRef",
    "Arc",
    "Place",
    "Transition",
    "check_bipartition",
    "PetriNet",
]
