"""
Public API for :mod:`petrikit`.

Build place/transition nets with :class:`~petrikit.Net.net.PetriNet`, query
their structure through preset/postset, and emit them as DOT, LoLA or PNML
with the writers in :mod:`petrikit.IO`.
"""

from __future__ import annotations

from typing import List

from .exceptions import (
    ArcNotFound,
    BipartitionViolation,
    CorruptedData,
    InvalidData,
    NetNotFound,
    ObjectNotFound,
    PageNotFound,
    PetriError,
    PlaceNotFound,
    TransitionNotFound,
    WrongNodeKind,
    XmlWriterError,
)
from .Net import (
    Arc,
    ArcRef,
    NodeKind,
    NodeRef,
    PetriNet,
    Place,
    PlaceRef,
    Transition,
    TransitionRef,
)
from .version import __version__

__all__: List[str] = [
    "PetriNet",
    "Place",
    "Transition",
    "Arc",
    "PlaceRef",
    "TransitionRef",
    "ArcRef",
    "NodeRef",
    "NodeKind",
    "PetriError",
    "BipartitionViolation",
    "ObjectNotFound",
    "PlaceNotFound",
    "TransitionNotFound",
    "ArcNotFound",
    "PageNotFound",
    "NetNotFound",
    "InvalidData",
    "WrongNodeKind",
    "CorruptedData",
    "XmlWriterError",
    "__version__",
]
