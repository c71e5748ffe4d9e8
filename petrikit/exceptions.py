from __future__ import annotations

from typing import Optional


class PetriError(RuntimeError):
    """Base class for all Petri net errors."""

    description = "Petri net error"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        msg = self.description if not detail else f"{self.description}: {detail}"
        super().__init__(msg)


class BipartitionViolation(PetriError):
    """Raised when an arc would connect two nodes of the same kind."""

    description = (
        "Bipartition Violation: arcs are only allowed from places to "
        "transitions or from transitions to places"
    )


class ObjectNotFound(PetriError, LookupError):
    """Raised when a handle does not resolve to a stored object."""

    description = "Object Not Found: no corresponding object in the net"


class PlaceNotFound(ObjectNotFound):
    """Raised when a place handle is out of range for the net."""

    description = "Place Not Found: no corresponding place in the net"


class TransitionNotFound(ObjectNotFound):
    """Raised when a transition handle is out of range for the net."""

    description = "Transition Not Found: no corresponding transition in the net"


class ArcNotFound(ObjectNotFound):
    """Raised when an arc handle is out of range for the net."""

    description = "Arc Not Found: no corresponding arc in the net"


class PageNotFound(ObjectNotFound):
    """Raised when a (sub)page of a PNML document cannot be located."""

    description = "Page Not Found: could not find (sub)page in the given path"


class NetNotFound(ObjectNotFound):
    """Raised when a referenced net is missing from a PNML document."""

    description = "Net Not Found: could not find the referenced net"


class InvalidData(PetriError, ValueError):
    """Raised when a value is used where it does not belong."""

    description = "Invalid Data: tried to use data in a place where it does not belong"


class WrongNodeKind(InvalidData):
    """Raised when narrowing a node handle to the other node kind."""


class CorruptedData(PetriError):
    """Raised when internal indices disagree with the stored arcs."""

    description = "Corrupted Data: stored objects are inconsistent with each other"


class XmlWriterError(PetriError):
    """Raised when the XML backend fails to serialise a document."""

    description = "XML Writer Error"
