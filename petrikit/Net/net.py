from __future__ import annotations

import copy
import logging
from collections import defaultdict
from dataclasses import replace
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from ..exceptions import (
    ArcNotFound,
    BipartitionViolation,
    CorruptedData,
    InvalidData,
    PlaceNotFound,
    TransitionNotFound,
)
from .data import Arc, Place, Transition
from .refs import ArcRef, NodeRef, PlaceRef, TransitionRef
from .validation import as_count, as_name, check_bipartition

LOGGER = logging.getLogger(__name__)

Neighbour = Union[PlaceRef, TransitionRef]
TPArc = Tuple[TransitionRef, PlaceRef, int]
PTArc = Tuple[PlaceRef, TransitionRef, int]


class PetriNet:
    """
    Place/transition net built incrementally from places, transitions and
    weighted arcs.

    The net owns three append-only arenas (places, transitions, arcs) and is
    the single mutable authority over them. Entities are never removed, so a
    handle obtained from the net stays valid for the net's whole lifetime.

    Adjacency is kept as an index ``node -> incident arc indices`` (in/out)
    updated on every :meth:`add_arc`. :meth:`preset` and :meth:`postset`
    group the incident arcs by neighbour and sum their **current**
    multiplicities on demand, so :meth:`set_multiplicity` never leaves a
    stale aggregated weight behind. A query costs O(k) for k incident arcs.

    The net is not synchronised: build it from one thread, then share it
    read-only.

    .. code-block:: python

        net = PetriNet()
        p0, p1 = net.add_place(), net.add_place(marking=3)
        t = net.add_transition()
        net.add_arc(p0, t)
        net.add_arc(t, p1, mult=2)
        net.postset(t)  # [(PlaceRef(index=1), 2)]
    """

    def __init__(self) -> None:
        self._places: List[Place] = []
        self._transitions: List[Transition] = []
        self._arcs: List[Arc] = []

        # quick indices: node -> arc indices, in arc insertion order
        self._in_arcs: Dict[NodeRef, List[int]] = defaultdict(list)
        self._out_arcs: Dict[NodeRef, List[int]] = defaultdict(list)

    # ------------------------------------------------------------------
    # Handle resolution
    # ------------------------------------------------------------------
    @staticmethod
    def _as_place_ref(handle: Any) -> PlaceRef:
        if isinstance(handle, PlaceRef):
            return handle
        if isinstance(handle, NodeRef):
            return handle.as_place()
        raise InvalidData(f"expected a place handle, got {type(handle).__name__}")

    @staticmethod
    def _as_transition_ref(handle: Any) -> TransitionRef:
        if isinstance(handle, TransitionRef):
            return handle
        if isinstance(handle, NodeRef):
            return handle.as_transition()
        raise InvalidData(
            f"expected a transition handle, got {type(handle).__name__}"
        )

    @staticmethod
    def _as_arc_ref(handle: Any) -> ArcRef:
        if isinstance(handle, ArcRef):
            return handle
        raise InvalidData(f"expected an arc handle, got {type(handle).__name__}")

    def _place_index(self, handle: Any) -> int:
        i = self._as_place_ref(handle).index
        if not 0 <= i < len(self._places):
            raise PlaceNotFound(f"index {i}")
        return i

    def _transition_index(self, handle: Any) -> int:
        i = self._as_transition_ref(handle).index
        if not 0 <= i < len(self._transitions):
            raise TransitionNotFound(f"index {i}")
        return i

    def _arc_index(self, handle: Any) -> int:
        i = self._as_arc_ref(handle).index
        if not 0 <= i < len(self._arcs):
            raise ArcNotFound(f"index {i}")
        return i

    def _require_node(self, node: NodeRef) -> None:
        if node.is_place:
            self._place_index(node.ref)
        else:
            self._transition_index(node.ref)

    # ------------------------------------------------------------------
    # Adding nodes and arcs
    # ------------------------------------------------------------------
    def add_place(self, name: Optional[str] = None, marking: int = 0) -> NodeRef:
        """
        Append a place.

        :param name: Optional display name; defaults to no name.
        :type name: Optional[str]
        :param marking: Initial token count; defaults to ``0``.
        :type marking: int
        :returns: Handle of the new place.
        :rtype: NodeRef
        :raises InvalidData: If ``name`` or ``marking`` is invalid; nothing is
                             appended in that case.
        """
        place = Place(name=as_name(name), marking=as_count(marking, "marking"))
        self._places.append(place)
        return NodeRef(PlaceRef(len(self._places) - 1))

    def add_transition(self, name: Optional[str] = None) -> NodeRef:
        """
        Append a transition.

        :param name: Optional display name; defaults to no name.
        :type name: Optional[str]
        :returns: Handle of the new transition.
        :rtype: NodeRef
        """
        self._transitions.append(Transition(name=as_name(name)))
        return NodeRef(TransitionRef(len(self._transitions) - 1))

    def add_arc(
        self,
        source: Any,
        sink: Any,
        mult: int = 1,
        name: Optional[str] = None,
    ) -> ArcRef:
        """
        Append an arc ``source -> sink``.

        Every check runs before the first mutation, so a failing call leaves
        the arc arena and the adjacency index untouched.

        :param source: Source node (``NodeRef``, ``PlaceRef`` or ``TransitionRef``).
        :type source: Any
        :param sink: Sink node, of the other kind.
        :type sink: Any
        :param mult: Multiplicity (>= 0); defaults to ``1``.
        :type mult: int
        :param name: Optional display name.
        :type name: Optional[str]
        :returns: Handle of the new arc.
        :rtype: ArcRef
        :raises InvalidData: If an endpoint is not a node handle or ``mult``/``name``
                             is invalid.
        :raises BipartitionViolation: If both endpoints are of the same kind.
        :raises PlaceNotFound: If a place endpoint is out of range.
        :raises TransitionNotFound: If a transition endpoint is out of range.
        """
        src = NodeRef.of(source)
        dst = NodeRef.of(sink)
        try:
            check_bipartition(src, dst)
        except BipartitionViolation:
            LOGGER.debug("Rejected arc %r -> %r: same node kind", src, dst)
            raise
        self._require_node(src)
        self._require_node(dst)
        arc = Arc(
            source=src,
            sink=dst,
            mult=as_count(mult, "multiplicity"),
            name=as_name(name),
        )

        self._arcs.append(arc)
        idx = len(self._arcs) - 1
        self._out_arcs[src].append(idx)
        self._in_arcs[dst].append(idx)
        return ArcRef(idx)

    # ------------------------------------------------------------------
    # In-place updates
    # ------------------------------------------------------------------
    def set_name(self, handle: Any, name: Optional[str]) -> None:
        """
        Set (or clear, with ``None``) the name of a node or an arc.

        :param handle: ``NodeRef``, ``PlaceRef``, ``TransitionRef`` or ``ArcRef``.
        :type handle: Any
        :param name: New name.
        :type name: Optional[str]
        :raises PlaceNotFound: If a place handle is out of range.
        :raises TransitionNotFound: If a transition handle is out of range.
        :raises ArcNotFound: If an arc handle is out of range.
        :raises InvalidData: If ``handle`` is not a handle or ``name`` not a string.
        """
        name = as_name(name)
        if isinstance(handle, ArcRef):
            i = self._arc_index(handle)
            self._arcs[i] = replace(self._arcs[i], name=name)
            return
        node = NodeRef.of(handle)
        if node.is_place:
            i = self._place_index(node.ref)
            self._places[i] = replace(self._places[i], name=name)
        else:
            i = self._transition_index(node.ref)
            self._transitions[i] = replace(self._transitions[i], name=name)

    def set_marking(self, place: Any, value: int) -> None:
        """
        Overwrite the marking of a place.

        :param place: ``PlaceRef`` or a place ``NodeRef``.
        :type place: Any
        :param value: New token count (>= 0).
        :type value: int
        :raises PlaceNotFound: If the handle is out of range.
        :raises WrongNodeKind: If a transition ``NodeRef`` is given.
        :raises InvalidData: If ``value`` is negative or not an integer.
        """
        i = self._place_index(place)
        self._places[i] = replace(self._places[i], marking=as_count(value, "marking"))

    def set_multiplicity(self, arc: Any, value: int) -> None:
        """
        Overwrite the multiplicity of an arc.

        Aggregated preset/postset weights are derived from the stored arcs at
        query time and therefore reflect the new value immediately.

        :param arc: Arc handle.
        :type arc: ArcRef
        :param value: New multiplicity (>= 0, ``0`` meaning "no edge").
        :type value: int
        :raises ArcNotFound: If the handle is out of range.
        :raises InvalidData: If ``value`` is negative or not an integer.
        """
        i = self._arc_index(arc)
        self._arcs[i] = replace(self._arcs[i], mult=as_count(value, "multiplicity"))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get_place(self, place: Any) -> Place:
        """Return the (immutable) place record behind ``place``."""
        return self._places[self._place_index(place)]

    def get_transition(self, transition: Any) -> Transition:
        """Return the (immutable) transition record behind ``transition``."""
        return self._transitions[self._transition_index(transition)]

    def get_arc(self, arc: Any) -> Arc:
        """Return the (immutable) arc record behind ``arc``."""
        return self._arcs[self._arc_index(arc)]

    def get_node(self, node: Any) -> Union[Place, Transition]:
        """Return the place or transition record behind a node handle."""
        node = NodeRef.of(node)
        if node.is_place:
            return self.get_place(node.ref)
        return self.get_transition(node.ref)

    def name(self, handle: Any) -> Optional[str]:
        """Return the name of a node or an arc (``None`` when unnamed)."""
        if isinstance(handle, ArcRef):
            return self.get_arc(handle).name
        return self.get_node(handle).name

    def marking(self, place: Any) -> int:
        return self.get_place(place).marking

    def multiplicity(self, arc: Any) -> int:
        return self.get_arc(arc).mult

    # ------------------------------------------------------------------
    # Sizes and iteration
    # ------------------------------------------------------------------
    def n_places(self) -> int:
        return len(self._places)

    def n_transitions(self) -> int:
        return len(self._transitions)

    def n_arcs(self) -> int:
        return len(self._arcs)

    def place_refs(self) -> List[PlaceRef]:
        return [PlaceRef(i) for i in range(len(self._places))]

    def transition_refs(self) -> List[TransitionRef]:
        return [TransitionRef(i) for i in range(len(self._transitions))]

    def arc_refs(self) -> List[ArcRef]:
        return [ArcRef(i) for i in range(len(self._arcs))]

    def iter_places(self) -> Iterator[Tuple[PlaceRef, Place]]:
        """
        Iterate over places in insertion order.

        :returns: Iterator of ``(handle, place)`` pairs.
        :rtype: Iterator[Tuple[PlaceRef, Place]]
        """
        for i, p in enumerate(self._places):
            yield PlaceRef(i), p

    def iter_transitions(self) -> Iterator[Tuple[TransitionRef, Transition]]:
        """
        Iterate over transitions in insertion order.

        :returns: Iterator of ``(handle, transition)`` pairs.
        :rtype: Iterator[Tuple[TransitionRef, Transition]]
        """
        for i, t in enumerate(self._transitions):
            yield TransitionRef(i), t

    def iter_arcs(self) -> Iterator[Tuple[ArcRef, Arc]]:
        """
        Iterate over arcs in insertion order.

        :returns: Iterator of ``(handle, arc)`` pairs.
        :rtype: Iterator[Tuple[ArcRef, Arc]]
        """
        for i, a in enumerate(self._arcs):
            yield ArcRef(i), a

    # ------------------------------------------------------------------
    # Preset / postset
    # ------------------------------------------------------------------
    def _aggregate(
        self, arc_indices: Sequence[int], endpoint: Callable[[Arc], NodeRef]
    ) -> List[Tuple[Neighbour, int]]:
        sums: Dict[Neighbour, int] = {}
        for i in arc_indices:
            arc = self._arcs[i]
            key = endpoint(arc).ref
            sums[key] = sums.get(key, 0) + arc.mult
        # neighbours share one kind, so refs sort by index
        return sorted(sums.items())

    def preset(self, node: Any) -> List[Tuple[Neighbour, int]]:
        """
        Neighbours with arcs directed **into** ``node``.

        For a place the neighbours are transitions, for a transition they are
        places. Parallel arcs from the same neighbour are merged and their
        multiplicities summed. Neighbours whose arcs all have multiplicity 0
        are still listed, with weight 0.

        :param node: ``NodeRef``, ``PlaceRef`` or ``TransitionRef``.
        :type node: Any
        :returns: ``(neighbour, aggregated multiplicity)`` pairs sorted by
                  neighbour index; empty when there is no incoming arc.
        :rtype: List[Tuple[Union[PlaceRef, TransitionRef], int]]
        :raises PlaceNotFound: If a place handle is out of range.
        :raises TransitionNotFound: If a transition handle is out of range.
        """
        node = NodeRef.of(node)
        self._require_node(node)
        return self._aggregate(self._in_arcs.get(node, ()), lambda a: a.source)

    def postset(self, node: Any) -> List[Tuple[Neighbour, int]]:
        """
        Neighbours with arcs directed **out of** ``node``.

        Same conventions as :meth:`preset`.

        :param node: ``NodeRef``, ``PlaceRef`` or ``TransitionRef``.
        :type node: Any
        :returns: ``(neighbour, aggregated multiplicity)`` pairs sorted by
                  neighbour index.
        :rtype: List[Tuple[Union[PlaceRef, TransitionRef], int]]
        """
        node = NodeRef.of(node)
        self._require_node(node)
        return self._aggregate(self._out_arcs.get(node, ()), lambda a: a.sink)

    def preset_arcs(self, node: Any) -> List[ArcRef]:
        """Incoming arcs of ``node`` in insertion order."""
        node = NodeRef.of(node)
        self._require_node(node)
        return [ArcRef(i) for i in self._in_arcs.get(node, ())]

    def postset_arcs(self, node: Any) -> List[ArcRef]:
        """Outgoing arcs of ``node`` in insertion order."""
        node = NodeRef.of(node)
        self._require_node(node)
        return [ArcRef(i) for i in self._out_arcs.get(node, ())]

    def arcs_partitioned(self) -> Tuple[List[TPArc], List[PTArc]]:
        """
        Split all arcs by direction in one linear pass.

        :returns: ``(tp, pt)`` where ``tp`` holds ``(transition, place, mult)``
                  for transition -> place arcs and ``pt`` holds
                  ``(place, transition, mult)`` for place -> transition arcs,
                  both in arc insertion order. Arcs are not merged.
        :rtype: Tuple[List[Tuple[TransitionRef, PlaceRef, int]],
                      List[Tuple[PlaceRef, TransitionRef, int]]]
        """
        tp: List[TPArc] = []
        pt: List[PTArc] = []
        for arc in self._arcs:
            if arc.source.is_transition:
                tp.append((arc.source.as_transition(), arc.sink.as_place(), arc.mult))
            else:
                pt.append((arc.source.as_place(), arc.sink.as_transition(), arc.mult))
        return tp, pt

    def isolated_nodes(self) -> List[NodeRef]:
        """
        Nodes without any incident arc, places first, then by index.

        :returns: Node handles.
        :rtype: List[NodeRef]
        """
        nodes = [NodeRef(p) for p in self.place_refs()]
        nodes += [NodeRef(t) for t in self.transition_refs()]
        return [
            n for n in nodes if not (self._in_arcs.get(n) or self._out_arcs.get(n))
        ]

    # ------------------------------------------------------------------
    # Consistency
    # ------------------------------------------------------------------
    def check_consistency(self) -> None:
        """
        Re-derive adjacency from the arc arena and compare with the index.

        :raises CorruptedData: If an arc endpoint does not resolve, an arc
                               connects two nodes of the same kind, or the
                               maintained adjacency index disagrees with the
                               arcs.
        """
        expected_in: Dict[NodeRef, List[int]] = defaultdict(list)
        expected_out: Dict[NodeRef, List[int]] = defaultdict(list)
        for i, arc in enumerate(self._arcs):
            if arc.source.kind is arc.sink.kind:
                raise CorruptedData(f"arc {i} connects two {arc.source.kind.value}s")
            for end in (arc.source, arc.sink):
                if end not in self:
                    raise CorruptedData(f"arc {i} refers to missing {end!r}")
            expected_out[arc.source].append(i)
            expected_in[arc.sink].append(i)

        def _strip(index: Dict[NodeRef, List[int]]) -> Dict[NodeRef, List[int]]:
            return {k: v for k, v in index.items() if v}

        if _strip(self._in_arcs) != dict(expected_in):
            raise CorruptedData("preset index does not match the arc list")
        if _strip(self._out_arcs) != dict(expected_out):
            raise CorruptedData("postset index does not match the arc list")

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------
    def copy(self) -> PetriNet:
        """
        Deep copy.

        Handles of this net resolve to equal entities in the copy.

        :returns: Independent copy of the net.
        :rtype: PetriNet
        """
        return copy.deepcopy(self)

    def __contains__(self, handle: object) -> bool:
        try:
            if isinstance(handle, ArcRef):
                self._arc_index(handle)
            else:
                self._require_node(NodeRef.of(handle))
        except (LookupError, InvalidData):
            return False
        return True

    def __len__(self) -> int:
        return len(self._places) + len(self._transitions)

    def __repr__(self) -> str:
        return (
            f"PetriNet(n_places={len(self._places)}, "
            f"n_transitions={len(self._transitions)}, n_arcs={len(self._arcs)})"
        )
