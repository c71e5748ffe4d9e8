from __future__ import annotations

from typing import Any, Dict, Tuple

import networkx as nx

from .net import PetriNet
from .refs import NodeRef

__all__ = ["to_bipartite"]


def to_bipartite(
    net: PetriNet,
    *,
    place_prefix: str = "p_",
    transition_prefix: str = "t_",
    integer_ids: bool = False,
    include_isolated: bool = True,
    include_zero_weight: bool = False,
    bipartite_values: Tuple[int, int] = (0, 1),
) -> nx.DiGraph:
    """
    Export a net to a bipartite :class:`networkx.DiGraph`.

    Node ids:

    * ``integer_ids=False`` (default): places are ``f"{place_prefix}{i}"`` and
      transitions ``f"{transition_prefix}{j}"``.
    * ``integer_ids=True``: places are ``0..P-1`` and transitions ``P..P+T-1``.

    Nodes carry ``bipartite``, ``kind`` (``"place"``/``"transition"``),
    ``index`` and ``label`` (the name, or the node id when unnamed); places
    also carry ``marking``. Parallel arcs collapse into one edge whose
    ``weight`` is the summed multiplicity and whose ``arcs`` lists the arc
    indices.

    :param net: Net to convert.
    :type net: PetriNet
    :param place_prefix: Prefix for place node ids when ``integer_ids=False``.
    :type place_prefix: str, keyword-only
    :param transition_prefix: Prefix for transition node ids when ``integer_ids=False``.
    :type transition_prefix: str, keyword-only
    :param integer_ids: If ``True``, use consecutive integer node ids.
    :type integer_ids: bool, keyword-only
    :param include_isolated: If ``True``, keep nodes without incident arcs.
    :type include_isolated: bool, keyword-only
    :param include_zero_weight: If ``True``, keep edges whose summed weight is 0.
    :type include_zero_weight: bool, keyword-only
    :param bipartite_values: Bipartite attribute values for (places, transitions).
    :type bipartite_values: Tuple[int, int], keyword-only
    :returns: Directed bipartite graph.
    :rtype: nx.DiGraph
    """
    G = nx.DiGraph()
    place_val, trans_val = bipartite_values
    n_places = net.n_places()

    def node_id(node: NodeRef) -> Any:
        if integer_ids:
            return node.index if node.is_place else n_places + node.index
        prefix = place_prefix if node.is_place else transition_prefix
        return f"{prefix}{node.index}"

    isolated = set() if include_isolated else set(net.isolated_nodes())

    for ref, place in net.iter_places():
        node = NodeRef(ref)
        if node in isolated:
            continue
        nid = node_id(node)
        G.add_node(
            nid,
            bipartite=place_val,
            kind="place",
            index=ref.index,
            label=place.name if place.name is not None else str(nid),
            marking=place.marking,
        )

    for ref, trans in net.iter_transitions():
        node = NodeRef(ref)
        if node in isolated:
            continue
        nid = node_id(node)
        G.add_node(
            nid,
            bipartite=trans_val,
            kind="transition",
            index=ref.index,
            label=trans.name if trans.name is not None else str(nid),
        )

    edges: Dict[Tuple[Any, Any], Dict[str, Any]] = {}
    for aref, arc in net.iter_arcs():
        key = (node_id(arc.source), node_id(arc.sink))
        data = edges.setdefault(key, {"weight": 0, "arcs": []})
        data["weight"] += arc.mult
        data["arcs"].append(aref.index)

    for (u, v), data in edges.items():
        if data["weight"] == 0 and not include_zero_weight:
            continue
        G.add_edge(u, v, **data)
    return G
