"""
Graphviz DOT export.

Places are drawn as circles, transitions as boxes. Every arc with a positive
multiplicity becomes one edge; multiplicities above 1 are written as edge
labels. The output is plain text and does not require Graphviz to be
installed.
"""

from __future__ import annotations

import io
import logging
from typing import List, Optional, TextIO

from ..Net.net import PetriNet

LOGGER = logging.getLogger(__name__)

PLACE_PREFIX = "p_"
TRANSITION_PREFIX = "t_"
GRAPH_NAME = "petrinet"
INDENT = "    "

__all__ = ["to_dot_string", "write_dot", "dot_lines"]


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _node_line(
    node_id: str, shape: str, name: Optional[str], indent: str
) -> str:
    attrs = f"shape={_quote(shape)}"
    if name is not None:
        attrs += f" label={_quote(name)}"
    return f"{indent}{node_id} [{attrs}];"


def _edge_line(src: str, dst: str, mult: int, indent: str) -> str:
    if mult > 1:
        return f"{indent}{src} -> {dst} [label={_quote(str(mult))}];"
    return f"{indent}{src} -> {dst};"


def dot_lines(
    net: PetriNet,
    *,
    graph_name: str = GRAPH_NAME,
    place_prefix: str = PLACE_PREFIX,
    transition_prefix: str = TRANSITION_PREFIX,
    indent: str = INDENT,
) -> List[str]:
    """
    Render a net as DOT source lines (without line terminators).

    Transition -> place arcs are written before place -> transition arcs,
    each group in arc insertion order. Arcs with multiplicity 0 are skipped.

    :param net: Net to render.
    :type net: PetriNet
    :param graph_name: Name of the ``digraph``.
    :type graph_name: str, keyword-only
    :param place_prefix: Prefix of place node ids.
    :type place_prefix: str, keyword-only
    :param transition_prefix: Prefix of transition node ids.
    :type transition_prefix: str, keyword-only
    :param indent: Indentation of the statements inside the graph body.
    :type indent: str, keyword-only
    :returns: DOT source lines.
    :rtype: List[str]
    """
    lines = [f"digraph {graph_name} {{"]
    for ref, place in net.iter_places():
        lines.append(
            _node_line(f"{place_prefix}{ref.index}", "circle", place.name, indent)
        )
    for ref, trans in net.iter_transitions():
        lines.append(
            _node_line(f"{transition_prefix}{ref.index}", "box", trans.name, indent)
        )

    tp, pt = net.arcs_partitioned()
    skipped = 0
    for t, p, mult in tp:
        if mult <= 0:
            skipped += 1
            continue
        lines.append(
            _edge_line(
                f"{transition_prefix}{t.index}", f"{place_prefix}{p.index}", mult, indent
            )
        )
    for p, t, mult in pt:
        if mult <= 0:
            skipped += 1
            continue
        lines.append(
            _edge_line(
                f"{place_prefix}{p.index}", f"{transition_prefix}{t.index}", mult, indent
            )
        )
    lines.append("}")
    if skipped:
        LOGGER.debug("DOT export skipped %d arc(s) with multiplicity 0", skipped)
    return lines


def write_dot(net: PetriNet, stream: TextIO, **options) -> None:
    """
    Write a net as a DOT digraph to a text stream.

    :param net: Net to render.
    :type net: PetriNet
    :param stream: Writable text stream.
    :type stream: TextIO
    :param options: Keyword options forwarded to :func:`dot_lines`.
    """
    for line in dot_lines(net, **options):
        stream.write(line)
        stream.write("\n")


def to_dot_string(net: PetriNet, **options) -> str:
    """
    Render a net as a DOT digraph.

    :param net: Net to render.
    :type net: PetriNet
    :param options: Keyword options forwarded to :func:`dot_lines`.
    :returns: DOT source, newline terminated.
    :rtype: str
    """
    buf = io.StringIO()
    write_dot(net, buf, **options)
    return buf.getvalue()
