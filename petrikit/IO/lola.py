"""
LoLA model checker input format.

.. code-block:: text

    PLACE
        p_0,
        p_1;

    MARKING
        p_1 : 3;

    TRANSITION t_0
      CONSUME
        p_0 : 1;
      PRODUCE
        p_1 : 2;

CONSUME lists the transition's preset and PRODUCE its postset, with parallel
arcs merged. Entries whose aggregated multiplicity is 0 are left out.
"""

from __future__ import annotations

import io
import logging
from typing import List, Sequence, TextIO, Tuple

from ..Net.net import PetriNet
from ..Net.refs import PlaceRef

LOGGER = logging.getLogger(__name__)

PLACE_PREFIX = "p_"
TRANSITION_PREFIX = "t_"
INDENT = "    "
SECTION_INDENT = "  "

__all__ = ["to_lola_string", "write_lola", "lola_lines"]


def _weighted_list(
    entries: Sequence[Tuple[str, int]], indent: str
) -> List[str]:
    # comma separated, last entry terminated by a semicolon
    out = [f"{indent}{ident} : {value}," for ident, value in entries]
    out[-1] = out[-1][:-1] + ";"
    return out


def _section(
    keyword: str,
    arcs: Sequence[Tuple[PlaceRef, int]],
    place_prefix: str,
    indent: str,
) -> List[str]:
    entries = [(f"{place_prefix}{p.index}", m) for p, m in arcs if m > 0]
    if not entries:
        return [f"{SECTION_INDENT}{keyword};"]
    return [f"{SECTION_INDENT}{keyword}"] + _weighted_list(entries, indent)


def lola_lines(
    net: PetriNet,
    *,
    indent: str = INDENT,
    place_prefix: str = PLACE_PREFIX,
    transition_prefix: str = TRANSITION_PREFIX,
) -> List[str]:
    """
    Render a net in LoLA syntax as lines (without line terminators).

    :param net: Net to render.
    :type net: PetriNet
    :param indent: Indentation of list entries.
    :type indent: str, keyword-only
    :param place_prefix: Prefix of place identifiers.
    :type place_prefix: str, keyword-only
    :param transition_prefix: Prefix of transition identifiers.
    :type transition_prefix: str, keyword-only
    :returns: LoLA source lines.
    :rtype: List[str]
    """
    isolated = net.isolated_nodes()
    if isolated:
        LOGGER.debug("LoLA export: %d isolated node(s): %s", len(isolated), isolated)

    lines: List[str] = []
    if net.n_places():
        lines.append("PLACE")
        lines += [f"{indent}{place_prefix}{p.index}," for p in net.place_refs()]
        lines[-1] = lines[-1][:-1] + ";"
        lines.append("")

        lines.append("MARKING")
        marked = [
            (f"{place_prefix}{ref.index}", place.marking)
            for ref, place in net.iter_places()
            if place.marking > 0
        ]
        lines += _weighted_list(marked, indent) if marked else [";"]
        lines.append("")

    for t in net.transition_refs():
        lines.append(f"TRANSITION {transition_prefix}{t.index}")
        lines += _section("CONSUME", net.preset(t), place_prefix, indent)
        lines += _section("PRODUCE", net.postset(t), place_prefix, indent)
    return lines


def write_lola(net: PetriNet, stream: TextIO, **options) -> None:
    """
    Write a net in LoLA syntax to a text stream.

    :param net: Net to render.
    :type net: PetriNet
    :param stream: Writable text stream.
    :type stream: TextIO
    :param options: Keyword options forwarded to :func:`lola_lines`.
    """
    for line in lola_lines(net, **options):
        stream.write(line)
        stream.write("\n")


def to_lola_string(net: PetriNet, **options) -> str:
    """
    Render a net in LoLA syntax.

    :param net: Net to render.
    :type net: PetriNet
    :param options: Keyword options forwarded to :func:`lola_lines`.
    :returns: LoLA source.
    :rtype: str
    """
    buf = io.StringIO()
    write_lola(net, buf, **options)
    return buf.getvalue()
