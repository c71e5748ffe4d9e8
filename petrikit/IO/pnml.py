"""
PNML (Petri Net Markup Language) export for place/transition nets.

Documents follow the 2009 PNML grammar: one ``<net>`` of type *ptnet*
holding a single ``<page>`` with every place, transition and arc. Names are
written as ``<name><text>``, markings above zero as ``<initialMarking>`` and
arc multiplicities as ``<inscription>``.
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO

from lxml import etree

from ..exceptions import XmlWriterError
from ..Net.net import PetriNet
from ..Net.refs import NodeRef

LOGGER = logging.getLogger(__name__)

PNML_NAMESPACE = "http://www.pnml.org/version-2009/grammar/pnml"
PTNET_TYPE = "http://www.pnml.org/version-2009/grammar/ptnet"

PLACE_PREFIX = "place_"
TRANSITION_PREFIX = "transition_"
ARC_PREFIX = "arc_"

__all__ = ["to_pnml_tree", "to_pnml_string", "write_pnml", "PNML_NAMESPACE"]


def _q(tag: str) -> str:
    return f"{{{PNML_NAMESPACE}}}{tag}"


def _sub(parent: etree._Element, tag: str, **attrs: str) -> etree._Element:
    return etree.SubElement(parent, _q(tag), attrs)


def _text_child(parent: etree._Element, tag: str, text: str) -> None:
    _sub(_sub(parent, tag), "text").text = text


def _name(parent: etree._Element, name: Optional[str]) -> None:
    if name is not None:
        _text_child(parent, "name", name)


def _node_id(node: NodeRef) -> str:
    prefix = PLACE_PREFIX if node.is_place else TRANSITION_PREFIX
    return f"{prefix}{node.index}"


def to_pnml_tree(
    net: PetriNet, *, net_id: str = "net0", page_id: str = "page0"
) -> etree._Element:
    """
    Build the PNML element tree of a net.

    :param net: Net to export.
    :type net: PetriNet
    :param net_id: ``id`` attribute of the ``<net>`` element.
    :type net_id: str, keyword-only
    :param page_id: ``id`` attribute of the ``<page>`` element.
    :type page_id: str, keyword-only
    :returns: The ``<pnml>`` root element.
    :rtype: lxml.etree._Element
    :raises XmlWriterError: If a name cannot be stored in XML (e.g. it holds
                            control characters).
    """
    try:
        root = etree.Element(_q("pnml"), nsmap={None: PNML_NAMESPACE})
        net_el = _sub(root, "net", id=net_id, type=PTNET_TYPE)
        page = _sub(net_el, "page", id=page_id)

        for ref, place in net.iter_places():
            el = _sub(page, "place", id=f"{PLACE_PREFIX}{ref.index}")
            _name(el, place.name)
            if place.marking > 0:
                _text_child(el, "initialMarking", str(place.marking))

        for ref, trans in net.iter_transitions():
            el = _sub(page, "transition", id=f"{TRANSITION_PREFIX}{ref.index}")
            _name(el, trans.name)

        for ref, arc in net.iter_arcs():
            el = _sub(
                page,
                "arc",
                id=f"{ARC_PREFIX}{ref.index}",
                source=_node_id(arc.source),
                target=_node_id(arc.sink),
            )
            _name(el, arc.name)
            _text_child(el, "inscription", str(arc.mult))
    except ValueError as exc:
        raise XmlWriterError(str(exc)) from exc

    LOGGER.debug(
        "PNML tree built: %d places, %d transitions, %d arcs",
        net.n_places(),
        net.n_transitions(),
        net.n_arcs(),
    )
    return root


def to_pnml_string(net: PetriNet, **options) -> str:
    """
    Serialise a net as a pretty-printed PNML document.

    :param net: Net to export.
    :type net: PetriNet
    :param options: Keyword options forwarded to :func:`to_pnml_tree`.
    :returns: XML text including the ``<?xml ...?>`` declaration.
    :rtype: str
    :raises XmlWriterError: If the document cannot be built or serialised.
    """
    root = to_pnml_tree(net, **options)
    try:
        data = etree.tostring(
            root, pretty_print=True, xml_declaration=True, encoding="UTF-8"
        )
    except etree.LxmlError as exc:
        raise XmlWriterError(str(exc)) from exc
    return data.decode("utf-8")


def write_pnml(net: PetriNet, stream: TextIO, **options) -> None:
    """
    Write a net as a PNML document to a text stream.

    :param net: Net to export.
    :type net: PetriNet
    :param stream: Writable text stream.
    :type stream: TextIO
    :param options: Keyword options forwarded to :func:`to_pnml_tree`.
    """
    stream.write(to_pnml_string(net, **options))
