"""
Matrix views of a :class:`~petrikit.Net.net.PetriNet`.

Rows are places and columns are transitions, both in handle-index order:

* ``pre[p, t]``: aggregated multiplicity of the arcs ``p -> t`` (tokens
  consumed from ``p`` by one firing of ``t``),
* ``post[p, t]``: aggregated multiplicity of the arcs ``t -> p`` (tokens
  produced on ``p``),
* ``C = post - pre``: the incidence matrix.

References
----------
- Murata (1989), Proc. IEEE, Petri nets: Properties, analysis and applications.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .net import PetriNet

__all__ = [
    "pre_matrix",
    "post_matrix",
    "pre_post_matrices",
    "incidence_matrix",
    "marking_vector",
]


def pre_post_matrices(net: PetriNet) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the backward (pre) and forward (post) matrices in one pass.

    :param net: Net to convert.
    :type net: PetriNet
    :returns: ``(pre, post)``, integer arrays of shape
              ``(n_places, n_transitions)``.
    :rtype: Tuple[numpy.ndarray, numpy.ndarray]
    """
    shape = (net.n_places(), net.n_transitions())
    pre = np.zeros(shape, dtype=int)
    post = np.zeros(shape, dtype=int)
    tp, pt = net.arcs_partitioned()
    for t, p, mult in tp:
        post[p.index, t.index] += mult
    for p, t, mult in pt:
        pre[p.index, t.index] += mult
    return pre, post


def pre_matrix(net: PetriNet) -> np.ndarray:
    """Return the ``(n_places, n_transitions)`` consumption matrix."""
    return pre_post_matrices(net)[0]


def post_matrix(net: PetriNet) -> np.ndarray:
    """Return the ``(n_places, n_transitions)`` production matrix."""
    return pre_post_matrices(net)[1]


def incidence_matrix(net: PetriNet) -> np.ndarray:
    """
    Net token change per firing: ``post - pre``.

    :param net: Net to convert.
    :type net: PetriNet
    :returns: Integer array of shape ``(n_places, n_transitions)``.
    :rtype: numpy.ndarray
    """
    pre, post = pre_post_matrices(net)
    return post - pre


def marking_vector(net: PetriNet) -> np.ndarray:
    """Return the place markings as an integer vector of length ``n_places``."""
    return np.array([p.marking for _, p in net.iter_places()], dtype=int)
