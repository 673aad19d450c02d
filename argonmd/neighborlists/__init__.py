"""Neighbor search implementations."""

from __future__ import annotations

import logging

from ..system.params import MARGIN, RCUTOFF
from .base import NeighborSearch
from .cell import CellList
from .exhaustive import AllPairsSearch

logger = logging.getLogger(__name__)


def select_neighbor_search(
    box_length: float,
    cutoff: float = RCUTOFF,
    margin: float = MARGIN,
) -> NeighborSearch:
    """
    Pick the pair search strategy for a box.

    A cell list is used whenever the box holds at least three cells per
    axis; otherwise the exhaustive search is returned. The fallback is not
    an error but is logged so that it can be observed.

    Args:
        box_length: Periodic box length.
        cutoff: Interaction cutoff distance.
        margin: Skin distance added to the cutoff.

    Returns:
        A CellList or an AllPairsSearch for this box.
    """
    m = CellList.cells_per_axis(box_length, cutoff, margin)
    if CellList.is_supported(box_length, cutoff, margin):
        logger.info("Using cell list with %d cells per axis (L=%.4f)", m, box_length)
        return CellList(box_length, cutoff, margin)

    logger.info(
        "Box length %.4f gives %d cells per axis; falling back to exhaustive "
        "pair search",
        box_length,
        m,
    )
    return AllPairsSearch(box_length, cutoff, margin)


__all__ = ["NeighborSearch", "CellList", "AllPairsSearch", "select_neighbor_search"]
