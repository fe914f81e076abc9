"""Segment grouping and squashing.

A color marker and the text around it usually decorate one or more
components. When none of those components produced output the whole
decorated block disappears, color codes included. When at least one of
them did, the block is kept and only the empty slots are dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from promptline.core.fragments import ColorReset, ColorStart, Fragment, Text, Value

logger = logging.getLogger(__name__)

Slot = Fragment | None
Segment = list[Slot]


def group_segments(slots: Iterable[Slot]) -> list[Segment]:
    """Partition fragment slots into segments bounded by color markers.

    A ``ColorStart`` opens a new segment unless the current one is still
    empty. A ``ColorReset`` closes the segment it belongs to. A segment
    that never received a slot is not emitted.
    """
    segments: list[Segment] = []
    current: Segment = []

    for slot in slots:
        if isinstance(slot, ColorStart):
            if current:
                segments.append(current)
                current = []
            current.append(slot)
        elif isinstance(slot, ColorReset):
            current.append(slot)
            segments.append(current)
            current = []
        else:
            current.append(slot)

    if current:
        segments.append(current)

    return segments


def keep_segment(segment: Segment) -> bool:
    """Whether a segment survives squashing.

    Kept when every slot is present decoration or literal text, or when at
    least one component in it produced a value.
    """
    if any(isinstance(slot, Value) for slot in segment):
        return True
    return all(isinstance(slot, (ColorStart, ColorReset, Text)) for slot in segment)


def squash(slots: Iterable[Slot]) -> list[Fragment]:
    """Drop segments with unfilled slots and flatten the rest.

    Args:
        slots: Evaluated fragments in template order, ``None`` for a
            component that had nothing to show

    Returns:
        The printable fragments, in order
    """
    fragments: list[Fragment] = []

    for segment in group_segments(slots):
        if not keep_segment(segment):
            logger.debug("Dropping segment %r", segment)
            continue
        fragments.extend(slot for slot in segment if slot is not None)

    return fragments
