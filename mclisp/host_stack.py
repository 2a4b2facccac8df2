"""Python stack budget for deep evaluation and parsing.

Each interpreter level costs a handful of Python frames, so the default
recursion limit of the host runs out long before a generous max_depth
does. The outermost evaluate/read call raises the limit to fit max_depth
and puts it back afterwards.

The recursion limit is process-wide: nested outermost calls from several
threads at once should share one max_depth.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator

# evaluate0 -> _evaluate_list -> apply_closure -> evaluate -> evaluate0 is the
# longest chain per depth step; the rest covers substitution and builtins.
FRAMES_PER_LEVEL = 6
FRAME_MARGIN = 1000
MAX_HOST_FRAMES = 100_000


def frames_needed(max_depth: int) -> int:
    return min(max_depth * FRAMES_PER_LEVEL + FRAME_MARGIN, MAX_HOST_FRAMES)


@contextmanager
def recursion_budget(max_depth: int) -> Iterator[int]:
    """Raise the host recursion limit to fit `max_depth` for the duration of the block."""
    previous = sys.getrecursionlimit()
    needed = frames_needed(max_depth)
    if needed <= previous:
        yield previous
        return
    sys.setrecursionlimit(needed)
    try:
        yield needed
    finally:
        sys.setrecursionlimit(previous)
