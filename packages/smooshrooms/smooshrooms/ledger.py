"""Score and counter operations. Every result is clamped at zero."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smooshrooms.state import Host


def adjust_score(host: Host, delta: int) -> None:
    """Move stage and total score together, each floored at zero."""
    state = host.get_state()
    host.apply_patch({
        "stage_score": max(0, state.stage_score + delta),
        "total_score": max(0, state.total_score + delta),
    })


def record_miss(host: Host) -> None:
    host.apply_patch({"miss_count": host.get_state().miss_count + 1})


def record_smoosh(host: Host, n: int = 1) -> None:
    host.apply_patch({"smooshed_count": host.get_state().smooshed_count + n})


def decrement_remaining(host: Host) -> bool:
    """Count one entity against the quota.

    Returns True only for the decrement that takes the quota from positive to
    zero, so the stage-complete edge is seen exactly once per stage.
    """
    previous = host.get_state().shrooms_remaining
    remaining = max(0, previous - 1)
    host.apply_patch({"shrooms_remaining": remaining})
    return previous > 0 and remaining == 0
