"""
#WHERE
    Called by SceneSession.tick() once per rendered frame, and by tests.

#WHAT
    Per-frame motion policies for procedural instances.

    orbit  : angle is a function of absolute elapsed time, so position is
             phase-stable under any frame-rate history; self-rotation about
             Y accumulates from frame deltas.
    float  : bobs vertically around the base height at the instance's
             nominal point; tumbles about X and Y from frame deltas.
    none   : holds the previous state.

#INPUT
    InstanceLayout, Motion, elapsed time [ms, monotonic], frame delta [s],
    previous FrameState.

#OUTPUT
    New FrameState (step) or in-place updates of a group (advance_group).
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from crowdscene.shared import constants as C
from crowdscene.shared.vocabulary import Motion
from crowdscene.modules.layout_generator.layout import InstanceLayout
from .models import FrameState

log = logging.getLogger(__name__)


def _orbit(layout: InstanceLayout, elapsed_ms: float, dt: float, prev: FrameState) -> FrameState:
    angle = layout.angle_offset + layout.speed_factor * elapsed_ms * C.ORBIT_ANGULAR_RATE
    r = layout.effective_radius
    rx, ry, rz = prev.rotation
    return FrameState(
        position=[math.cos(angle) * r, layout.base_height, math.sin(angle) * r],
        rotation=[rx, ry + dt * C.ORBIT_SPIN_RATE, rz],
    )


def _float(layout: InstanceLayout, elapsed_ms: float, dt: float, prev: FrameState) -> FrameState:
    x, _, z = layout.nominal_position()
    y = layout.base_height + math.sin(elapsed_ms * C.FLOAT_BOB_RATE + layout.index) * C.FLOAT_BOB_AMPLITUDE
    rx, ry, rz = prev.rotation
    return FrameState(
        position=[x, y, z],
        rotation=[rx + dt * C.FLOAT_SPIN_RATE_X, ry + dt * C.FLOAT_SPIN_RATE_Y, rz],
    )


def step(
    layout: InstanceLayout,
    motion: Motion,
    elapsed_ms: float,
    frame_delta: float,
    previous: FrameState,
) -> FrameState:
    """Advance one instance by one frame. Pure: *previous* is not modified."""
    if motion is Motion.ORBIT:
        return _orbit(layout, elapsed_ms, frame_delta, previous)
    if motion is Motion.FLOAT:
        return _float(layout, elapsed_ms, frame_delta, previous)
    return previous.copy()


def initial_states(layouts: Sequence[InstanceLayout]) -> List[FrameState]:
    return [FrameState.at_rest(layout) for layout in layouts]


def advance_group(
    layouts: Sequence[Optional[InstanceLayout]],
    motion: Motion,
    elapsed_ms: float,
    frame_delta: float,
    states: List[FrameState],
) -> int:
    """Update *states* in place for one frame; returns the number updated.

    Instances with no layout (plan/layout length mismatch during a resize)
    are skipped for this frame rather than raising.
    """
    if motion is Motion.NONE:
        return 0

    updated = 0
    for i, state in enumerate(states):
        layout = layouts[i] if i < len(layouts) else None
        if layout is None:
            continue
        nxt = step(layout, motion, elapsed_ms, frame_delta, state)
        state.position = nxt.position
        state.rotation = nxt.rotation
        updated += 1

    if updated < len(states):
        log.debug("advance_group: skipped %d/%d instances without layout",
                  len(states) - updated, len(states))
    return updated
