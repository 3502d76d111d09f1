"""
Motion Evaluator
================
Per-frame position/rotation update for procedural instances.

Quick start::

    from crowdscene.modules.motion_evaluator import advance_group, initial_states

    states = initial_states(layouts)
    advance_group(layouts, spec.motion, elapsed_ms, dt, states)
"""
from .models import FrameState, positions_array, rotations_array
from .evaluator import advance_group, initial_states, step

__all__ = [
    "FrameState",
    "positions_array",
    "rotations_array",
    "advance_group",
    "initial_states",
    "step",
]
