"""
#WHERE
    Used by evaluator.py, session.py and tests.

#WHAT
    Transient per-instance frame state: position and accumulated rotation.
    Owned by the render loop; never persisted.

#INPUT
    InstanceLayout (for the resting state).

#OUTPUT
    FrameState dataclass instances; (N, 3) numpy snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from crowdscene.modules.layout_generator.layout import InstanceLayout


@dataclass(slots=True)
class FrameState:
    position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    rotation: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])  # Euler XYZ, radians

    @classmethod
    def at_rest(cls, layout: InstanceLayout) -> "FrameState":
        return cls(position=list(layout.nominal_position()))

    def copy(self) -> "FrameState":
        return FrameState(position=list(self.position), rotation=list(self.rotation))


def positions_array(states: Sequence[FrameState]) -> np.ndarray:
    """(N, 3) float array of instance positions."""
    return np.array([s.position for s in states], dtype=np.float64).reshape(-1, 3)


def rotations_array(states: Sequence[FrameState]) -> np.ndarray:
    return np.array([s.rotation for s in states], dtype=np.float64).reshape(-1, 3)
