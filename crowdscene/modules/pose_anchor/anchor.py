"""
#WHERE
    Used by SceneSession in AR mode and by tests.

#WHAT
    Parents scene content under a tracked planar target.  The marker plane
    is treated as the ground plane: content is rotated +90° about X so the
    scene's Y-up maps onto the marker normal.

#INPUT
    AnchorPose (visible flag + 4×4 target-to-world matrix) from the pose
    source; local scene points.

#OUTPUT
    4×4 scene-to-world transform (None while the marker is lost);
    transformed (N, 3) points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from scipy.spatial.transform import Rotation

log = logging.getLogger(__name__)


def _ground_plane_rotation() -> np.ndarray:
    m = np.eye(4)
    m[:3, :3] = Rotation.from_euler("x", 90.0, degrees=True).as_matrix()
    return m


GROUND_PLANE_ROTATION = _ground_plane_rotation()


@dataclass
class AnchorPose:
    visible: bool = False
    matrix: np.ndarray = field(default_factory=lambda: np.eye(4))


def ground_plane_transform(pose: AnchorPose) -> Optional[np.ndarray]:
    """Scene-to-world matrix for a visible target; None hides the content."""
    if not pose.visible:
        return None
    return np.asarray(pose.matrix, dtype=np.float64).reshape(4, 4) @ GROUND_PLANE_ROTATION


def anchor_points(pose: AnchorPose, points) -> Optional[np.ndarray]:
    """Map local scene points (N, 3) into the tracked frame."""
    transform = ground_plane_transform(pose)
    if transform is None:
        return None
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    homo = np.hstack([pts, np.ones((len(pts), 1))])
    return (homo @ transform.T)[:, :3]


class PoseAnchor:
    """Tracks target visibility across frames and logs transitions."""

    def __init__(self) -> None:
        self._pose = AnchorPose()

    @property
    def visible(self) -> bool:
        return self._pose.visible

    def update(self, pose: AnchorPose) -> Optional[np.ndarray]:
        if pose.visible != self._pose.visible:
            log.info("marker %s", "visible" if pose.visible else "lost")
        self._pose = pose
        return ground_plane_transform(pose)
