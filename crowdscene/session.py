"""
#WHERE
    Entry point of the core, driven by main.py, and by an external
    renderer that calls tick() from its per-frame callback.

#WHAT
    Owns the published scene state: directive → validated plan → per-entry
    layouts → per-instance frame states.  Plan replacement is copy-on-write:
    the new state is built off to the side and published by one reference
    swap, so the render loop never sees a plan whose layouts are missing.

#INPUT
    Directive text (or an external plan payload), frame timing, centerpiece
    asset report, AR anchor pose.

#OUTPUT
    SceneState (plan, layouts, frame states); CenterpiecePlacement;
    scene-to-world transform in AR mode.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from crowdscene.shared.constants import DEFAULT_DIRECTIVE
from crowdscene.modules.centerpiece import (
    CONTEXTS, CenterpieceAsset, CenterpiecePlacement, PresentationContext, place_centerpiece,
)
from crowdscene.modules.directive_compiler import (
    PlanPayloadError, ScenePlan, compile_and_validate, compile_directive,
    plan_from_payload, validate_plan,
)
from crowdscene.modules.layout_generator import (
    InstanceLayout, LayoutKey, entry_seed, generate_layout, layout_key,
)
from crowdscene.modules.motion_evaluator import FrameState, advance_group, initial_states
from crowdscene.modules.pose_anchor import AnchorPose, PoseAnchor

log = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    mode: str = "web"                          # "web" | "ar"
    directive: str = DEFAULT_DIRECTIVE


@dataclass(frozen=True)
class SceneState:
    """Self-consistent snapshot read by the render loop."""
    plan: ScenePlan
    layouts: Tuple[Tuple[InstanceLayout, ...], ...]
    states: Tuple[List[FrameState], ...]
    keys: Tuple[LayoutKey, ...]

    @property
    def instance_count(self) -> int:
        return sum(len(s) for s in self.states)


class SceneSession:
    """Directive → animated instances. Spawns no threads; tick() is driven externally."""

    def __init__(
        self,
        config: SessionConfig | None = None,
        planner: Callable[[str], ScenePlan] = compile_directive,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or SessionConfig()
        self._planner = planner
        self._clock = clock
        self._origin = clock()
        self._last_ms: Optional[float] = None
        self._lock = threading.Lock()
        self._anchor = PoseAnchor()
        self._asset: Optional[CenterpieceAsset] = None
        self.status = ""

        self._context = self._resolve_context(self.config.mode)
        self._state = self._build_state(compile_and_validate(self.config.directive, planner), None)
        log.info("SceneSession ready (%s): %d entries, %d instances",
                 self._context.name, len(self._state.plan), self._state.instance_count)

    # ── Public API ────────────────────────────────────────────────────────────

    @property
    def state(self) -> SceneState:
        return self._state

    @property
    def plan(self) -> ScenePlan:
        return self._state.plan

    @property
    def context(self) -> PresentationContext:
        return self._context

    def set_mode(self, mode: str) -> PresentationContext:
        self._context = self._resolve_context(mode)
        self.config.mode = self._context.name
        log.info("Presentation mode → %s (%.3f m)", self._context.name, self._context.desired_height)
        return self._context

    def apply(self, text: str) -> ScenePlan:
        """Compile, validate and publish a new directive."""
        self.status = "Parsing…"
        plan = compile_and_validate(text, self._planner)
        self._publish(plan)
        self.config.directive = text
        self.status = "Done"
        return plan

    def apply_payload(self, payload: str | Dict[str, Any]) -> Optional[ScenePlan]:
        """Publish a plan produced by an external planner; keep the old one if it is malformed."""
        self.status = "Parsing…"
        try:
            raw = plan_from_payload(payload)
        except PlanPayloadError as exc:
            log.warning("Plan payload rejected (%s) — keeping current plan", exc)
            self.status = "Rejected"
            return None
        plan = validate_plan(raw)
        self._publish(plan)
        self.status = "Done"
        return plan

    def tick(self, elapsed_ms: float | None = None, frame_delta: float | None = None) -> SceneState:
        """Advance every instance by one frame and return the state that was advanced.

        *elapsed_ms* defaults to milliseconds since the session started;
        *frame_delta* (seconds) defaults to the gap since the previous tick.
        """
        now_ms = elapsed_ms if elapsed_ms is not None else (self._clock() - self._origin) * 1000.0
        if frame_delta is None:
            frame_delta = 0.0 if self._last_ms is None else max(now_ms - self._last_ms, 0.0) / 1000.0
        self._last_ms = now_ms

        with self._lock:
            state = self._state
            for spec, layouts, states in zip(state.plan.objects, state.layouts, state.states):
                advance_group(layouts, spec.motion, now_ms, frame_delta, states)
        return state

    def centerpiece(self, asset: Optional[CenterpieceAsset] = None) -> CenterpiecePlacement:
        if asset is not None:
            self._asset = asset
        return place_centerpiece(self._asset, self._context)

    def anchor(self, pose: AnchorPose) -> Optional[np.ndarray]:
        """Scene-to-world transform; identity in web mode, None while the AR marker is lost."""
        if self._context.marker_target is None:
            return np.eye(4)
        return self._anchor.update(pose)

    # ── Internals ────────────────────────────────────────────────────────────

    @staticmethod
    def _resolve_context(mode: str) -> PresentationContext:
        ctx = CONTEXTS.get(str(mode).lower())
        if ctx is None:
            log.warning("Unknown mode %r — using web", mode)
            ctx = CONTEXTS["web"]
        return ctx

    def _build_layouts(
        self, plan: ScenePlan, previous: Optional[SceneState],
    ) -> Tuple[Tuple[Tuple[InstanceLayout, ...], ...], Tuple[LayoutKey, ...]]:
        layouts, keys = [], []
        for i, spec in enumerate(plan.objects):
            seed = entry_seed(i)
            key = layout_key(spec, seed)
            if previous is not None and i < len(previous.keys) and previous.keys[i] == key:
                layouts.append(previous.layouts[i])
            else:
                layouts.append(generate_layout(spec, seed))
            keys.append(key)
        return tuple(layouts), tuple(keys)

    @staticmethod
    def _carry_states(
        layouts: Tuple[Tuple[InstanceLayout, ...], ...],
        keys: Tuple[LayoutKey, ...],
        previous: Optional[SceneState],
    ) -> Tuple[List[FrameState], ...]:
        states = []
        for i, entry_layouts in enumerate(layouts):
            if previous is not None and i < len(previous.keys) and previous.keys[i] == keys[i]:
                # Same layout: carry animation over instead of snapping to rest.
                states.append([s.copy() for s in previous.states[i]])
            else:
                states.append(initial_states(entry_layouts))
        return tuple(states)

    def _build_state(self, plan: ScenePlan, previous: Optional[SceneState]) -> SceneState:
        layouts, keys = self._build_layouts(plan, previous)
        states = self._carry_states(layouts, keys, previous)
        return SceneState(plan=plan, layouts=layouts, states=states, keys=keys)

    def _publish(self, plan: ScenePlan) -> None:
        # Layouts are immutable, so they are built outside the lock from a
        # snapshot; frame states are copied under it because tick() mutates them.
        layouts, keys = self._build_layouts(plan, self._state)
        with self._lock:
            states = self._carry_states(layouts, keys, self._state)
            new_state = SceneState(plan=plan, layouts=layouts, states=states, keys=keys)
            self._state = new_state
        log.info("Published plan: %d entries, %d instances",
                 len(new_state.plan), new_state.instance_count)
