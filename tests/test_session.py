"""Tests for SceneSession - plan publication, frame ticking, modes."""

import numpy as np
import pytest

from crowdscene import SceneSession, SessionConfig
from crowdscene.modules.centerpiece import CenterpieceAsset
from crowdscene.modules.directive_compiler import ExternalPlanner
from crowdscene.modules.layout_generator import generate_layout
from crowdscene.modules.motion_evaluator import FrameState, positions_array, step
from crowdscene.modules.pose_anchor import AnchorPose
from crowdscene.shared.vocabulary import Motion, Shape


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestPublication:

    def setup_method(self):
        self.session = SceneSession(SessionConfig(directive="20 red spheres orbit"))

    def test_initial_state_consistent(self):
        state = self.session.state
        assert len(state.plan) == 1
        assert len(state.layouts[0]) == state.plan.objects[0].count == 20
        assert len(state.states[0]) == 20
        assert state.instance_count == 20

    def test_default_directive(self):
        session = SceneSession()
        assert [o.shape for o in session.plan.objects] == [Shape.SPHERE, Shape.BOX, Shape.TORUS]
        assert session.state.instance_count == 35

    def test_apply_replaces_plan_wholesale(self):
        old = self.session.state
        plan = self.session.apply("3 boxes")
        new = self.session.state

        assert new is not old
        assert new.plan == plan
        assert [o.shape for o in plan.objects] == [Shape.BOX]
        assert len(new.states[0]) == 3
        # the previous snapshot is left intact for anyone still reading it
        assert len(old.states[0]) == 20
        assert self.session.status == "Done"

    def test_unchanged_entry_keeps_layout_and_animation(self):
        self.session.tick(elapsed_ms=0.0, frame_delta=0.0)
        self.session.tick(elapsed_ms=1_000.0, frame_delta=1.0)
        old = self.session.state
        spun = old.states[0][0].rotation[1]
        assert spun == pytest.approx(0.5)

        self.session.apply("20 red spheres orbit, 5 gold torus")
        new = self.session.state

        assert new.layouts[0] is old.layouts[0]
        assert new.states[0][0].rotation[1] == pytest.approx(spun)
        assert new.states[0][0] is not old.states[0][0]
        # the new torus entry starts at rest
        assert new.states[1][0].rotation == [0.0, 0.0, 0.0]

    def test_changed_count_regenerates_layout(self):
        old = self.session.state
        self.session.apply("21 red spheres orbit")
        new = self.session.state
        assert new.layouts[0] is not old.layouts[0]
        assert len(new.layouts[0]) == 21
        assert new.states[0][0].rotation == [0.0, 0.0, 0.0]

    def test_plan_layout_lengths_always_match(self):
        for text in ["", "200 boxes", "a torus and 7 icosahedra", "1 sphere"]:
            self.session.apply(text)
            state = self.session.state
            for spec, layouts, states in zip(state.plan.objects, state.layouts, state.states):
                assert len(layouts) == len(states) == spec.count


class TestPayloads:

    def test_malformed_payload_keeps_current_plan(self):
        session = SceneSession(SessionConfig(directive="5 spheres"))
        before = session.plan
        assert session.apply_payload("definitely not json") is None
        assert session.plan is before
        assert session.status == "Rejected"

    def test_payload_is_validated(self):
        session = SceneSession()
        plan = session.apply_payload({"objects": [{"shape": "box", "count": 5000, "radius": 99}]})
        assert plan.objects[0].count == 200
        assert plan.objects[0].radius == 5.0
        assert len(session.state.states[0]) == 200

    def test_oversized_integer_count_is_clamped(self):
        session = SceneSession()
        plan = session.apply_payload('{"objects": [{"shape": "box", "count": 1' + "0" * 400 + "}]}")
        assert plan.objects[0].count == 200
        assert session.status == "Done"

    def test_external_planner_stage(self):
        planner = ExternalPlanner(lambda text: '{"objects": [{"shape": "torus", "count": 2, "motion": "float"}]}')
        session = SceneSession(planner=planner)
        assert [(o.shape, o.count, o.motion) for o in session.plan.objects] == [(Shape.TORUS, 2, Motion.FLOAT)]


class TestTick:

    def test_tick_matches_motion_step(self):
        session = SceneSession(SessionConfig(directive="4 red spheres orbit"))
        state = session.tick(elapsed_ms=2_000.0, frame_delta=0.016)
        layouts = generate_layout(state.plan.objects[0], 7)
        expected = [step(lay, Motion.ORBIT, 2_000.0, 0.016, FrameState.at_rest(lay)).position for lay in layouts]
        np.testing.assert_allclose(positions_array(state.states[0]), np.array(expected))

    def test_none_motion_entries_stay_at_rest(self):
        session = SceneSession(SessionConfig(directive="3 spheres"))
        before = positions_array(session.state.states[0]).copy()
        session.tick(elapsed_ms=9_000.0, frame_delta=0.5)
        np.testing.assert_array_equal(positions_array(session.state.states[0]), before)

    def test_clock_driven_tick(self):
        clock = FakeClock()
        session = SceneSession(SessionConfig(directive="2 blue boxes floating"), clock=clock)
        session.tick()
        clock.now += 0.5
        state = session.tick()
        # two float ticks: first has no delta, second 0.5 s
        assert state.states[0][0].rotation == pytest.approx([0.15, 0.1, 0.0])


class TestModes:

    def test_web_mode_identity_anchor(self):
        session = SceneSession()
        np.testing.assert_array_equal(session.anchor(AnchorPose(visible=False)), np.eye(4))

    def test_ar_mode_follows_marker(self):
        session = SceneSession(SessionConfig(mode="ar"))
        assert session.context.desired_height == 0.665
        assert session.anchor(AnchorPose(visible=False)) is None
        assert session.anchor(AnchorPose(visible=True)).shape == (4, 4)

    def test_set_mode_changes_centerpiece_height(self):
        session = SceneSession()
        asset = CenterpieceAsset(ready=True, measured_height=1.33)
        assert session.centerpiece(asset).scale[0] == pytest.approx(1.2 / 1.33)
        session.set_mode("ar")
        assert session.centerpiece().scale[0] == pytest.approx(0.665 / 1.33)

    def test_unknown_mode_falls_back_to_web(self):
        session = SceneSession(SessionConfig(mode="vr"))
        assert session.context.name == "web"
