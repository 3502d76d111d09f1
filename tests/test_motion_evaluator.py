"""Tests for Motion Evaluator - per-frame orbit/float/none policies."""

import math

import numpy as np
import pytest

from crowdscene.modules.directive_compiler import ObjectSpec
from crowdscene.modules.layout_generator import generate_layout
from crowdscene.modules.motion_evaluator import (
    FrameState,
    advance_group,
    initial_states,
    positions_array,
    step,
)
from crowdscene.shared.vocabulary import Motion, Shape


@pytest.fixture
def layouts():
    return generate_layout(ObjectSpec(shape=Shape.SPHERE, count=6, radius=1.5), seed=7)


class TestOrbit:

    def test_position_on_jittered_circle(self, layouts):
        lay = layouts[2]
        state = step(lay, Motion.ORBIT, 1234.0, 0.016, FrameState.at_rest(lay))
        x, y, z = state.position
        assert math.hypot(x, z) == pytest.approx(lay.effective_radius)
        assert y == lay.base_height

    def test_angle_from_elapsed_time(self, layouts):
        lay = layouts[0]
        t = 10_000.0
        angle = lay.angle_offset + lay.speed_factor * t * 0.00015
        state = step(lay, Motion.ORBIT, t, 0.0, FrameState.at_rest(lay))
        assert state.position[0] == pytest.approx(math.cos(angle) * lay.effective_radius)
        assert state.position[2] == pytest.approx(math.sin(angle) * lay.effective_radius)

    def test_phase_stable_across_delta_histories(self, layouts):
        lay = layouts[3]
        target = 5_000.0

        direct = step(lay, Motion.ORBIT, target, 5.0, FrameState.at_rest(lay))

        state = FrameState.at_rest(lay)
        t = 0.0
        for dt_ms in [16.0, 33.0, 7.5, 120.0, 1.0] * 40:
            t = min(t + dt_ms, target)
            state = step(lay, Motion.ORBIT, t, dt_ms / 1000.0, state)
        state = step(lay, Motion.ORBIT, target, 0.0, state)

        assert state.position == direct.position

    def test_spin_accumulates_about_y(self, layouts):
        lay = layouts[0]
        state = FrameState.at_rest(lay)
        for _ in range(10):
            state = step(lay, Motion.ORBIT, 0.0, 0.1, state)
        assert state.rotation[1] == pytest.approx(10 * 0.1 * 0.5)
        assert state.rotation[0] == 0.0
        assert state.rotation[2] == 0.0


class TestFloat:

    def test_bobbing_height(self, layouts):
        lay = layouts[4]
        t = 2_500.0
        state = step(lay, Motion.FLOAT, t, 0.0, FrameState.at_rest(lay))
        assert state.position[1] == pytest.approx(lay.base_height + math.sin(t * 0.001 + lay.index) * 0.1)

    def test_horizontal_position_fixed(self, layouts):
        lay = layouts[1]
        nominal = lay.nominal_position()
        for t in (0.0, 900.0, 77_000.0):
            state = step(lay, Motion.FLOAT, t, 0.02, FrameState.at_rest(lay))
            assert state.position[0] == pytest.approx(nominal[0])
            assert state.position[2] == pytest.approx(nominal[2])

    def test_tumble_rates(self, layouts):
        lay = layouts[0]
        state = step(lay, Motion.FLOAT, 0.0, 0.5, FrameState.at_rest(lay))
        assert state.rotation == pytest.approx([0.15, 0.1, 0.0])


class TestNone:

    def test_holds_previous_state(self, layouts):
        prev = FrameState(position=[1.0, 2.0, 3.0], rotation=[0.1, 0.2, 0.3])
        state = step(layouts[0], Motion.NONE, 99_999.0, 1.0, prev)
        assert state == prev
        assert state is not prev

    def test_advance_group_is_noop(self, layouts):
        states = initial_states(layouts)
        before = positions_array(states).copy()
        assert advance_group(layouts, Motion.NONE, 5_000.0, 0.1, states) == 0
        np.testing.assert_array_equal(positions_array(states), before)


class TestAdvanceGroup:

    def test_step_does_not_mutate_previous(self, layouts):
        prev = FrameState.at_rest(layouts[0])
        snapshot = prev.copy()
        step(layouts[0], Motion.FLOAT, 400.0, 0.1, prev)
        assert prev == snapshot

    def test_updates_in_place(self, layouts):
        states = initial_states(layouts)
        assert advance_group(layouts, Motion.ORBIT, 3_000.0, 0.016, states) == len(layouts)
        expected = [step(lay, Motion.ORBIT, 3_000.0, 0.016, FrameState.at_rest(lay)).position for lay in layouts]
        np.testing.assert_allclose(positions_array(states), np.array(expected))

    def test_missing_layouts_are_skipped(self, layouts):
        states = initial_states(layouts)
        untouched = states[-1].copy()
        updated = advance_group(layouts[:-1], Motion.ORBIT, 3_000.0, 0.016, states)
        assert updated == len(layouts) - 1
        assert states[-1] == untouched

    def test_none_entries_are_skipped(self, layouts):
        states = initial_states(layouts[:2])
        updated = advance_group([layouts[0], None], Motion.FLOAT, 100.0, 0.1, states)
        assert updated == 1
        assert states[1].rotation == [0.0, 0.0, 0.0]

    def test_initial_states_at_nominal_points(self, layouts):
        states = initial_states(layouts)
        assert len(states) == len(layouts)
        assert states[0].position == pytest.approx(list(layouts[0].nominal_position()))
        assert states[0].rotation == [0.0, 0.0, 0.0]

    def test_positions_array_shape(self, layouts):
        assert positions_array(initial_states(layouts)).shape == (len(layouts), 3)
        assert positions_array([]).shape == (0, 3)
