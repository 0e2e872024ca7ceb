"""Tests for the inside/outside hysteresis state machine."""

import pytest

from atmo_scatter.surface.material import Side
from atmo_scatter.surface.orientation import Orientation, next_orientation

R = 75.0


def _run(start, distances):
    """Apply a sequence of camera distances; return final state and flip count."""
    state = start
    flips = 0
    for distance in distances:
        new_state = next_orientation(state, distance, R)
        if new_state is not state:
            flips += 1
        state = new_state
    return state, flips


class TestTransitions:
    """Tests for the transition rule."""

    def test_inside_exits_above_band(self):
        assert next_orientation(Orientation.INSIDE, 1.02 * R, R) is Orientation.OUTSIDE

    def test_outside_enters_below_band(self):
        assert next_orientation(Orientation.OUTSIDE, 0.98 * R, R) is Orientation.INSIDE

    @pytest.mark.parametrize("factor", [0.995, 1.0, 1.005, 1.01])
    def test_inside_holds_within_band(self, factor):
        """The exit threshold is strict: exactly 1.01 R does not flip."""
        assert next_orientation(Orientation.INSIDE, factor * R, R) is Orientation.INSIDE

    @pytest.mark.parametrize("factor", [0.99, 0.995, 1.0, 1.005])
    def test_outside_holds_within_band(self, factor):
        assert next_orientation(Orientation.OUTSIDE, factor * R, R) is Orientation.OUTSIDE


class TestSequences:
    """Tests for frame sequences."""

    @pytest.mark.parametrize("start", [Orientation.INSIDE, Orientation.OUTSIDE])
    def test_oscillation_inside_band_never_flips(self, start):
        """Hovering at the boundary keeps the current face."""
        distances = [0.995 * R, 1.005 * R] * 50
        state, flips = _run(start, distances)
        assert flips == 0
        assert state is start

    def test_crossing_both_thresholds_flips_twice(self):
        state, flips = _run(Orientation.INSIDE, [1.02 * R, 0.98 * R])
        assert flips == 2
        assert state is Orientation.INSIDE

    def test_descent_from_orbit(self):
        """Camera at 76 then 74 around a shell of 75 ends up inside."""
        state = next_orientation(Orientation.INSIDE, 76.0, R)
        assert state is Orientation.OUTSIDE
        state = next_orientation(state, 74.0, R)
        assert state is Orientation.INSIDE


class TestSide:
    """Tests for the rasterized face of each state."""

    def test_inside_uses_back_face(self):
        assert Orientation.INSIDE.side is Side.BACK

    def test_outside_uses_front_face(self):
        assert Orientation.OUTSIDE.side is Side.FRONT
