"""Unit tests for time conversions between poses, twists and accelerations."""

import math
from datetime import timedelta

import numpy as np
import pytest

from kinestate.cartesian import (
    CartesianAcceleration,
    CartesianPose,
    CartesianTwist,
    CartesianWrench,
)
from kinestate.utils import quaternion as quat

_Z = [0.0, 0.0, 1.0]


def _assert_same_rotation(q1, q2, atol=1e-9):
    q1 = np.asarray(q1)
    q2 = np.asarray(q2)
    assert np.allclose(q1, q2, atol=atol) or np.allclose(q1, -q2, atol=atol)


class TestPoseToTwist:
    """Dividing a pose by a duration."""

    def test_pose_over_duration(self):
        """Dividing a pose by a duration gives the twist that moves there in that time."""
        pose = CartesianPose(
            "ee",
            "base",
            position=[1.0, 2.0, 3.0],
            orientation=quat.from_axis_angle(_Z, math.pi / 2),
        )
        twist = pose / timedelta(seconds=2)
        assert isinstance(twist, CartesianTwist)
        assert twist.get_name() == "ee"
        assert twist.get_reference_frame() == "base"
        assert np.allclose(twist.get_linear_velocity(), [0.5, 1.0, 1.5])
        assert np.allclose(twist.get_angular_velocity(), [0.0, 0.0, math.pi / 4])

    def test_negated_quaternion_gives_same_twist(self):
        """q and -q should produce the same angular velocity."""
        q = quat.from_axis_angle(_Z, math.pi / 2)
        a = CartesianPose("ee", orientation=q) / timedelta(seconds=1)
        b = CartesianPose("ee", orientation=-q) / timedelta(seconds=1)
        assert np.allclose(a.get_angular_velocity(), b.get_angular_velocity())

    def test_takes_shortest_rotation(self):
        """A rotation past half a turn should become the shorter rotation the other way."""
        pose = CartesianPose("ee", orientation=quat.from_axis_angle(_Z, 1.5 * math.pi))
        twist = pose / timedelta(seconds=1)
        assert np.allclose(twist.get_angular_velocity(), [0.0, 0.0, -math.pi / 2])

    def test_zero_duration(self):
        """Dividing a pose by a zero duration should raise."""
        with pytest.raises(ZeroDivisionError):
            CartesianPose.Identity("ee") / timedelta(0)

    def test_scalar_division_stays_a_pose(self):
        """A pose divided by a plain number stays a pose."""
        pose = CartesianPose("ee", position=[2.0, 0.0, 0.0])
        assert isinstance(pose / 2.0, CartesianPose)


class TestTwistToPose:
    """Multiplying a twist by a duration."""

    def test_zero_twist_gives_identity(self):
        """A zero twist held for one second gives the identity pose."""
        pose = CartesianTwist.Zero("ee", "base") * timedelta(seconds=1)
        assert isinstance(pose, CartesianPose)
        assert pose.get_name() == "ee"
        assert pose.get_reference_frame() == "base"
        assert np.allclose(pose.get_position(), 0.0)
        assert np.allclose(pose.get_orientation(), quat.IDENTITY)

    def test_duration_on_either_side(self):
        """Duration on the left or the right should give the same pose."""
        twist = CartesianTwist("ee", linear_velocity=[1.0, 0.0, 0.0], angular_velocity=_Z)
        left = timedelta(seconds=0.5) * twist
        right = twist * timedelta(seconds=0.5)
        assert np.allclose(left.data(), right.data())
        assert np.allclose(right.get_position(), [0.5, 0.0, 0.0])
        _assert_same_rotation(right.get_orientation(), quat.from_axis_angle(_Z, 0.5))

    def test_round_trip(self):
        """Pose divided then multiplied by the same duration returns the pose."""
        rng = np.random.default_rng(7)
        dt = timedelta(milliseconds=250)
        for _ in range(10):
            pose = CartesianPose.Random("ee", "base", rng=rng)
            back = (pose / dt) * dt
            assert np.allclose(back.get_position(), pose.get_position())
            _assert_same_rotation(back.get_orientation(), pose.get_orientation(), atol=1e-8)


class TestTwistAcceleration:
    """Twist and acceleration conversions."""

    def test_twist_over_duration(self):
        """Dividing a twist by a duration gives an acceleration."""
        twist = CartesianTwist("ee", linear_velocity=[1.0, 2.0, 3.0], angular_velocity=[0.0, 0.0, 1.0])
        acceleration = twist / timedelta(seconds=0.5)
        assert isinstance(acceleration, CartesianAcceleration)
        assert np.allclose(acceleration.data(), [2.0, 4.0, 6.0, 0.0, 0.0, 2.0])

    def test_acceleration_times_duration(self):
        """Acceleration times a duration gives a twist, from either side."""
        acceleration = CartesianAcceleration(
            "ee", "base", linear_acceleration=[2.0, 0.0, 0.0], angular_acceleration=[0.0, 4.0, 0.0]
        )
        twist = acceleration * timedelta(seconds=0.5)
        assert isinstance(twist, CartesianTwist)
        assert twist.get_reference_frame() == "base"
        assert np.allclose(twist.data(), [1.0, 0.0, 0.0, 0.0, 2.0, 0.0])
        assert np.allclose((timedelta(seconds=0.5) * acceleration).data(), twist.data())

    def test_round_trip(self):
        """Twist divided then multiplied by the same duration returns the twist."""
        twist = CartesianTwist.Random("ee", rng=np.random.default_rng(3))
        dt = timedelta(seconds=0.1)
        assert np.allclose(((twist / dt) * dt).data(), twist.data())

    def test_zero_duration(self):
        """Dividing a twist by a zero duration should raise."""
        with pytest.raises(ZeroDivisionError):
            CartesianTwist.Zero("ee") / timedelta(0)

    def test_wrench_has_no_time_conversion(self):
        """Wrenches do not convert over time."""
        with pytest.raises(TypeError):
            CartesianWrench.Zero("ee") * timedelta(seconds=1)
