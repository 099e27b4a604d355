"""Unit tests for CartesianState and its pose/twist/acceleration/wrench projections."""

import math

import numpy as np
import pytest

from kinestate.cartesian import (
    CartesianAcceleration,
    CartesianPose,
    CartesianState,
    CartesianTwist,
    CartesianWrench,
    dist,
    variable_size,
)
from kinestate.types import CartesianStateVariable, StateType
from kinestate.utils import quaternion as quat
from kinestate.utils.errors import (
    EmptyStateError,
    IncompatibleSizeError,
    IncompatibleStatesError,
    NotImplementedStateError,
)

_Z = [0.0, 0.0, 1.0]


def _assert_same_rotation(q1, q2, atol=1e-9):
    """Quaternions q and -q encode the same rotation."""
    q1 = np.asarray(q1)
    q2 = np.asarray(q2)
    assert np.allclose(q1, q2, atol=atol) or np.allclose(q1, -q2, atol=atol)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


class TestConstruction:
    """Tests for constructors, factories and the empty flag."""

    def test_default_state_is_empty(self):
        """A state built without data is empty and refuses reads."""
        state = CartesianState("ee")
        assert state.is_empty()
        assert state.get_reference_frame() == "world"
        with pytest.raises(EmptyStateError):
            state.get_position()

    def test_identity(self):
        """Identity is filled with zero position and unit orientation."""
        state = CartesianState.Identity("ee", "base")
        assert not state.is_empty()
        assert np.allclose(state.get_position(), 0.0)
        assert np.allclose(state.get_orientation(), [1.0, 0.0, 0.0, 0.0])
        assert state.data().size == 25

    def test_random_is_filled_with_unit_orientation(self, rng):
        """Random states are filled and keep a unit quaternion."""
        state = CartesianState.Random("ee", "base", rng=rng)
        assert not state.is_empty()
        assert np.linalg.norm(state.get_orientation()) == pytest.approx(1.0)

    def test_projection_types(self):
        """Each projection reports its own state type."""
        assert CartesianPose("p").get_type() == StateType.CARTESIAN_POSE
        assert CartesianTwist("t").get_type() == StateType.CARTESIAN_TWIST
        assert CartesianAcceleration("a").get_type() == StateType.CARTESIAN_ACCELERATION
        assert CartesianWrench("w").get_type() == StateType.CARTESIAN_WRENCH

    def test_keyword_construction(self):
        """Keyword fields fill the state at construction."""
        pose = CartesianPose("ee", "base", position=[1.0, 2.0, 3.0])
        assert not pose.is_empty()
        assert np.allclose(pose.get_position(), [1.0, 2.0, 3.0])
        wrench = CartesianWrench("ee", "base", force=[1.0, 0.0, 0.0], torque=[0.0, 2.0, 0.0])
        assert np.allclose(wrench.data(), [1.0, 0.0, 0.0, 0.0, 2.0, 0.0])

    def test_from_state_keeps_only_projected_fields(self, rng):
        """from_state copies only the fields the projection exposes."""
        full = CartesianState.Random("ee", "base", rng=rng)
        twist = CartesianTwist.from_state(full)
        assert isinstance(twist, CartesianTwist)
        assert np.allclose(twist.get_twist(), full.get_twist())
        assert np.allclose(twist.get_position(), 0.0)
        assert np.allclose(twist.get_force(), 0.0)

    def test_from_state_preserves_empty_flag(self):
        """from_state of an empty state stays empty."""
        assert CartesianPose.from_state(CartesianState("ee")).is_empty()


class TestAccessors:
    """Tests for field setters, selectors and data vectors."""

    def test_orientation_is_normalized(self):
        """Orientations are stored normalized."""
        state = CartesianState("ee")
        state.set_orientation([2.0, 0.0, 0.0, 0.0])
        assert np.allclose(state.get_orientation(), [1.0, 0.0, 0.0, 0.0])

    def test_zero_quaternion_rejected(self):
        """A zero quaternion should be rejected."""
        with pytest.raises(ValueError):
            CartesianState("ee").set_orientation([0.0, 0.0, 0.0, 0.0])

    def test_failed_pose_write_leaves_empty_state_untouched(self):
        """A rejected pose write should not fill an empty pose."""
        pose = CartesianPose("ee", "base")
        with pytest.raises(ValueError):
            pose.set_data([1.0, 2.0, 3.0, 0.0, 0.0, 0.0, 0.0])
        assert pose.is_empty()
        pose.set_filled()
        assert np.allclose(pose.get_position(), 0.0)

    def test_failed_pose_write_leaves_filled_state_untouched(self):
        """A rejected pose write should leave every field as it was."""
        state = CartesianState.Identity("ee", "base")
        with pytest.raises(ValueError):
            state.set_state_variable([5.0, 5.0, 5.0, 0.0, 0.0, 0.0, 0.0], CartesianStateVariable.POSE)
        assert np.allclose(state.get_position(), 0.0)
        assert np.allclose(state.get_orientation(), quat.IDENTITY)

    def test_wrong_size_rejected(self):
        """Vectors of the wrong length should be rejected."""
        state = CartesianState("ee")
        with pytest.raises(IncompatibleSizeError):
            state.set_position([1.0, 2.0])
        with pytest.raises(ValueError):
            state.set_twist(np.zeros(5))

    @pytest.mark.parametrize(
        "selector,size",
        [
            (CartesianStateVariable.POSITION, 3),
            (CartesianStateVariable.ORIENTATION, 4),
            (CartesianStateVariable.POSE, 7),
            (CartesianStateVariable.TWIST, 6),
            (CartesianStateVariable.WRENCH, 6),
            (CartesianStateVariable.ALL, 25),
        ],
    )
    def test_variable_sizes(self, selector, size):
        """Each selector reads the documented number of values."""
        assert variable_size(selector) == size
        assert CartesianState.Identity("ee").get_state_variable(selector).size == size

    def test_set_state_variable_fills(self):
        """Writing a selector fills the state and splits the vector into fields."""
        state = CartesianState("ee")
        state.set_state_variable([1, 2, 3, 4, 5, 6], CartesianStateVariable.TWIST)
        assert not state.is_empty()
        assert np.allclose(state.get_linear_velocity(), [1, 2, 3])
        assert np.allclose(state.get_angular_velocity(), [4, 5, 6])

    def test_projection_data_sizes(self):
        """Projections expose only their own fields through data()."""
        pose = CartesianPose.Identity("ee")
        assert pose.data().size == 7
        assert CartesianTwist.Zero("ee").data().size == 6
        with pytest.raises(IncompatibleSizeError):
            pose.set_data(np.zeros(6))
        twist = CartesianTwist("ee")
        twist.set_data([1, 2, 3, 4, 5, 6])
        assert twist.to_list() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

    def test_set_zero_keeps_flag(self, rng):
        """set_zero resets values without emptying the state."""
        state = CartesianState.Random("ee", rng=rng)
        state.set_zero()
        assert not state.is_empty()
        assert np.allclose(state.get_twist(), 0.0)
        assert np.allclose(state.get_orientation(), quat.IDENTITY)

    def test_transformation_matrix(self):
        """The homogeneous matrix matches the pose and converts back."""
        pose = CartesianPose(
            "ee",
            "base",
            position=[1.0, 2.0, 3.0],
            orientation=quat.from_axis_angle(_Z, math.pi / 2),
        )
        matrix = pose.get_transformation_matrix()
        assert np.allclose(matrix[:3, 3], [1.0, 2.0, 3.0])
        assert np.allclose(matrix[:3, :3] @ [1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
        back = CartesianPose.from_transformation_matrix("ee", matrix, "base")
        assert np.allclose(back.get_position(), pose.get_position())
        _assert_same_rotation(back.get_orientation(), pose.get_orientation())

    def test_orientation_matrix(self):
        """Orientation can be set and read as a rotation matrix."""
        state = CartesianState("ee")
        matrix = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        state.set_orientation_matrix(matrix)
        _assert_same_rotation(state.get_orientation(), quat.from_axis_angle(_Z, math.pi / 2))
        assert np.allclose(state.get_orientation_matrix(), matrix)

    def test_se3_round_trip(self, rng):
        """Poses survive conversion to and from sophuspy SE3."""
        pose = CartesianPose.Random("ee", "base", rng=rng)
        back = CartesianPose.from_se3("ee", pose.to_se3(), "base")
        assert np.allclose(back.get_position(), pose.get_position())
        _assert_same_rotation(back.get_orientation(), pose.get_orientation())

    def test_copy_is_independent(self):
        """Copies do not share field storage."""
        pose = CartesianPose("ee", position=[1.0, 0.0, 0.0])
        duplicate = pose.copy()
        duplicate.set_position([5.0, 5.0, 5.0])
        assert np.allclose(pose.get_position(), [1.0, 0.0, 0.0])

    def test_repr(self):
        assert "Empty" in repr(CartesianPose("ee"))
        assert "base" in repr(CartesianPose.Identity("ee", "base"))


class TestComposition:
    """Tests for SE(3) composition and inversion."""

    def test_compose_poses(self):
        """Composing parent and child poses expresses the child in the parent frame."""
        robot = CartesianPose(
            "robot",
            "world",
            position=[1.0, 0.0, 0.0],
            orientation=quat.from_axis_angle(_Z, math.pi / 2),
        )
        ee = CartesianPose("ee", "robot", position=[1.0, 0.0, 0.0])
        result = robot * ee
        assert isinstance(result, CartesianPose)
        assert result.get_name() == "ee"
        assert result.get_reference_frame() == "world"
        assert np.allclose(result.get_position(), [1.0, 1.0, 0.0])
        _assert_same_rotation(result.get_orientation(), quat.from_axis_angle(_Z, math.pi / 2))

    def test_compose_requires_matching_frame(self):
        """Composition needs the right operand expressed in the left operand's frame."""
        a = CartesianPose.Identity("a", "world")
        b = CartesianPose.Identity("b", "world")
        with pytest.raises(IncompatibleStatesError):
            a * b

    def test_compose_adds_transport_velocity(self):
        """A rotating frame adds transport velocity to the composed state."""
        rotating = CartesianState.Identity("robot", "world")
        rotating.set_angular_velocity(_Z)
        point = CartesianPose("ee", "robot", position=[1.0, 0.0, 0.0])
        result = rotating * point
        assert isinstance(result, CartesianPose)
        full = rotating * CartesianState.from_state(point)
        assert np.allclose(full.get_linear_velocity(), [0.0, 1.0, 0.0])
        assert np.allclose(full.get_angular_velocity(), _Z)

    def test_pose_on_twist_returns_twist(self):
        """Pose times twist is a twist."""
        pose = CartesianPose.Identity("robot", "world")
        twist = CartesianTwist("ee", "robot", linear_velocity=[1.0, 0.0, 0.0])
        assert isinstance(pose * twist, CartesianTwist)

    def test_inverse(self):
        """Inverse swaps name and frame and undoes the pose."""
        pose = CartesianPose(
            "ee",
            "base",
            position=[1.0, 2.0, 3.0],
            orientation=quat.from_axis_angle(_Z, math.pi / 2),
        )
        inverse = pose.inverse()
        assert inverse.get_name() == "base"
        assert inverse.get_reference_frame() == "ee"
        assert np.allclose(inverse.get_position(), [-2.0, 1.0, -3.0])
        identity = pose * inverse
        assert np.allclose(identity.get_position(), 0.0, atol=1e-12)
        _assert_same_rotation(identity.get_orientation(), quat.IDENTITY)

    def test_inverse_is_involution(self, rng):
        """Inverting twice gives the original state back."""
        state = CartesianState.Random("ee", "base", rng=rng)
        twice = state.inverse().inverse()
        assert twice.get_name() == "ee"
        assert twice.get_reference_frame() == "base"
        assert np.allclose(twice.get_position(), state.get_position())
        assert np.allclose(twice.get_wrench(), state.get_wrench())
        _assert_same_rotation(twice.get_orientation(), state.get_orientation())

    def test_transform_point(self):
        """A pose times a 3-vector transforms the point."""
        pose = CartesianPose(
            "ee",
            "base",
            position=[0.0, 0.0, 1.0],
            orientation=quat.from_axis_angle(_Z, math.pi / 2),
        )
        assert np.allclose(pose * np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 1.0])


class TestAddition:
    """Tests for addition, subtraction and negation."""

    def test_add_then_subtract_round_trip(self, rng):
        """a + b - b should give back a."""
        a = CartesianState.Random("a", "world", rng=rng)
        b = CartesianState.Random("b", "world", rng=rng)
        result = a + b - b
        assert np.allclose(result.get_position(), a.get_position())
        assert np.allclose(result.get_twist(), a.get_twist())
        assert np.allclose(result.get_wrench(), a.get_wrench())
        _assert_same_rotation(result.get_orientation(), a.get_orientation())

    def test_add_same_projection_keeps_type(self):
        """Adding two twists gives a twist."""
        a = CartesianTwist("a", linear_velocity=[1.0, 0.0, 0.0])
        b = CartesianTwist("b", linear_velocity=[0.0, 2.0, 0.0])
        result = a + b
        assert isinstance(result, CartesianTwist)
        assert np.allclose(result.get_linear_velocity(), [1.0, 2.0, 0.0])

    def test_add_generic_state_gives_generic_state(self):
        """Mixing a generic state with a projection gives a generic state."""
        state = CartesianState.Identity("a")
        pose = CartesianPose.Identity("b")
        result = state + pose
        assert type(result) is CartesianState

    def test_different_projections_are_incompatible(self):
        """A pose and a twist cannot be added."""
        pose = CartesianPose.Identity("a")
        twist = CartesianTwist.Zero("b")
        with pytest.raises(IncompatibleStatesError):
            pose + twist

    def test_incompatible_frames(self):
        """States in unrelated frames cannot be added."""
        a = CartesianTwist.Zero("a", "f1")
        b = CartesianTwist.Zero("b", "f2")
        with pytest.raises(IncompatibleStatesError):
            a + b

    def test_empty_operand(self):
        """Adding an empty state should raise."""
        with pytest.raises(EmptyStateError):
            CartesianTwist.Zero("a") + CartesianTwist("b")

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            CartesianTwist.Zero("a") + 1.0

    def test_negation(self):
        """Negation flips the position and inverts the rotation."""
        pose = CartesianPose(
            "ee", position=[1.0, 2.0, 3.0], orientation=quat.from_axis_angle(_Z, 0.5)
        )
        negated = -pose
        assert np.allclose(negated.get_position(), [-1.0, -2.0, -3.0])
        _assert_same_rotation(negated.get_orientation(), quat.from_axis_angle(_Z, -0.5))


class TestScaling:
    """Tests for scalar and gain-matrix scaling."""

    def test_scalar_both_sides(self):
        """Scalars scale from either side and divide."""
        twist = CartesianTwist("ee", linear_velocity=[1.0, 2.0, 3.0], angular_velocity=[0.1, 0.2, 0.3])
        assert np.allclose((twist * 2.0).data(), 2.0 * twist.data())
        assert np.allclose((2.0 * twist).data(), 2.0 * twist.data())
        assert np.allclose((twist / 2.0).data(), 0.5 * twist.data())

    def test_scaling_distributes_over_addition(self, rng):
        """Scaling should distribute over addition."""
        a = CartesianTwist.Random("a", rng=rng)
        b = CartesianTwist.Random("b", rng=rng)
        assert np.allclose((3.0 * (a + b)).data(), (3.0 * a + 3.0 * b).data())

    def test_scalar_products_associate(self, rng):
        """(a * b) * s should equal a * (b * s) for twists and small rotations."""
        twist = CartesianTwist.Random("ee", rng=rng)
        assert np.allclose(((2.0 * 3.0) * twist).data(), (2.0 * (3.0 * twist)).data())
        pose = CartesianPose("ee", orientation=quat.from_axis_angle([1.0, 1.0, 0.0], 0.2))
        _assert_same_rotation(((0.5 * 3.0) * pose).get_orientation(), (0.5 * (3.0 * pose)).get_orientation())

    def test_orientation_scaled_on_rotation_group(self):
        """Halving a pose halves its rotation angle."""
        pose = CartesianPose("ee", orientation=quat.from_axis_angle(_Z, math.pi / 2))
        half = pose * 0.5
        _assert_same_rotation(half.get_orientation(), quat.from_axis_angle(_Z, math.pi / 4))

    def test_divide_by_zero(self):
        """Dividing by zero should raise."""
        with pytest.raises(ZeroDivisionError):
            CartesianTwist.Zero("ee") / 0.0

    def test_gain_matrix(self):
        """A 6x6 gain matrix scales each component, from either side."""
        twist = CartesianTwist("ee", linear_velocity=[1.0, 1.0, 1.0], angular_velocity=[1.0, 1.0, 1.0])
        gain = np.diag([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        assert np.allclose((gain * twist).data(), [1, 2, 3, 4, 5, 6])
        assert np.allclose((twist * gain).data(), [1, 2, 3, 4, 5, 6])

    def test_gain_matrix_wrong_size(self):
        """A gain matrix of the wrong size should be rejected."""
        with pytest.raises(IncompatibleSizeError):
            np.eye(5) * CartesianTwist.Zero("ee")


class TestClampAndNorms:
    """Tests for clamping, norms and distances."""

    def test_clamp_truncates_norm(self):
        """Clamping shortens a vector to the limit and keeps its direction."""
        twist = CartesianTwist("ee", linear_velocity=[3.0, 4.0, 0.0], angular_velocity=[0.0, 0.0, 0.5])
        twist.clamp(1.0, 1.0)
        assert np.allclose(twist.get_linear_velocity(), [0.6, 0.8, 0.0])
        assert np.allclose(twist.get_angular_velocity(), [0.0, 0.0, 0.5])

    def test_clamp_dead_zone(self):
        """Vectors below the noise ratio snap to zero."""
        twist = CartesianTwist("ee", linear_velocity=[0.05, 0.0, 0.0], angular_velocity=[0.0, 0.0, 0.5])
        clamped = twist.clamped(1.0, 1.0, linear_noise_ratio=0.1, angular_noise_ratio=0.1)
        assert np.allclose(clamped.get_linear_velocity(), 0.0)
        assert np.allclose(clamped.get_angular_velocity(), [0.0, 0.0, 0.5])
        # clamped() leaves the original untouched
        assert np.allclose(twist.get_linear_velocity(), [0.05, 0.0, 0.0])

    def test_clamp_is_idempotent(self, rng):
        """Clamping an already clamped twist changes nothing."""
        twist = CartesianTwist.Random("ee", rng=rng) * 10.0
        once = twist.clamped(1.0, 0.5, 0.1, 0.1)
        twice = once.clamped(1.0, 0.5, 0.1, 0.1)
        assert np.allclose(once.data(), twice.data())

    @pytest.mark.parametrize(
        "selector",
        [CartesianStateVariable.ORIENTATION, CartesianStateVariable.POSE, CartesianStateVariable.ALL],
    )
    def test_clamp_not_defined(self, selector):
        """Orientation-bearing selectors cannot be clamped."""
        with pytest.raises(NotImplementedStateError):
            CartesianState.Identity("ee").clamp_state_variable(1.0, selector)

    def test_norms(self):
        pose = CartesianPose("ee", position=[3.0, 4.0, 0.0])
        assert pose.norms(CartesianStateVariable.POSE) == pytest.approx([5.0, 1.0])

    def test_normalized(self):
        """normalized() scales each field of the selector to unit length."""
        twist = CartesianTwist("ee", linear_velocity=[3.0, 4.0, 0.0])
        unit = twist.normalized(CartesianStateVariable.TWIST)
        assert np.allclose(unit.get_linear_velocity(), [0.6, 0.8, 0.0])
        assert np.allclose(unit.get_angular_velocity(), 0.0)

    def test_dist(self):
        """Distances for position, orientation and their sum."""
        a = CartesianPose.Identity("a")
        b = CartesianPose(
            "b", position=[1.0, 0.0, 0.0], orientation=quat.from_axis_angle(_Z, math.pi / 2)
        )
        assert a.dist(b, CartesianStateVariable.POSITION) == pytest.approx(1.0)
        assert dist(a, b, CartesianStateVariable.ORIENTATION) == pytest.approx(math.pi / 2)
        assert a.dist(b, CartesianStateVariable.POSE) == pytest.approx(1.0 + math.pi / 2)

    def test_dist_incompatible(self):
        """Distance between incompatible frames should raise."""
        with pytest.raises(IncompatibleStatesError):
            CartesianPose.Identity("a", "f1").dist(CartesianPose.Identity("b", "f2"))
