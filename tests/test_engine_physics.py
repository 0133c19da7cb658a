import random

import pytest

from racer_sim.engine import ControlInput, VehicleKinematics, VehicleSpec


def _kinematics(position=(0.5, 0.5)) -> VehicleKinematics:
    return VehicleKinematics(position, VehicleSpec())


def test_velocity_stays_within_limits_for_any_controls():
    kin = _kinematics()
    spec = kin.spec
    rng = random.Random(3)
    for _ in range(2000):
        kin.update(ControlInput(turn=rng.uniform(-1, 1), throttle=rng.choice((-1.0, 0.0, 1.0, rng.uniform(-1, 1)))))
        assert spec.max_reverse_speed <= kin.pose.velocity <= spec.max_forward_speed


def test_full_throttle_converges_to_forward_limit():
    kin = _kinematics()
    previous = 0.0
    for _ in range(200):
        kin.update(ControlInput(turn=0.0, throttle=1.0))
        assert kin.pose.velocity >= previous
        assert kin.pose.velocity <= kin.spec.max_forward_speed
        previous = kin.pose.velocity
    assert kin.pose.velocity == pytest.approx(kin.spec.max_forward_speed)


def test_reverse_is_capped_by_smaller_limit():
    kin = _kinematics()
    for _ in range(200):
        kin.update(ControlInput(turn=0.0, throttle=-1.0))
    assert kin.pose.velocity == pytest.approx(kin.spec.max_reverse_speed)
    assert abs(kin.spec.max_reverse_speed) < kin.spec.max_forward_speed


def test_first_tick_from_rest_applies_jerk_and_friction():
    kin = _kinematics()
    kin.update(ControlInput(turn=0.0, throttle=1.0))
    assert kin.pose.acceleration == pytest.approx(0.001)
    assert kin.pose.velocity == pytest.approx(0.001 * 0.97)
    assert kin.pose.position[0] == pytest.approx(0.5)
    assert kin.pose.position[1] == pytest.approx(0.5 - 0.001 * 0.97)


def test_coasting_decays_with_friction():
    kin = _kinematics()
    kin.pose.velocity = 0.005
    kin.update(ControlInput())
    assert kin.pose.acceleration == 0.0
    assert kin.pose.velocity == pytest.approx(0.005 * 0.97)


def test_no_steering_below_minimum_speed():
    kin = _kinematics()
    kin.pose.velocity = 0.0001
    kin.update(ControlInput(turn=1.0, throttle=0.0))
    assert kin.pose.rotation == 0.0


def test_steering_scales_with_speed():
    kin = _kinematics()
    kin.pose.velocity = kin.spec.max_forward_speed
    kin.update(ControlInput(turn=1.0, throttle=1.0))
    # Velocity clamps back to the limit before rotation is applied.
    assert kin.pose.rotation == pytest.approx(500.0 * 0.008)


def test_sideways_heading_moves_half_speed_along_x():
    kin = _kinematics()
    kin.pose.rotation = 90.0
    kin.pose.velocity = 0.008
    kin.update(ControlInput())
    moved = 0.008 * 0.97
    assert kin.pose.position[0] == pytest.approx(0.5 + moved / 2)
    assert kin.pose.position[1] == pytest.approx(0.5, abs=1e-12)


def test_reset_restores_construction_position():
    kin = _kinematics((0.2, 0.7))
    for _ in range(50):
        kin.update(ControlInput(turn=1.0, throttle=1.0))
    assert kin.pose.position != (0.2, 0.7)

    kin.reset()
    assert kin.pose.position == (0.2, 0.7)
    assert kin.pose.velocity == 0.0
    assert kin.pose.acceleration == 0.0
    assert kin.pose.rotation == 0.0


def test_skeleton_runs_front_to_rear_in_output_space():
    kin = _kinematics()
    front, rear = kin.skeleton((1000.0, 500.0))
    assert front == pytest.approx((505.0, 250.0))
    assert rear == pytest.approx((505.0, 270.0))


def test_spec_rejects_inverted_speed_limits():
    with pytest.raises(ValueError):
        VehicleSpec(max_forward_speed=-0.01)
    with pytest.raises(ValueError):
        VehicleSpec(friction=1.5)


def test_control_input_clamping():
    control = ControlInput.clamped(3.0, -7.5)
    assert control.turn == 1.0
    assert control.throttle == -1.0
