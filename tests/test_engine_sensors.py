import random

import pytest

from racer_sim.engine import ControlInput, Vehicle, VehicleSpec
from racer_sim.engine.spatial import RAY_LAYOUT

OUTPUT = (1000.0, 500.0)


def _vehicle(position=(0.5, 0.5)) -> Vehicle:
    # 10 x 20 px body with its front-left corner at (500, 250).
    return Vehicle(position, VehicleSpec(), output_size=OUTPUT)


def _wall_at(y: float, x0: float = 0.497, x1: float = 0.507):
    return ((x0 * OUTPUT[0], y * OUTPUT[1]), (x1 * OUTPUT[0], y * OUTPUT[1]))


def test_front_sensor_reports_wall_directly_ahead():
    vehicle = _vehicle()
    crashed = vehicle.sense([_wall_at(0.4)])

    assert crashed is False
    assert vehicle.intersections[0] == pytest.approx((0.505, 0.4))
    for point in vehicle.intersections[1:]:
        assert point == (0.0, 0.0)


def test_front_ray_geometry_for_unrotated_vehicle():
    vehicle = _vehicle()
    start, end = vehicle.rays[0]
    assert start == pytest.approx((505.0, 250.0))
    assert end == pytest.approx((505.0, 150.0))


def test_corner_rays_swing_out_at_fixed_offsets():
    vehicle = _vehicle()
    (sx, sy), (ex, ey) = vehicle.rays[1]
    assert (sx, sy) == pytest.approx((510.0, 250.0))
    assert ex - sx == pytest.approx(100.0 / 2 ** 0.5)
    assert ey - sy == pytest.approx(-100.0 / 2 ** 0.5)

    (sx, sy), (ex, ey) = vehicle.rays[5]
    assert (sx, sy) == pytest.approx((500.0, 270.0))
    assert ex < sx and ey > sy


def test_nearest_wall_wins_regardless_of_order():
    vehicle = _vehicle()
    vehicle.sense([_wall_at(0.3), _wall_at(0.4)])
    assert vehicle.intersections[0] == pytest.approx((0.505, 0.4))


def test_close_wall_sets_sticky_crash_flag():
    vehicle = _vehicle()
    assert vehicle.sense([_wall_at(0.496)]) is True

    # Flag survives a tick with nothing in range.
    assert vehicle.sense([]) is True
    assert vehicle.crashed is True

    vehicle.reset()
    assert vehicle.crashed is False


def test_wall_beyond_collision_distance_is_not_a_crash():
    vehicle = _vehicle()
    assert vehicle.sense([_wall_at(0.492)]) is False
    assert vehicle.intersections[0] == pytest.approx((0.505, 0.492))


def test_wall_at_collision_distance_is_a_crash():
    vehicle = _vehicle()
    # Front ray starts at (505, 250); this wall is exactly 3 px ahead.
    assert vehicle.sense([((497.0, 247.0), (507.0, 247.0))]) is True
    assert vehicle.intersections[0] == pytest.approx((0.505, 0.494))


def test_equal_distance_walls_keep_first_hit():
    flat = _wall_at(0.4)
    slanted = ((500.0, 195.0), (510.0, 205.0))

    vehicle = _vehicle()
    vehicle.sense([flat, slanted])
    assert vehicle.intersections[0] == pytest.approx((0.505, 0.4))

    vehicle.sense([slanted, flat])
    assert vehicle.intersections[0] == pytest.approx((0.505, 0.4))


def test_always_eight_rays_and_hits():
    rng = random.Random(5)
    vehicle = _vehicle()
    walls = [_wall_at(0.45, 0.2, 0.8), ((300.0, 0.0), (300.0, 500.0))]
    assert len(RAY_LAYOUT) == 8
    for _ in range(50):
        vehicle.kinematics.pose.rotation = rng.uniform(-1000, 1000)
        vehicle.kinematics.pose.position = (rng.random(), rng.random())
        vehicle.resize(OUTPUT)
        vehicle.sense(walls)
        assert len(vehicle.rays) == 8
        assert len(vehicle.intersections) == 8


def test_rays_follow_vehicle_heading():
    vehicle = _vehicle()
    vehicle.kinematics.pose.rotation = 90.0
    vehicle.resize(OUTPUT)
    (sx, sy), (ex, ey) = vehicle.rays[0]
    assert (sx, sy) == pytest.approx((510.0, 255.0))
    assert (ex, ey) == pytest.approx((610.0, 255.0))


def test_sensor_length_scales_with_output_width():
    vehicle = _vehicle()
    vehicle.resize((2000.0, 1000.0))
    (sx, sy), (ex, ey) = vehicle.rays[0]
    assert sy - ey == pytest.approx(200.0)


def test_reset_allocates_fresh_sensor_storage():
    first = _vehicle()
    second = _vehicle()
    assert first.intersections is not second.intersections
    assert first.rays is not second.rays

    first.sense([_wall_at(0.4)])
    before = first.sensors.reading
    first.reset()
    assert first.sensors.reading is not before
    assert first.intersections[0] == (0.0, 0.0)
    assert second.intersections[0] == (0.0, 0.0)


def test_recast_clears_previous_hits():
    vehicle = _vehicle()
    vehicle.sense([_wall_at(0.4)])
    assert vehicle.intersections[0] == pytest.approx((0.505, 0.4))

    vehicle.kinematics.pose.rotation = 180.0
    vehicle.update(ControlInput())
    assert vehicle.intersections == [(0.0, 0.0)] * 8

    vehicle.sense([_wall_at(0.4)])
    vehicle.resize(OUTPUT)
    assert vehicle.intersections == [(0.0, 0.0)] * 8
