"""Tests for SwerveKinematics"""

import itertools
import logging
import math

import pytest
from swerve.kinematics import SwerveKinematics
from swerve.types import (
    CentricMode,
    ChassisGeometry,
    KinematicsConfig,
    MissingHeadingError,
)


SQUARE = ChassisGeometry(width=29.0, length=29.0)
RECTANGLE = ChassisGeometry(width=31.18, length=18.0)
PLUS = ChassisGeometry(width=25.5, length=25.5)


def angle_delta(a: float, b: float) -> float:
    """Difference of two turn fractions, wrapped to [-0.5, 0.5)"""
    return (a - b + 0.5) % 1.0 - 0.5


@pytest.fixture
def square():
    """4-wheel square chassis, robot centric"""
    return SwerveKinematics(KinematicsConfig(geometry=SQUARE))


@pytest.fixture
def five_wheel():
    """5-wheel chassis with a center wheel"""
    return SwerveKinematics(
        KinematicsConfig(geometry=SQUARE, center_geometry=PLUS)
    )


def test_directive_count(square, five_wheel):
    """Test one directive per configured wheel"""
    assert len(square.compute(0.3, 0.2, 0.1)) == 4
    assert len(five_wheel.compute(0.3, 0.2, 0.1)) == 5


@pytest.mark.parametrize("heading", [0.0, 45.0, 180.0, 359.0])
@pytest.mark.parametrize("center", [None, PLUS])
def test_zero_input_zero_speed(heading, center):
    """Test no input gives zero speed and finite in-range angles"""
    kinematics = SwerveKinematics(
        KinematicsConfig(geometry=RECTANGLE, center_geometry=center),
        centric_mode=CentricMode.FIELD,
    )
    for directive in kinematics.compute(0.0, 0.0, 0.0, heading):
        assert directive.speed == 0.0
        assert math.isfinite(directive.angle)
        assert -0.5 <= directive.angle <= 0.5


def test_full_forward(square):
    """Test pure forward drives all wheels parallel at full speed"""
    for directive in square.compute(1.0, 0.0, 0.0):
        assert math.isclose(directive.speed, 1.0)
        assert math.isclose(directive.angle, 0.0, abs_tol=1e-12)


def test_full_reverse(square):
    """Test pure reverse points all wheels at half a turn"""
    for directive in square.compute(-1.0, 0.0, 0.0):
        assert math.isclose(directive.speed, 1.0)
        assert math.isclose(abs(directive.angle), 0.5)


def test_strafe_right(square):
    """Test pure strafe points all wheels a quarter turn right"""
    for directive in square.compute(0.0, 1.0, 0.0):
        assert math.isclose(directive.speed, 1.0)
        assert math.isclose(directive.angle, 0.25)


def test_partial_forward_not_normalized(square):
    """Test speeds below full authority are not scaled up"""
    for directive in square.compute(0.4, 0.0, 0.0):
        assert math.isclose(directive.speed, 0.5)


@pytest.mark.parametrize("geometry", [SQUARE, RECTANGLE])
def test_rotation_pattern(geometry):
    """Test clockwise rotation gives equal speeds and mirrored angles"""
    kinematics = SwerveKinematics(KinematicsConfig(geometry=geometry))
    fl, fr, br, bl = kinematics.compute(0.0, 0.0, 1.0)

    speeds = [d.speed for d in (fl, fr, br, bl)]
    for speed in speeds:
        assert speed > 0.0
        assert math.isclose(speed, speeds[0])

    # Front/back mirror about the forward axis, left/right about the lateral axis
    assert math.isclose(fl.angle, -bl.angle)
    assert math.isclose(fr.angle, -br.angle)
    assert math.isclose(fl.angle + fr.angle, 0.5)


def test_rotation_square_values(square):
    """Test rotation angles and speeds on a square chassis"""
    ratio = 1 / math.sqrt(2)
    expected_speed = ratio * math.hypot(0.5, 1.25)
    expected_angle = math.degrees(math.atan2(0.5, 1.25)) / 360

    fl, fr, br, bl = square.compute(0.0, 0.0, 1.0)

    assert math.isclose(fl.speed, expected_speed)
    assert math.isclose(fl.angle, expected_angle)
    assert math.isclose(fr.angle, 0.5 - expected_angle)
    assert math.isclose(br.angle, expected_angle - 0.5)
    assert math.isclose(bl.angle, -expected_angle)


def test_rotation_direction_reverses(square):
    """Test counter-clockwise rotation mirrors the clockwise pattern"""
    cw = square.compute(0.0, 0.0, 1.0)
    ccw = square.compute(0.0, 0.0, -1.0)
    for a, b in zip(cw, ccw):
        assert math.isclose(a.speed, b.speed)
        assert math.isclose(abs(angle_delta(a.angle, b.angle)), 0.5)


def test_normalization_bound():
    """Test no wheel ever exceeds full speed"""
    kinematics = SwerveKinematics(
        KinematicsConfig(geometry=RECTANGLE, center_geometry=PLUS)
    )
    values = [-1.0, -0.6, 0.0, 0.3, 1.0]
    for fwd, strafe, rcw in itertools.product(values, repeat=3):
        speeds = [abs(d.speed) for d in kinematics.compute(fwd, strafe, rcw)]
        assert max(speeds) <= 1.0 + 1e-12


def test_normalization_saturates_to_one(square):
    """Test saturated commands scale the fastest wheel to exactly 1"""
    speeds = [d.speed for d in square.compute(1.0, 1.0, 1.0)]
    assert math.isclose(max(speeds), 1.0)


def test_normalization_preserves_ratios(square):
    """Test proportional scaling keeps the path of saturated commands"""
    full = square.compute(1.0, 0.0, 1.0)
    reduced = square.compute(0.8, 0.0, 0.8)
    for a, b in zip(full, reduced):
        assert math.isclose(a.speed, b.speed)
        assert math.isclose(a.angle, b.angle)


def test_speed_scale():
    """Test bench-test scale is applied after normalization"""
    kinematics = SwerveKinematics(
        KinematicsConfig(geometry=SQUARE, speed_scale=0.5)
    )
    for directive in kinematics.compute(1.0, 0.0, 0.0):
        assert math.isclose(directive.speed, 0.5)
        assert math.isclose(directive.angle, 0.0, abs_tol=1e-12)


def test_field_mode_requires_heading(square):
    """Test FIELD mode without heading always fails"""
    square.set_centric_mode(CentricMode.FIELD)
    with pytest.raises(MissingHeadingError):
        square.compute(1.0, 0.0, 0.0)

    with pytest.raises(MissingHeadingError):
        square.compute(0.0, 0.0, 0.0, None)


def test_robot_mode_ignores_heading(square):
    """Test ROBOT mode output does not depend on heading"""
    without = square.compute(0.5, 0.2, 0.1)
    with_heading = square.compute(0.5, 0.2, 0.1, 137.0)
    assert without == with_heading


def test_field_mode_zero_heading_matches_robot(square):
    """Test zero heading leaves the input unrotated"""
    robot = square.compute(0.5, 0.2, 0.1)
    square.set_centric_mode(CentricMode.FIELD)
    field = square.compute(0.5, 0.2, 0.1, 0.0)
    for a, b in zip(robot, field):
        assert math.isclose(a.speed, b.speed)
        assert math.isclose(a.angle, b.angle)


def test_field_mode_quarter_turn(square):
    """Test field forward at 90 degrees heading drives chassis-left"""
    square.set_centric_mode(CentricMode.FIELD)
    for directive in square.compute(1.0, 0.0, 0.0, 90.0):
        assert math.isclose(directive.speed, 1.0)
        assert math.isclose(directive.angle, -0.25, abs_tol=1e-9)


@pytest.mark.parametrize("heading", [0.0, 30.0, 135.0, -60.0])
@pytest.mark.parametrize("phi", [45.0, 90.0, 200.0])
@pytest.mark.parametrize("axes", [(0.6, 0.3, 0.2), (-0.4, 0.7, -0.5), (0.5, -0.5, 0.0)])
def test_field_rotation_invariance(heading, phi, axes):
    """Test rotating input and heading together leaves directives unchanged"""
    kinematics = SwerveKinematics(
        KinematicsConfig(geometry=RECTANGLE, center_geometry=PLUS),
        centric_mode=CentricMode.FIELD,
    )
    fwd, strafe, rcw = axes
    p = math.radians(phi)
    rotated_fwd = fwd * math.cos(p) - strafe * math.sin(p)
    rotated_strafe = fwd * math.sin(p) + strafe * math.cos(p)

    base = kinematics.compute(fwd, strafe, rcw, heading)
    rotated = kinematics.compute(rotated_fwd, rotated_strafe, rcw, heading + phi)

    for a, b in zip(base, rotated):
        assert math.isclose(a.speed, b.speed, abs_tol=1e-9)
        assert math.isclose(angle_delta(a.angle, b.angle), 0.0, abs_tol=1e-9)


def test_centric_mode_switch(square):
    """Test mode change applies to the next compute"""
    assert square.centric_mode == CentricMode.ROBOT
    square.set_centric_mode(CentricMode.FIELD)
    assert square.centric_mode == CentricMode.FIELD
    square.set_centric_mode(CentricMode.ROBOT)
    square.compute(1.0, 0.0, 0.0)


def test_center_wheel_forward(five_wheel):
    """Test center wheel runs slower than corners when driving forward"""
    directives = five_wheel.compute(1.0, 0.0, 0.0)
    for corner in directives[:4]:
        assert math.isclose(corner.speed, 1.0)
    center = directives[4]
    assert math.isclose(center.speed, 1.0 / 1.25)
    assert math.isclose(center.angle, 0.0, abs_tol=1e-12)


def test_center_wheel_strafe(five_wheel):
    """Test center wheel follows a pure strafe"""
    center = five_wheel.compute(0.0, 1.0, 0.0)[4]
    assert math.isclose(center.speed, 1.0)
    assert math.isclose(center.angle, 0.25)


def test_center_wheel_rotation(five_wheel):
    """Test center wheel uses the plus geometry when rotating"""
    directives = five_wheel.compute(0.0, 0.0, 1.0)
    center = directives[4]
    assert math.isclose(center.speed, PLUS.length / PLUS.diagonal)
    assert math.isclose(center.angle, -0.25)

    # Corners are unchanged by the extra wheel
    corners = SwerveKinematics(KinematicsConfig(geometry=SQUARE)).compute(0.0, 0.0, 1.0)
    assert directives[:4] == corners


def test_debug_log_in_degrees(square, caplog):
    """Test debug output reports steering in degrees and stopped wheels"""
    with caplog.at_level(logging.DEBUG, logger="swerve.kinematics"):
        square.compute(0.0, 1.0, 0.0)
        square.compute(0.0, 0.0, 0.0)

    assert "1.000@+90.0deg" in caplog.text
    assert "Directives: stop stop stop stop" in caplog.text
