"""Tests for performance data, targets and circuit parameter models"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from induction_motor_estimation import (
    DoubleCageParameters,
    LinearRestrictions,
    MotorPerformanceSpec,
    PerformanceTargets,
    create_performance_spec_from_rpm,
)


class TestMotorPerformanceSpec:
    """Catalog data validation and derived quantities"""

    def test_derived_quantities(self, reference_spec):
        assert reference_spec.mechanical_power == pytest.approx(0.765)
        assert reference_spec.reactive_power == pytest.approx(math.sqrt(1 - 0.85**2))
        assert reference_spec.torque_full_load == pytest.approx(0.765 / 0.98)

    def test_vector_round_trip(self, reference_spec):
        p = reference_spec.as_vector()
        assert_allclose(p, [0.02, 0.9, 0.85, 2.5, 1.2, 6.0])
        assert MotorPerformanceSpec.from_vector(p) == reference_spec

    def test_from_vector_wrong_length(self):
        with pytest.raises(ValueError, match="6 performance values"):
            MotorPerformanceSpec.from_vector([0.02, 0.9, 0.85])

    @pytest.mark.parametrize("field,value", [
        ("slip", 0.0),
        ("slip", 1.0),
        ("efficiency", 0.0),
        ("efficiency", 1.2),
        ("power_factor", 0.0),
        ("power_factor", 1.0),
        ("breakdown_torque", 0.0),
        ("locked_rotor_torque", -1.0),
        ("locked_rotor_current", 0.0),
    ])
    def test_rejects_out_of_range(self, reference_spec, field, value):
        """Inputs that would make a target zero or a base undefined are refused"""
        values = dict(
            slip=reference_spec.slip,
            efficiency=reference_spec.efficiency,
            power_factor=reference_spec.power_factor,
            breakdown_torque=reference_spec.breakdown_torque,
            locked_rotor_torque=reference_spec.locked_rotor_torque,
            locked_rotor_current=reference_spec.locked_rotor_current,
        )
        values[field] = value
        with pytest.raises(ValueError):
            MotorPerformanceSpec(**values)

    def test_is_immutable(self, reference_spec):
        with pytest.raises(AttributeError):
            reference_spec.slip = 0.03

    def test_from_rpm(self):
        spec = create_performance_spec_from_rpm(
            rpm_rated=1470,
            frequency=50,
            pole_pairs=2,
            efficiency=0.9,
            power_factor=0.85,
            breakdown_torque=2.5,
            locked_rotor_torque=1.2,
            locked_rotor_current=6.0,
        )
        assert spec.slip == pytest.approx(0.02)


class TestLinearRestrictions:

    def test_accepts_zero(self):
        restrictions = LinearRestrictions(kx=0.0, kr=0.0)
        assert restrictions.kx == 0.0

    @pytest.mark.parametrize("kx,kr", [(-0.1, 1.0), (0.5, -1.0)])
    def test_rejects_negative(self, kx, kr):
        with pytest.raises(ValueError):
            LinearRestrictions(kx=kx, kr=kr)


class TestPerformanceTargets:
    """Absolute targets derived from catalog data"""

    def test_from_spec(self, reference_spec):
        targets = PerformanceTargets.from_spec(reference_spec)
        T_fl = 0.765 / 0.98
        assert_allclose(
            targets.as_array(),
            [0.765, math.sqrt(1 - 0.85**2), 2.5 * T_fl, 1.2 * T_fl, 6.0, 0.9],
            rtol=1e-12,
        )

    def test_all_targets_nonzero(self, pqt):
        assert np.all(pqt != 0)


class TestDoubleCageParameters:

    def test_sequence_round_trip(self):
        z = [0.02, 0.1, 2.0, 0.03, 0.12, 0.15, 0.05, 12.0]
        params = DoubleCageParameters.from_sequence(z)
        assert params.Xm == 2.0
        assert params.Rc == 12.0
        assert params.as_tuple() == tuple(z)
        assert_allclose(params.as_array(), z)

    def test_wrong_length(self):
        with pytest.raises(ValueError, match="8 circuit parameters"):
            DoubleCageParameters.from_sequence([1.0, 2.0])

    def test_nonphysical_values_are_accepted(self):
        params = DoubleCageParameters.from_sequence([-0.01, 0.1, 2.0, 0.03, 0.12, 0.15, 0.05, 12.0])
        assert not params.is_physical

    def test_magnetizing_impedance_is_parallel(self):
        params = DoubleCageParameters.from_sequence([0.02, 0.1, 2.0, 0.03, 0.12, 0.15, 0.05, 12.0])
        expected = 1 / (1 / 12.0 + 1 / 2.0j)
        assert params.Zm == pytest.approx(expected)

    def test_rotor_impedance_is_parallel(self):
        params = DoubleCageParameters.from_sequence([0.02, 0.1, 2.0, 0.03, 0.12, 0.15, 0.05, 12.0])
        slip = 0.5
        Zr1 = 0.06 + 0.12j
        Zr2 = 0.30 + 0.05j
        assert params.Zr(slip) == pytest.approx(1 / (1 / Zr1 + 1 / Zr2))
