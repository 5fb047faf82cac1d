"""Shared fixtures and synthetic performance oracles for the estimation tests"""

import sys
from pathlib import Path

# Add repository root to path to find induction_motor_estimation
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest

from induction_motor_estimation import (
    LinearRestrictions,
    MotorPerformanceSpec,
    PerformanceTargets,
    build_initial_state,
    from_constrained,
)


# z indices of the six parameters that x determines: Rr1, Rr2, Xm, Xs, Xr1, Rc
FREE_PARAMETERS = [3, 5, 2, 1, 4, 7]


@pytest.fixture
def reference_spec() -> MotorPerformanceSpec:
    """Catalog data of the reference motor."""
    return MotorPerformanceSpec(
        slip=0.02,
        efficiency=0.9,
        power_factor=0.85,
        breakdown_torque=2.5,
        locked_rotor_torque=1.2,
        locked_rotor_current=6.0,
    )


@pytest.fixture
def restrictions() -> LinearRestrictions:
    return LinearRestrictions(kx=0.5, kr=1.0)


@pytest.fixture
def pqt(reference_spec) -> np.ndarray:
    return PerformanceTargets.from_spec(reference_spec).as_array()


@pytest.fixture
def initial_z(reference_spec, restrictions) -> np.ndarray:
    return build_initial_state(reference_spec, restrictions).z


@pytest.fixture
def true_z(reference_spec, restrictions) -> np.ndarray:
    """A restriction-consistent circuit 30% away from the initial guess."""
    x0 = build_initial_state(reference_spec, restrictions).x
    return from_constrained(1.3 * x0, restrictions)


def make_quadratic_oracle(pqt: np.ndarray, true_z: np.ndarray):
    """Oracle whose outputs match pqt exactly at true_z: out = pqt * (m / m_true)**2."""
    m_true = np.asarray(true_z)[FREE_PARAMETERS]

    def oracle(slip, z):
        ratio = np.asarray(z)[FREE_PARAMETERS] / m_true
        return pqt * ratio**2

    return oracle


def make_constant_oracle(pqt: np.ndarray, level: float = 0.5):
    """Oracle that ignores the circuit, giving a zero Jacobian."""

    def oracle(slip, z):
        return pqt * level

    return oracle


def make_blind_oracle(pqt: np.ndarray, true_z: np.ndarray):
    """Quadratic oracle that never looks at Rc, giving a zero Jacobian column."""
    inner = make_quadratic_oracle(pqt, true_z)

    def oracle(slip, z):
        z = np.array(z, dtype=float)
        z[7] = true_z[7]
        return inner(slip, z)

    return oracle


def make_kinked_oracle(pqt: np.ndarray, center_z: np.ndarray, offset: float = 0.1):
    """
    Oracle with a residual offset + |m - m0| / m0 that has its kink at center_z.

    Forward differences at the kink see a regular Jacobian, but every Newton
    step moves away from the minimum, so no step is ever accepted.
    """
    m0 = np.asarray(center_z)[FREE_PARAMETERS]

    def oracle(slip, z):
        deviation = np.abs(np.asarray(z)[FREE_PARAMETERS] - m0) / m0
        return pqt * (1 - (offset + deviation))

    return oracle


class RecordingOracle:
    """Wraps an oracle and keeps every z it was called with."""

    def __init__(self, oracle):
        self.oracle = oracle
        self.calls = []

    def __call__(self, slip, z):
        self.calls.append(np.array(z, dtype=float))
        return self.oracle(slip, z)


def make_saturating_oracle(pqt: np.ndarray, true_z: np.ndarray, threshold: float = 0.1):
    """
    Quadratic oracle that stops responding to Rc once its own squared error
    drops below threshold.

    The first Newton step from the initial guess lands inside that region,
    so the Jacobian of the next iteration has a zero Rc column.
    """
    inner = make_quadratic_oracle(pqt, true_z)

    def oracle(slip, z):
        out = inner(slip, z)
        y = 1 - out / pqt
        if y @ y < threshold:
            z = np.array(z, dtype=float)
            z[7] = true_z[7]
            out = inner(slip, z)
        return out

    return oracle
