"""
Catalog performance data and linear restrictions for parameter estimation.
Contains the measurable quantities the equivalent circuit must reproduce.
"""

from dataclasses import dataclass
from typing import Sequence
import math

import numpy as np


@dataclass(frozen=True)
class MotorPerformanceSpec:
    """
    Motor full-load and starting performance (manufacturer data).

    These six quantities drive the whole estimation: the solver looks for
    the double-cage circuit whose steady-state behaviour reproduces them.

    Attributes:
        slip: Full-load slip [pu]
        efficiency: Full-load efficiency (0-1)
        power_factor: Full-load power factor (0-1)
        breakdown_torque: Breakdown torque as a multiple of full-load torque
        locked_rotor_torque: Locked-rotor torque as a multiple of full-load torque
        locked_rotor_current: Locked-rotor current [pu]
    """

    slip: float
    efficiency: float
    power_factor: float
    breakdown_torque: float
    locked_rotor_torque: float
    locked_rotor_current: float

    def __post_init__(self):
        """Validate inputs."""
        self._validate()

    def _validate(self):
        """Validate input parameters."""
        if not 0 < self.slip < 1:
            raise ValueError(f"Slip must be in (0, 1), got {self.slip}")
        if not 0 < self.efficiency <= 1:
            raise ValueError(f"Efficiency must be in (0, 1], got {self.efficiency}")
        # pf = 1 leaves no reactive power target to normalise against
        if not 0 < self.power_factor < 1:
            raise ValueError(f"Power factor must be in (0, 1), got {self.power_factor}")
        if self.breakdown_torque <= 0:
            raise ValueError(
                f"Breakdown torque ratio must be positive, got {self.breakdown_torque}"
            )
        if self.locked_rotor_torque <= 0:
            raise ValueError(
                f"Locked rotor torque ratio must be positive, got {self.locked_rotor_torque}"
            )
        if self.locked_rotor_current <= 0:
            raise ValueError(
                f"Locked rotor current must be positive, got {self.locked_rotor_current}"
            )

    @property
    def mechanical_power(self) -> float:
        """Full-load mechanical power [pu]."""
        return self.power_factor * self.efficiency

    @property
    def reactive_power(self) -> float:
        """Full-load reactive power [pu]."""
        return math.sin(math.acos(self.power_factor))

    @property
    def torque_full_load(self) -> float:
        """Full-load torque [pu]."""
        return self.mechanical_power / (1 - self.slip)

    def as_vector(self) -> np.ndarray:
        """Performance data as [sf, eff, pf, Tb, Tlr, Ilr]."""
        return np.array([
            self.slip,
            self.efficiency,
            self.power_factor,
            self.breakdown_torque,
            self.locked_rotor_torque,
            self.locked_rotor_current
        ])

    @classmethod
    def from_vector(cls, p: Sequence[float]) -> 'MotorPerformanceSpec':
        """Build from the catalog ordering [sf, eff, pf, Tb, Tlr, Ilr]."""
        if len(p) != 6:
            raise ValueError(f"Expected 6 performance values, got {len(p)}")
        return cls(
            slip=float(p[0]),
            efficiency=float(p[1]),
            power_factor=float(p[2]),
            breakdown_torque=float(p[3]),
            locked_rotor_torque=float(p[4]),
            locked_rotor_current=float(p[5])
        )

    def __repr__(self) -> str:
        return (
            f"MotorPerformanceSpec(\n"
            f"  Slip: {self.slip:.4f} ({self.slip*100:.2f}%)\n"
            f"  Efficiency: {self.efficiency:.3f}, Power Factor: {self.power_factor:.3f}\n"
            f"  Breakdown torque: {self.breakdown_torque:.2f} x T_fl\n"
            f"  Locked rotor torque: {self.locked_rotor_torque:.2f} x T_fl\n"
            f"  Locked rotor current: {self.locked_rotor_current:.2f} pu\n"
            f")"
        )


@dataclass(frozen=True)
class LinearRestrictions:
    """
    Linear restrictions that remove two parameters from the search.

    Attributes:
        kx: Outer cage reactance ratio, Xr2 = kx * Xs
        kr: Stator resistance ratio, Rs = kr * Rr1
    """

    kx: float
    kr: float

    def __post_init__(self):
        if self.kx < 0:
            raise ValueError(f"kx must be non-negative, got {self.kx}")
        if self.kr < 0:
            raise ValueError(f"kr must be non-negative, got {self.kr}")


@dataclass(frozen=True)
class PerformanceTargets:
    """
    Absolute per-unit targets the circuit must reproduce.

    Ordering matches the performance oracle output:
    [Pm, Q, Tb, Tlr, Ilr, eff].
    """

    mechanical_power: float
    reactive_power: float
    breakdown_torque: float
    locked_rotor_torque: float
    locked_rotor_current: float
    efficiency: float

    NAMES = ('Pm', 'Q', 'Tb', 'Tlr', 'Ilr', 'eff')

    @classmethod
    def from_spec(cls, spec: MotorPerformanceSpec) -> 'PerformanceTargets':
        """Derive the target vector from catalog data."""
        T_fl = spec.torque_full_load
        return cls(
            mechanical_power=spec.mechanical_power,
            reactive_power=spec.reactive_power,
            breakdown_torque=spec.breakdown_torque * T_fl,
            locked_rotor_torque=spec.locked_rotor_torque * T_fl,
            locked_rotor_current=spec.locked_rotor_current,
            efficiency=spec.efficiency
        )

    def as_array(self) -> np.ndarray:
        return np.array([
            self.mechanical_power,
            self.reactive_power,
            self.breakdown_torque,
            self.locked_rotor_torque,
            self.locked_rotor_current,
            self.efficiency
        ])


def create_performance_spec_from_rpm(
    rpm_rated: float,
    frequency: float,
    pole_pairs: int,
    efficiency: float,
    power_factor: float,
    breakdown_torque: float,
    locked_rotor_torque: float,
    locked_rotor_current: float
) -> MotorPerformanceSpec:
    """
    Create performance data from a catalog entry giving rated speed.

    Args:
        rpm_rated: Rated speed [rpm]
        frequency: Supply frequency [Hz]
        pole_pairs: Number of pole pairs
        efficiency: Full-load efficiency
        power_factor: Full-load power factor
        breakdown_torque: Tb / T_fl
        locked_rotor_torque: Tlr / T_fl
        locked_rotor_current: Ilr / I_fl

    Returns:
        MotorPerformanceSpec with the slip derived from the rated speed
    """
    if frequency <= 0:
        raise ValueError(f"Frequency must be positive, got {frequency}")
    if pole_pairs < 1:
        raise ValueError(f"Pole pairs must be >= 1, got {pole_pairs}")

    rpm_sync = 60 * frequency / pole_pairs
    return MotorPerformanceSpec(
        slip=(rpm_sync - rpm_rated) / rpm_sync,
        efficiency=efficiency,
        power_factor=power_factor,
        breakdown_torque=breakdown_torque,
        locked_rotor_torque=locked_rotor_torque,
        locked_rotor_current=locked_rotor_current
    )
