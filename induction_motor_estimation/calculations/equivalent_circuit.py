"""
Steady-state model of the double-cage induction motor.

Solves the per-phase, per-unit equivalent circuit and derives the
performance quantities (power, reactive power, torque, current and
efficiency) that the parameter estimation has to match.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from scipy.optimize import minimize_scalar

from ..models.circuit import DoubleCageParameters
from ..utils.constants import (
    V_PHASE_PU,
    OMEGA_SYNC_PU,
    SLIP_MIN,
    BREAKDOWN_GRID_POINTS,
    BREAKDOWN_SLIP_XATOL,
    LOCKED_ROTOR_LEAKAGE_SATURATION
)


@dataclass
class CircuitSolution:
    """
    Solution of the double-cage circuit at a given slip.

    Fields hold scalars for a single operating point, or numpy arrays when
    the circuit is solved over a slip vector.
    """
    slip: float

    # Voltages
    V_phase: float          # Applied phase voltage [pu]
    E: complex              # Air gap EMF [pu]

    # Currents
    I_stator: complex       # Stator current [pu]
    I_rotor1: complex       # Inner cage current [pu]
    I_rotor2: complex       # Outer cage current [pu]

    Z_total: complex        # Impedance seen from the supply [pu]

    @property
    def I_stator_mag(self):
        """Stator current magnitude [pu]."""
        return np.abs(self.I_stator)

    @property
    def S_input(self):
        """Complex input power [pu]."""
        return self.V_phase * np.conj(self.I_stator)

    @property
    def power_factor(self):
        """Power factor cos(φ)."""
        return np.cos(np.angle(self.Z_total))


@dataclass
class PerformancePoint:
    """Motor performance at a single operating point (per-unit)."""
    slip: float

    # Electrical
    current: float          # Stator current
    power_factor: float

    # Power
    P_input: float          # Active input power
    Q_input: float          # Reactive input power
    P_airgap: float         # Air gap power
    P_output: float         # Mechanical power

    # Losses
    P_cu_stator: float      # Stator copper loss
    P_cu_rotor: float       # Rotor copper loss (both cages)
    P_iron: float           # Core loss

    # Mechanical
    torque: float
    efficiency: float

    @property
    def speed(self) -> float:
        """Rotor speed [pu of synchronous]."""
        return 1 - self.slip


def solve_circuit(
    params: DoubleCageParameters,
    slip,
    V_phase: float = V_PHASE_PU
) -> CircuitSolution:
    """
    Solve the equivalent circuit at a given slip.

    Args:
        params: Circuit parameters
        slip: Operating slip, scalar or array
        V_phase: Phase voltage [pu]

    Returns:
        CircuitSolution with all electrical quantities
    """
    # Avoid division by zero at synchronous speed
    slip = np.maximum(slip, SLIP_MIN)

    Zs = params.Zs
    Zm = params.Zm
    Zr1 = params.Zr1(slip)
    Zr2 = params.Zr2(slip)
    Zr = params.Zr(slip)

    # Magnetizing branch in parallel with the two cages, then series with Zs
    Z_total = Zs + Zm * Zr / (Zm + Zr)

    I_stator = V_phase / Z_total
    E = V_phase - Zs * I_stator

    return CircuitSolution(
        slip=slip,
        V_phase=V_phase,
        E=E,
        I_stator=I_stator,
        I_rotor1=E / Zr1,
        I_rotor2=E / Zr2,
        Z_total=Z_total
    )


def _air_gap_power(params: DoubleCageParameters, solution: CircuitSolution):
    P_cage1 = np.abs(solution.I_rotor1)**2 * params.Rr1
    P_cage2 = np.abs(solution.I_rotor2)**2 * params.Rr2
    return (P_cage1 + P_cage2) / solution.slip


def calculate_torque(
    params: DoubleCageParameters,
    slip,
    V_phase: float = V_PHASE_PU
):
    """
    Electromagnetic torque [pu] at one slip or over a slip array.

    With synchronous speed as the speed base, torque equals air gap power.
    """
    solution = solve_circuit(params, slip, V_phase)
    return _air_gap_power(params, solution) / OMEGA_SYNC_PU


def calculate_performance(
    params: DoubleCageParameters,
    slip: float,
    V_phase: float = V_PHASE_PU
) -> PerformancePoint:
    """
    Calculate motor performance at a given slip.

    Args:
        params: Circuit parameters
        slip: Operating slip
        V_phase: Phase voltage [pu]

    Returns:
        PerformancePoint with all performance metrics
    """
    solution = solve_circuit(params, slip, V_phase)
    slip = float(solution.slip)

    I_s = float(solution.I_stator_mag)
    P_cu_s = params.Rs * I_s**2
    P_cu_r = float(
        np.abs(solution.I_rotor1)**2 * params.Rr1 +
        np.abs(solution.I_rotor2)**2 * params.Rr2
    )
    P_fe = float(np.abs(solution.E)**2 / params.Rc)

    P_ag = float(_air_gap_power(params, solution))
    torque = P_ag / OMEGA_SYNC_PU
    P_out = P_ag * (1 - slip)

    S_in = solution.S_input
    P_in = float(S_in.real)
    Q_in = float(S_in.imag)

    if P_in > 0:
        efficiency = P_out / P_in
    else:
        efficiency = 0.0

    return PerformancePoint(
        slip=slip,
        current=I_s,
        power_factor=float(solution.power_factor),
        P_input=P_in,
        Q_input=Q_in,
        P_airgap=P_ag,
        P_output=P_out,
        P_cu_stator=P_cu_s,
        P_cu_rotor=P_cu_r,
        P_iron=P_fe,
        torque=torque,
        efficiency=efficiency
    )


def calculate_breakdown_torque(
    params: DoubleCageParameters,
    V_phase: float = V_PHASE_PU,
    n_points: int = BREAKDOWN_GRID_POINTS
) -> Tuple[float, float]:
    """
    Calculate breakdown (maximum) torque and corresponding slip.

    The double-cage torque curve can have more than one hump, so the
    maximum is bracketed on a coarse slip grid over (0, 1] and then
    refined with a bounded scalar search inside the bracket.

    Args:
        params: Circuit parameters
        V_phase: Phase voltage [pu]
        n_points: Number of grid points

    Returns:
        Tuple of (breakdown_torque [pu], slip_at_breakdown)
    """
    slips = np.linspace(1.0 / n_points, 1.0, n_points)
    torques = calculate_torque(params, slips, V_phase)

    k = int(np.argmax(torques))
    lower = slips[k - 1] if k > 0 else SLIP_MIN
    upper = slips[min(k + 1, n_points - 1)]

    result = minimize_scalar(
        lambda s: -float(calculate_torque(params, s, V_phase)),
        bounds=(lower, upper),
        method='bounded',
        options={'xatol': BREAKDOWN_SLIP_XATOL}
    )

    T_refined = -float(result.fun)
    if T_refined >= torques[k]:
        return T_refined, float(result.x)
    return float(torques[k]), float(slips[k])


def calculate_starting_performance(
    params: DoubleCageParameters,
    V_phase: float = V_PHASE_PU,
    leakage_saturation: float = LOCKED_ROTOR_LEAKAGE_SATURATION
) -> PerformancePoint:
    """
    Calculate starting (locked rotor) performance.

    The linear circuit underestimates the starting current of a real
    machine, whose leakage flux paths saturate at several times rated
    current. The leakage reactances are scaled by ``leakage_saturation``
    for this operating point only.

    Args:
        params: Circuit parameters (unsaturated)
        V_phase: Phase voltage [pu]
        leakage_saturation: Leakage reactance factor at standstill,
            1.0 for the linear circuit

    Returns:
        PerformancePoint at standstill (slip = 1)
    """
    saturated = params.with_leakage_saturation(leakage_saturation)
    return calculate_performance(saturated, 1.0, V_phase)


def calculate_torque_speed_curve(
    params: DoubleCageParameters,
    slip_range: Tuple[float, float] = (0.001, 1.0),
    n_points: int = 100,
    V_phase: float = V_PHASE_PU
) -> List[PerformancePoint]:
    """
    Calculate torque-speed characteristic.

    Args:
        params: Circuit parameters
        slip_range: (min_slip, max_slip)
        n_points: Number of calculation points
        V_phase: Phase voltage [pu]

    Returns:
        List of PerformancePoint objects
    """
    if n_points < 2:
        raise ValueError(f"n_points must be >= 2, got {n_points}")

    slips = [slip_range[0] + i * (slip_range[1] - slip_range[0]) / (n_points - 1)
             for i in range(n_points)]

    return [calculate_performance(params, s, V_phase) for s in slips]


def calculate_performance_quantities(
    slip: float,
    z: Sequence[float],
    leakage_saturation: float = LOCKED_ROTOR_LEAKAGE_SATURATION
) -> np.ndarray:
    """
    Performance implied by a circuit, in the order the estimation targets.

    This is the default oracle of the Newton solver. It is a pure
    function of its arguments and accepts any z, physical or not.

    Args:
        slip: Full-load slip
        z: Circuit parameters [Rs, Xs, Xm, Rr1, Xr1, Rr2, Xr2, Rc]
        leakage_saturation: Leakage reactance factor at standstill

    Returns:
        Array [Pm, Q, Tb, Tlr, Ilr, eff]
    """
    params = DoubleCageParameters.from_sequence(z)

    full_load = calculate_performance(params, slip)
    T_b, _ = calculate_breakdown_torque(params)
    start = calculate_starting_performance(params, leakage_saturation=leakage_saturation)

    return np.array([
        full_load.P_output,
        full_load.Q_input,
        T_b,
        start.torque,
        start.current,
        full_load.efficiency
    ])
