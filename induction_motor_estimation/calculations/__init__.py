"""Steady-state calculations for the double-cage equivalent circuit."""

from .equivalent_circuit import (
    CircuitSolution,
    PerformancePoint,
    solve_circuit,
    calculate_torque,
    calculate_performance,
    calculate_breakdown_torque,
    calculate_starting_performance,
    calculate_torque_speed_curve,
    calculate_performance_quantities
)

__all__ = [
    'CircuitSolution',
    'PerformancePoint',
    'solve_circuit',
    'calculate_torque',
    'calculate_performance',
    'calculate_breakdown_torque',
    'calculate_starting_performance',
    'calculate_torque_speed_curve',
    'calculate_performance_quantities'
]
