"""
Induction Motor Parameter Estimation Package

Estimates the double-cage equivalent circuit (with core losses) of an
induction motor from catalog performance data, using a damped
Newton-Raphson solver with a change of variables and a determinant check
on the Jacobian.

Usage:
    from induction_motor_estimation import estimate_motor_parameters

    result = estimate_motor_parameters(
        slip=0.02,
        efficiency=0.9,
        power_factor=0.85,
        breakdown_torque=2.5,
        locked_rotor_torque=1.2,
        locked_rotor_current=6.0,
        kx=0.5,
        kr=1.0
    )
"""

from .models import (
    MotorPerformanceSpec,
    LinearRestrictions,
    PerformanceTargets,
    create_performance_spec_from_rpm,
    DoubleCageParameters
)

from .calculations import (
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

from .core import (
    CircuitState,
    to_constrained,
    from_constrained,
    build_initial_parameters,
    build_initial_state,
    ResidualEvaluator,
    estimate_jacobian,
    Termination,
    SolverSettings,
    SolverHistory,
    DampedNewtonSolver,
    EstimationResult,
    fold_positive,
    solve,
    estimate_motor_parameters
)

__version__ = "1.0.0"

__all__ = [
    # Main entry points
    'solve',
    'estimate_motor_parameters',
    'DampedNewtonSolver',
    'EstimationResult',
    'SolverSettings',
    'SolverHistory',
    'Termination',

    # Models
    'MotorPerformanceSpec',
    'LinearRestrictions',
    'PerformanceTargets',
    'create_performance_spec_from_rpm',
    'DoubleCageParameters',

    # Calculations
    'CircuitSolution',
    'PerformancePoint',
    'solve_circuit',
    'calculate_torque',
    'calculate_performance',
    'calculate_breakdown_torque',
    'calculate_starting_performance',
    'calculate_torque_speed_curve',
    'calculate_performance_quantities',

    # Solver internals
    'CircuitState',
    'to_constrained',
    'from_constrained',
    'build_initial_parameters',
    'build_initial_state',
    'ResidualEvaluator',
    'estimate_jacobian',
    'fold_positive'
]
