"""Newton-Raphson solver, change of variables and convergence tracking."""

from .variables import (
    CircuitState,
    to_constrained,
    from_constrained,
    build_initial_parameters,
    build_initial_state
)

from .objective import (
    PerformanceOracle,
    ResidualEvaluator
)

from .jacobian import estimate_jacobian

from .convergence import (
    Termination,
    SolverSettings,
    SolverIteration,
    SolverHistory
)

from .newton_solver import (
    DampedNewtonSolver,
    EstimationResult,
    fold_positive,
    solve,
    estimate_motor_parameters
)

__all__ = [
    # Variables
    'CircuitState',
    'to_constrained',
    'from_constrained',
    'build_initial_parameters',
    'build_initial_state',

    # Objective
    'PerformanceOracle',
    'ResidualEvaluator',
    'estimate_jacobian',

    # Convergence
    'Termination',
    'SolverSettings',
    'SolverIteration',
    'SolverHistory',

    # Solver
    'DampedNewtonSolver',
    'EstimationResult',
    'fold_positive',
    'solve',
    'estimate_motor_parameters'
]
