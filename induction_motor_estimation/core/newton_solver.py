"""
Damped Newton-Raphson estimation of double-cage circuit parameters.

This module runs the complete estimation:
1. Initial guess from the performance data
2. Newton iteration on the constrained variables with a forward-difference
   Jacobian and step halving until the squared residual decreases
3. Packaging of the final circuit, error and termination reason
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any

import numpy as np

from ..models.circuit import DoubleCageParameters
from ..models.performance import (
    MotorPerformanceSpec,
    LinearRestrictions,
    PerformanceTargets
)
from ..utils.constants import MAX_ITERATIONS
from .convergence import (
    SolverSettings,
    SolverHistory,
    SolverIteration,
    Termination
)
from .jacobian import estimate_jacobian
from .objective import PerformanceOracle, ResidualEvaluator
from .variables import build_initial_state


def fold_positive(x: np.ndarray) -> np.ndarray:
    """
    Fold the updated variables onto the positive half-space.

    Applied to every trial point: a variable pushed below zero comes
    back with the same magnitude instead of the step being refused.
    """
    return np.abs(x)


@dataclass
class EstimationResult:
    """
    Outcome of a solver run.

    ``parameters`` always holds the last accepted circuit, including on
    the abort paths.
    """
    parameters: DoubleCageParameters
    iterations: int
    error: float
    converged: bool
    termination: Termination

    residual: np.ndarray        # Final y
    targets: PerformanceTargets
    history: SolverHistory
    evaluations: int            # Oracle calls

    @property
    def z(self) -> Tuple[float, ...]:
        return self.parameters.as_tuple()

    def as_tuple(self) -> Tuple[Tuple[float, ...], int, float, bool]:
        """(z, iter, err, converged)"""
        return self.z, self.iterations, self.error, self.converged

    @property
    def achieved_performance(self) -> np.ndarray:
        """Oracle output at the final circuit, [Pm, Q, Tb, Tlr, Ilr, eff]."""
        return self.targets.as_array() * (1 - self.residual)

    def get_summary(self) -> Dict[str, Any]:
        """Get estimation summary."""
        achieved = self.achieved_performance
        return {
            'iterations': self.iterations,
            'error': self.error,
            'converged': self.converged,
            'termination': self.termination.value,
            'evaluations': self.evaluations,
            'parameters': dict(zip(DoubleCageParameters.NAMES, self.z)),
            'performance': {
                name: {
                    'target': target,
                    'achieved': float(value),
                    'relative_error': float(y)
                }
                for name, target, value, y in zip(
                    PerformanceTargets.NAMES,
                    self.targets.as_array(),
                    achieved,
                    self.residual
                )
            }
        }

    def __str__(self) -> str:
        status = "converged" if self.converged else f"not converged ({self.termination.value})"
        lines = [
            f"Estimation {status} after {self.iterations} iterations, "
            f"err={self.error:.3e}",
            f"  {self.parameters}",
            f"  {'':>4} {'target':>10} {'achieved':>10} {'error':>10}"
        ]
        for name, target, value, y in zip(
            PerformanceTargets.NAMES,
            self.targets.as_array(),
            self.achieved_performance,
            self.residual
        ):
            lines.append(f"  {name:>4} {target:>10.4f} {value:>10.4f} {y:>10.2e}")
        return "\n".join(lines)


class DampedNewtonSolver:
    """
    Newton-Raphson solver for the double-cage model with core losses.

    Solves for [Xs Xm Rr1 Xr1 Rr2 Rc]; Rs and Xr2 follow from the linear
    restrictions. Each step is halved until it reduces the squared
    residual; the run stops on convergence, on the iteration budget, on
    a singular Jacobian or when the damping factor underflows.

    Usage:
        solver = DampedNewtonSolver(spec, LinearRestrictions(kx=0.5, kr=1.0))
        result = solver.run()
    """

    def __init__(
        self,
        spec: MotorPerformanceSpec,
        restrictions: LinearRestrictions,
        max_iterations: int = MAX_ITERATIONS,
        oracle: Optional[PerformanceOracle] = None,
        settings: Optional[SolverSettings] = None,
        verbose: bool = False
    ):
        """
        Initialize the solver.

        Args:
            spec: Motor performance data
            restrictions: Linear restrictions (kx, kr)
            max_iterations: Maximum number of accepted Newton steps
            oracle: Performance function oracle(slip, z); defaults to the
                double-cage circuit model
            settings: Numerical constants
            verbose: Print progress messages
        """
        if max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")

        self.spec = spec
        self.restrictions = restrictions
        self.max_iterations = max_iterations
        self.oracle = oracle
        self.settings = settings or SolverSettings()
        self.verbose = verbose

    def _log(self, message: str):
        """Print message if verbose."""
        if self.verbose:
            print(message)

    def run(self) -> EstimationResult:
        """
        Run the damped Newton iteration.

        Returns:
            EstimationResult with the final circuit
        """
        settings = self.settings
        targets = PerformanceTargets.from_spec(self.spec)
        evaluator = ResidualEvaluator(targets, self.spec.slip, self.oracle)
        state = build_initial_state(self.spec, self.restrictions)
        history = SolverHistory()

        y, err = evaluator(state.z)
        iteration = 0
        termination = None
        history.add(SolverIteration(0, err, 1.0, 0, tuple(state.x)))

        self._log(
            f"Newton-Raphson estimation (kx={self.restrictions.kx}, "
            f"kr={self.restrictions.kr}, max_iter={self.max_iterations})"
        )
        self._log(f"  Initial guess: {state.parameters}")
        self._log(f"Iteration 00: err={err:.4e}")

        while err > settings.error_tolerance and iteration < self.max_iterations:
            # Base point of this outer iteration
            y0, err0 = y, err

            jacobian = estimate_jacobian(evaluator, state, y0, settings.fd_step)
            if np.linalg.det(jacobian) == 0:
                termination = Termination.SINGULAR_JACOBIAN
                self._log("Singular Jacobian; stopping.")
                break

            delta_x = np.linalg.solve(jacobian, y0)
            x_reset = state.x
            n = 0
            hn = 1.0

            # Step halving until the error decreases
            while True:
                state.update(fold_positive(x_reset - hn * delta_x))
                y, err = evaluator(state.z)

                if not np.isfinite(err) or abs(err) >= abs(err0):
                    n += 1
                    hn = 2.0 ** (-n)
                    state.update(x_reset)
                    y, err = y0, err0
                    if hn < settings.damping_min:
                        termination = Termination.STEP_UNDERFLOW
                        break
                    continue

                iteration += 1
                history.add(SolverIteration(iteration, err, hn, n, tuple(state.x)))
                self._log(
                    f"Iteration {iteration:02d}: err={err:.4e}, "
                    f"hn={hn:.3g} ({n} backtracks)"
                )
                break

            if termination is not None:
                self._log("Step size too small and no descent direction; stopping.")
                break

        if termination is None:
            if err <= settings.error_tolerance:
                termination = Termination.CONVERGED
            else:
                termination = Termination.BUDGET_EXHAUSTED

        converged = termination is Termination.CONVERGED
        self._log(f"Finished: {termination.value} (err={err:.4e}, iterations={iteration})")

        return EstimationResult(
            parameters=state.parameters,
            iterations=iteration,
            error=err,
            converged=converged,
            termination=termination,
            residual=y,
            targets=targets,
            history=history,
            evaluations=evaluator.evaluations
        )


def solve(
    spec: MotorPerformanceSpec,
    kx: float,
    kr: float,
    max_iter: int,
    oracle: Optional[PerformanceOracle] = None,
    settings: Optional[SolverSettings] = None
) -> Tuple[Tuple[float, ...], int, float, bool]:
    """
    Estimate the double-cage circuit for a motor.

    Args:
        spec: Motor performance data
        kx: Xr2 = kx * Xs
        kr: Rs = kr * Rr1
        max_iter: Maximum number of iterations
        oracle: Performance function oracle(slip, z)
        settings: Numerical constants

    Returns:
        (z, iter, err, converged) with z = (Rs, Xs, Xm, Rr1, Xr1, Rr2, Xr2, Rc)
    """
    solver = DampedNewtonSolver(
        spec,
        LinearRestrictions(kx=kx, kr=kr),
        max_iterations=max_iter,
        oracle=oracle,
        settings=settings
    )
    return solver.run().as_tuple()


def estimate_motor_parameters(
    slip: float,
    efficiency: float,
    power_factor: float,
    breakdown_torque: float,
    locked_rotor_torque: float,
    locked_rotor_current: float,
    kx: float,
    kr: float,
    max_iterations: int = MAX_ITERATIONS,
    verbose: bool = True,
    **kwargs
) -> EstimationResult:
    """
    Convenience function for quick parameter estimation.

    Args:
        slip: Full-load slip
        efficiency: Full-load efficiency
        power_factor: Full-load power factor
        breakdown_torque: Tb / T_fl
        locked_rotor_torque: Tlr / T_fl
        locked_rotor_current: Locked rotor current [pu]
        kx: Xr2 = kx * Xs
        kr: Rs = kr * Rr1
        max_iterations: Maximum number of iterations
        verbose: Print progress messages
        **kwargs: Additional options passed to DampedNewtonSolver
            (oracle, settings)

    Returns:
        EstimationResult
    """
    spec = MotorPerformanceSpec(
        slip=slip,
        efficiency=efficiency,
        power_factor=power_factor,
        breakdown_torque=breakdown_torque,
        locked_rotor_torque=locked_rotor_torque,
        locked_rotor_current=locked_rotor_current
    )
    solver = DampedNewtonSolver(
        spec,
        LinearRestrictions(kx=kx, kr=kr),
        max_iterations=max_iterations,
        verbose=verbose,
        **kwargs
    )
    return solver.run()
