"""
Convergence criteria and iteration history for the Newton-Raphson solver.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..utils.constants import FD_STEP, DAMPING_MIN, ERROR_TOLERANCE


class Termination(Enum):
    """Reason the iteration stopped."""
    CONVERGED = "converged"                    # err <= error_tolerance
    BUDGET_EXHAUSTED = "budget_exhausted"      # iteration count reached max_iter
    SINGULAR_JACOBIAN = "singular_jacobian"    # det(J) == 0
    STEP_UNDERFLOW = "step_underflow"          # damping below damping_min


@dataclass(frozen=True)
class SolverSettings:
    """
    Numerical constants of the damped Newton iteration.

    Attributes:
        fd_step: Forward-difference step h for the Jacobian
        damping_min: Smallest damping factor hn tried before giving up
        error_tolerance: Squared residual norm regarded as converged
    """
    fd_step: float = FD_STEP
    damping_min: float = DAMPING_MIN
    error_tolerance: float = ERROR_TOLERANCE

    def __post_init__(self):
        if self.fd_step <= 0:
            raise ValueError(f"fd_step must be positive, got {self.fd_step}")
        if not 0 < self.damping_min <= 1:
            raise ValueError(f"damping_min must be in (0, 1], got {self.damping_min}")
        if self.error_tolerance < 0:
            raise ValueError(
                f"error_tolerance must be non-negative, got {self.error_tolerance}"
            )


@dataclass
class SolverIteration:
    """
    Record of one accepted Newton step.

    Iteration 0 is the initial guess.
    """
    iteration: int
    error: float               # Squared residual norm after the step
    damping: float             # Damping factor hn that was accepted
    backtracks: int            # Rejected trials before acceptance
    x: tuple                   # Constrained variables after the step


class SolverHistory:
    """
    Stores the accepted iterations of a solver run.
    """

    def __init__(self):
        self.iterations: List[SolverIteration] = []

    def add(self, iteration: SolverIteration):
        """Add an iteration record."""
        self.iterations.append(iteration)

    @property
    def current(self) -> Optional[SolverIteration]:
        """Get most recent iteration."""
        return self.iterations[-1] if self.iterations else None

    @property
    def count(self) -> int:
        """Number of records, including the initial guess."""
        return len(self.iterations)

    @property
    def errors(self) -> List[float]:
        return [it.error for it in self.iterations]

    @property
    def is_monotone(self) -> bool:
        """True if every accepted step strictly reduced the error."""
        errors = self.errors
        return all(b < a for a, b in zip(errors, errors[1:]))

    def get_convergence_data(self, variable: str) -> List[float]:
        """
        Get history for a specific field of SolverIteration.

        Args:
            variable: 'error', 'damping' or 'backtracks'

        Returns:
            List of values across iterations
        """
        return [getattr(it, variable) for it in self.iterations]

    def plot_convergence(self, variable: str = 'error'):
        """
        Plot convergence of a variable (requires matplotlib).
        """
        try:
            import matplotlib.pyplot as plt

            values = self.get_convergence_data(variable)
            iterations = [it.iteration for it in self.iterations]

            plt.figure(figsize=(8, 4))
            if variable == 'error':
                plt.semilogy(iterations, values, 'b-o')
            else:
                plt.plot(iterations, values, 'b-o')
            plt.xlabel('Iteration')
            plt.ylabel(variable)
            plt.title(f'Convergence of {variable}')
            plt.grid(True)
            plt.show()

        except ImportError:
            print("matplotlib not available for plotting")
