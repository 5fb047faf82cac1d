"""
Forward-difference Jacobian of the residual with respect to x.
"""

import numpy as np

from .objective import ResidualEvaluator
from .variables import CircuitState


def estimate_jacobian(
    evaluator: ResidualEvaluator,
    state: CircuitState,
    base_residual: np.ndarray,
    step: float
) -> np.ndarray:
    """
    Estimate dy/dx column by column.

    Each variable is moved by ``step`` on a perturbed copy of the state, so z is
    rebuilt through the restrictions before every oracle call and the
    caller's state is left untouched.

    Args:
        evaluator: Residual evaluator
        state: Current iteration point
        base_residual: Residual at ``state``
        step: Forward-difference step h

    Returns:
        Jacobian matrix, one column per constrained variable
    """
    x = state.x
    perturbed = state.copy()
    jacobian = np.empty((base_residual.size, x.size))

    for i in range(x.size):
        x_step = x.copy()
        x_step[i] += step
        perturbed.update(x_step)

        y_step, _ = evaluator(perturbed.z)
        jacobian[:, i] = (y_step - base_residual) / step

    return jacobian
