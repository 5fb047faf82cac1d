"""
Normalized residual between the performance targets and a circuit.
"""

from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from ..calculations.equivalent_circuit import calculate_performance_quantities
from ..models.performance import PerformanceTargets

# oracle(slip, z) -> [Pm, Q, Tb, Tlr, Ilr, eff]
PerformanceOracle = Callable[[float, Sequence[float]], Sequence[float]]


class ResidualEvaluator:
    """
    Evaluates y = (pqt - oracle(slip, z)) / pqt and err = sum(y**2).

    A zero target makes the residual undefined; MotorPerformanceSpec
    rejects the inputs that would produce one.
    """

    def __init__(
        self,
        targets: PerformanceTargets,
        slip: float,
        oracle: Optional[PerformanceOracle] = None
    ):
        self.targets = targets
        self.pqt = targets.as_array()
        self.slip = slip
        self.oracle = oracle or calculate_performance_quantities
        self.evaluations = 0

    def __call__(self, z: Sequence[float]) -> Tuple[np.ndarray, float]:
        self.evaluations += 1
        achieved = np.asarray(self.oracle(self.slip, z), dtype=float)
        if achieved.shape != (6,):
            raise ValueError(
                f"Performance oracle must return 6 values, got shape {achieved.shape}"
            )
        y = (self.pqt - achieved) / self.pqt
        return y, float(y @ y)
