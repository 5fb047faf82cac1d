"""
Change of variables between the circuit parameters and the search vector.

The linear restrictions fix Rs and Xr2, so the Newton iteration only moves
six free variables:

    x = [Rr1, Rr2 - Rr1, Xm, Xs, Xr1 - kx*Xs, Rc]

and the full circuit z = [Rs, Xs, Xm, Rr1, Xr1, Rr2, Xr2, Rc] is rebuilt
from x after every change.
"""

from typing import Sequence

import numpy as np

from ..models.circuit import DoubleCageParameters
from ..models.performance import MotorPerformanceSpec, LinearRestrictions
from ..utils.constants import InitialGuess


def to_constrained(z: Sequence[float], restrictions: LinearRestrictions) -> np.ndarray:
    """
    Map circuit parameters z to the constrained vector x.

    Args:
        z: [Rs, Xs, Xm, Rr1, Xr1, Rr2, Xr2, Rc]
        restrictions: Linear restrictions (kx, kr)

    Returns:
        x = [Rr1, Rr2 - Rr1, Xm, Xs, Xr1 - kx*Xs, Rc]
    """
    Rs, Xs, Xm, Rr1, Xr1, Rr2, Xr2, Rc = z
    return np.array([
        Rr1,
        Rr2 - Rr1,
        Xm,
        Xs,
        Xr1 - restrictions.kx * Xs,
        Rc
    ], dtype=float)


def from_constrained(x: Sequence[float], restrictions: LinearRestrictions) -> np.ndarray:
    """
    Map the constrained vector x back to circuit parameters z.

    Rs and Xr2 are filled in from the linear restrictions.
    """
    Rr1 = x[0]
    Rr2 = x[0] + x[1]
    Xm = x[2]
    Xs = x[3]
    Xr1 = restrictions.kx * x[3] + x[4]
    Rc = x[5]

    Rs = restrictions.kr * Rr1
    Xr2 = restrictions.kx * Xs

    return np.array([Rs, Xs, Xm, Rr1, Xr1, Rr2, Xr2, Rc], dtype=float)


class CircuitState:
    """
    Current point of the iteration, seen both as x and as z.

    ``update`` is the only way to move the state and always rebuilds z
    from x, so the two views cannot drift apart.
    """

    def __init__(self, x: Sequence[float], restrictions: LinearRestrictions):
        self.restrictions = restrictions
        self._x = np.empty(6)
        self._z = np.empty(8)
        self.update(x)

    @classmethod
    def from_parameters(
        cls,
        z: Sequence[float],
        restrictions: LinearRestrictions
    ) -> 'CircuitState':
        return cls(to_constrained(z, restrictions), restrictions)

    @property
    def x(self) -> np.ndarray:
        """Constrained variables (copy)."""
        return self._x.copy()

    @property
    def z(self) -> np.ndarray:
        """Circuit parameters (copy)."""
        return self._z.copy()

    @property
    def parameters(self) -> DoubleCageParameters:
        return DoubleCageParameters.from_sequence(self._z)

    def update(self, x: Sequence[float]):
        """Move to a new x and rebuild z."""
        x = np.array(x, dtype=float)
        if x.shape != (6,):
            raise ValueError(f"Expected 6 constrained variables, got shape {x.shape}")
        self._x = x
        self._z = from_constrained(x, self.restrictions)

    def copy(self) -> 'CircuitState':
        return CircuitState(self._x, self.restrictions)


def build_initial_parameters(
    spec: MotorPerformanceSpec,
    restrictions: LinearRestrictions
) -> DoubleCageParameters:
    """
    Engineering starting point for the double-cage circuit.

    Args:
        spec: Motor performance data
        restrictions: Linear restrictions (kx, kr)

    Returns:
        Initial DoubleCageParameters
    """
    Xm = 1 / spec.reactive_power
    Xs = InitialGuess.XS_OVER_XM * Xm
    Rr1 = spec.slip / spec.mechanical_power

    return DoubleCageParameters(
        Rs=restrictions.kr * Rr1,
        Xs=Xs,
        Xm=Xm,
        Rr1=Rr1,
        Xr1=InitialGuess.XR1_OVER_XS * Xs,
        Rr2=InitialGuess.RR2_OVER_RR1 * Rr1,
        Xr2=restrictions.kx * Xs,
        Rc=InitialGuess.RC
    )


def build_initial_state(
    spec: MotorPerformanceSpec,
    restrictions: LinearRestrictions
) -> CircuitState:
    """Initial guess projected onto the constrained variables."""
    initial = build_initial_parameters(spec, restrictions)
    return CircuitState.from_parameters(initial.as_tuple(), restrictions)
