"""
Double-cage equivalent circuit parameters with a core-loss branch.
"""

from dataclasses import dataclass, astuple, replace
from typing import Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class DoubleCageParameters:
    """
    Per-phase double-cage equivalent circuit parameters (all in per-unit).

    Circuit topology:

        Rs      Xs
    ○──┴┴┴──┬┬┬┬──┬──────┬───────┬─────────┐
                  │      │       │         │
                  Rc     Xm    Rr1/s     Rr2/s
                  │      │       │         │
                  │      │      Xr1       Xr2
                  │      │       │         │
    ○─────────────┴──────┴───────┴─────────┘

    Attributes:
        Rs: Stator resistance
        Xs: Stator leakage reactance
        Xm: Magnetizing reactance
        Rr1: Inner cage resistance
        Xr1: Inner cage reactance
        Rr2: Outer cage resistance
        Xr2: Outer cage reactance
        Rc: Core loss resistance

    No validation is done here: the solver evaluates transient,
    possibly nonphysical circuits while estimating derivatives.
    """
    Rs: float
    Xs: float
    Xm: float
    Rr1: float
    Xr1: float
    Rr2: float
    Xr2: float
    Rc: float

    NAMES = ('Rs', 'Xs', 'Xm', 'Rr1', 'Xr1', 'Rr2', 'Xr2', 'Rc')

    @classmethod
    def from_sequence(cls, z: Sequence[float]) -> 'DoubleCageParameters':
        """Build from [Rs, Xs, Xm, Rr1, Xr1, Rr2, Xr2, Rc]."""
        if len(z) != 8:
            raise ValueError(f"Expected 8 circuit parameters, got {len(z)}")
        return cls(*(float(v) for v in z))

    def as_tuple(self) -> Tuple[float, ...]:
        return astuple(self)

    def as_array(self) -> np.ndarray:
        return np.array(self.as_tuple())

    @property
    def is_physical(self) -> bool:
        """True when every element is strictly positive."""
        return all(v > 0 for v in self.as_tuple())

    def with_leakage_saturation(self, factor: float) -> 'DoubleCageParameters':
        """Copy with Xs, Xr1 and Xr2 scaled by a saturation factor."""
        return replace(
            self,
            Xs=factor * self.Xs,
            Xr1=factor * self.Xr1,
            Xr2=factor * self.Xr2
        )

    @property
    def Zs(self) -> complex:
        """Stator impedance."""
        return complex(self.Rs, self.Xs)

    @property
    def Zm(self) -> complex:
        """Magnetizing branch impedance (Rc in parallel with jXm)."""
        jXm = complex(0, self.Xm)
        return (jXm * self.Rc) / (jXm + self.Rc)

    def Zr1(self, slip):
        """Inner cage impedance at given slip."""
        return self.Rr1 / slip + 1j * self.Xr1

    def Zr2(self, slip):
        """Outer cage impedance at given slip."""
        return self.Rr2 / slip + 1j * self.Xr2

    def Zr(self, slip):
        """Rotor impedance (both cages in parallel) at given slip."""
        Zr1 = self.Zr1(slip)
        Zr2 = self.Zr2(slip)
        return Zr1 * Zr2 / (Zr1 + Zr2)

    def __str__(self) -> str:
        return "  ".join(
            f"{name}={value:.5f}" for name, value in zip(self.NAMES, self.as_tuple())
        )
