"""Utility constants."""

from .constants import (
    V_PHASE_PU,
    OMEGA_SYNC_PU,
    SLIP_MIN,
    InitialGuess,
    FD_STEP,
    DAMPING_MIN,
    ERROR_TOLERANCE,
    MAX_ITERATIONS,
    BREAKDOWN_GRID_POINTS,
    BREAKDOWN_SLIP_XATOL,
    LOCKED_ROTOR_LEAKAGE_SATURATION
)

__all__ = [
    'V_PHASE_PU',
    'OMEGA_SYNC_PU',
    'SLIP_MIN',
    'InitialGuess',
    'FD_STEP',
    'DAMPING_MIN',
    'ERROR_TOLERANCE',
    'MAX_ITERATIONS',
    'BREAKDOWN_GRID_POINTS',
    'BREAKDOWN_SLIP_XATOL',
    'LOCKED_ROTOR_LEAKAGE_SATURATION'
]
