"""
Per-unit base values, initial-guess heuristics and solver floors for
double-cage parameter estimation.
"""

# =============================================================================
# PER-UNIT BASE
# =============================================================================

V_PHASE_PU = 1.0           # Rated phase voltage [pu]
OMEGA_SYNC_PU = 1.0        # Synchronous speed [pu], torque equals air-gap power
SLIP_MIN = 1e-10           # Slip floor to avoid division by zero at sync speed


# =============================================================================
# INITIAL GUESS HEURISTICS
# =============================================================================

class InitialGuess:
    """Starting-point ratios for the double-cage circuit (not fitted values)."""

    # Xs = XS_OVER_XM * Xm
    XS_OVER_XM = 0.05

    # Xr1 = XR1_OVER_XS * Xs
    XR1_OVER_XS = 1.2

    # Rr2 = RR2_OVER_RR1 * Rr1
    RR2_OVER_RR1 = 5.0

    # Core loss resistance [pu]
    RC = 12.0


# =============================================================================
# NEWTON-RAPHSON SOLVER
# =============================================================================

FD_STEP = 1e-5             # Forward-difference step h
DAMPING_MIN = 1e-7         # Smallest damping factor hn before giving up
ERROR_TOLERANCE = 1e-6     # Squared residual norm regarded as converged
MAX_ITERATIONS = 100       # Default iteration budget


# =============================================================================
# BREAKDOWN TORQUE SEARCH
# =============================================================================

BREAKDOWN_GRID_POINTS = 400    # Coarse slip grid over (0, 1]
BREAKDOWN_SLIP_XATOL = 1e-10   # Bounded Brent tolerance on slip


# =============================================================================
# LOCKED-ROTOR SATURATION
# =============================================================================

# Leakage reactances at standstill = factor * unsaturated value.
# At 5-7 pu starting current the slot leakage paths saturate;
# 1.0 keeps the linear circuit.
LOCKED_ROTOR_LEAKAGE_SATURATION = 0.8
