#!/usr/bin/env python3
"""
Example script that estimates a double-cage equivalent circuit from
catalog data and plots the resulting motor characteristics.

The Newton-Raphson solver is run for a few linear restrictions so the
effect of kx and kr on convergence can be compared, then the torque and
current curves of the best circuit are plotted against slip.
"""

from __future__ import annotations

from pathlib import Path
import sys

import matplotlib.pyplot as plt

# Allow running directly from the repository root.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from induction_motor_estimation import (
    DampedNewtonSolver,
    LinearRestrictions,
    MotorPerformanceSpec,
    calculate_torque_speed_curve,
    estimate_motor_parameters,
)

RESTRICTIONS = [(0.5, 1.0), (1.0, 0.5), (0.3, 1.5)]
SLIP_CURVE_RANGE = (0.001, 1.0)
SLIP_CURVE_POINTS = 200


def _print_section(title: str) -> None:
    line = "=" * 70
    print(f"\n{line}\n{title}\n{line}")


def compare_restrictions(spec: MotorPerformanceSpec):
    _print_section("LINEAR RESTRICTION SWEEP")
    print(f"{'kx':>6} {'kr':>6} {'iter':>6} {'err':>12} {'status':>20}")
    print("-" * 56)

    best = None
    for kx, kr in RESTRICTIONS:
        solver = DampedNewtonSolver(spec, LinearRestrictions(kx=kx, kr=kr), verbose=False)
        result = solver.run()
        print(
            f"{kx:>6.2f} {kr:>6.2f} {result.iterations:>6d} "
            f"{result.error:>12.3e} {result.termination.value:>20}"
        )
        if best is None or result.error < best.error:
            best = result
    return best


def plot_characteristics(result) -> None:
    """
    Plot torque and current of the estimated circuit against slip,
    then the error history of the solver.
    """
    curve = calculate_torque_speed_curve(
        result.parameters,
        slip_range=SLIP_CURVE_RANGE,
        n_points=SLIP_CURVE_POINTS,
    )
    slips = [point.slip for point in curve]

    fig, axes = plt.subplots(1, 2, figsize=(10, 4))

    axes[0].plot(slips, [point.torque for point in curve], color="tab:blue")
    axes[0].set_xlabel("Slip")
    axes[0].set_ylabel("Torque [pu]")
    axes[0].set_title("Torque vs Slip")

    axes[1].plot(slips, [point.current for point in curve], color="tab:orange")
    axes[1].set_xlabel("Slip")
    axes[1].set_ylabel("Current [pu]")
    axes[1].set_title("Current vs Slip")

    for ax in axes:
        ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.7)

    fig.tight_layout()
    plt.show()

    result.history.plot_convergence("error")


def main() -> None:
    _print_section("DOUBLE CAGE ESTIMATION")
    result = estimate_motor_parameters(
        slip=0.02,
        efficiency=0.9,
        power_factor=0.85,
        breakdown_torque=2.5,
        locked_rotor_torque=1.2,
        locked_rotor_current=6.0,
        kx=0.5,
        kr=1.0,
        verbose=True,
    )
    print()
    print(result)

    best = compare_restrictions(
        MotorPerformanceSpec(
            slip=0.02,
            efficiency=0.9,
            power_factor=0.85,
            breakdown_torque=2.5,
            locked_rotor_torque=1.2,
            locked_rotor_current=6.0,
        )
    )
    plot_characteristics(best)


if __name__ == "__main__":
    main()
