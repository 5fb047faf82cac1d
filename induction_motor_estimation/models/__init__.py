"""Data models for double-cage parameter estimation."""

from .performance import (
    MotorPerformanceSpec,
    LinearRestrictions,
    PerformanceTargets,
    create_performance_spec_from_rpm
)
from .circuit import DoubleCageParameters

__all__ = [
    # Performance data
    'MotorPerformanceSpec',
    'LinearRestrictions',
    'PerformanceTargets',
    'create_performance_spec_from_rpm',
    # Circuit
    'DoubleCageParameters'
]
