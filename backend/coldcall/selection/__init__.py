"""Rotation-based fair selection engine."""
from .selector import RotationSelector, Pick, as_rotation, is_eligible

__all__ = [
    'RotationSelector',
    'Pick',
    'as_rotation',
    'is_eligible',
]
