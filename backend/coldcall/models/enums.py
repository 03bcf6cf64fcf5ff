"""Shared enums for models and the selection engine."""
import enum


class Rotation(str, enum.Enum):
    """Which half of the rotation cycle a class or student is on."""
    A = "A"
    B = "B"

    @property
    def opposite(self) -> "Rotation":
        return Rotation.B if self is Rotation.A else Rotation.A
