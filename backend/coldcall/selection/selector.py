"""
Rotation-based fair selection.

Each class carries an active rotation token and every student carries one of
the same two tokens. A student is eligible while it is not excluded and its
token matches the class token. Picking a student flips its token, so nobody is
picked twice in one half-cycle. When no one is left, the class token flips
once and the other half becomes eligible.

The selector is pure: it never mutates the roster it is given. It returns a
``Pick`` describing the flips and the caller commits them.

Example:
    >>> selector = RotationSelector(rng=random.Random(7))
    >>> pick = selector.pick_one(classroom.rotation, classroom.students)
    >>> pick.student.rotation = pick.student_rotation
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from ..exceptions import InvalidRotationToken, NoEligibleStudents
from ..models.enums import Rotation

logger = logging.getLogger(__name__)


def as_rotation(value) -> Rotation:
    """Coerce ``value`` to a ``Rotation``, rejecting anything outside {A, B}."""
    if isinstance(value, Rotation):
        return value
    try:
        return Rotation(value)
    except ValueError:
        raise InvalidRotationToken(value) from None


def is_eligible(student, rotation: Rotation) -> bool:
    return as_rotation(student.rotation) is rotation and not student.exclude


@dataclass(frozen=True)
class Pick:
    """Outcome of a successful pick.

    Attributes:
        student: The roster entry that won.
        student_rotation: Token the winner must be flipped to.
        class_rotation: Active class token after exhaustion handling.
        class_flipped: Whether the class token has to be flipped on commit.
    """
    student: Any
    student_rotation: Rotation
    class_rotation: Rotation
    class_flipped: bool


class RotationSelector:
    """
    Picks one eligible student uniformly at random.

    Args:
        rng: Source of randomness exposing ``randrange``. Defaults to a fresh,
            unseeded ``random.Random``; pass a seeded one for reproducible runs.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def list_eligible(self, rotation, roster: Iterable) -> List:
        """Return the students that could be picked right now, in roster order."""
        active = as_rotation(rotation)
        return [student for student in roster if is_eligible(student, active)]

    def pick_one(self, rotation, roster: Iterable) -> Pick:
        """
        Pick a student from ``roster`` for a class whose token is ``rotation``.

        Raises:
            NoEligibleStudents: Nobody is eligible under either token.
            InvalidRotationToken: A token outside {A, B} was supplied.
        """
        roster = list(roster)
        active = as_rotation(rotation)
        eligible = self.list_eligible(active, roster)
        class_flipped = False

        if not eligible:
            # Lazy reset: the other half becomes the active pool
            active = active.opposite
            class_flipped = True
            eligible = self.list_eligible(active, roster)

        if not eligible:
            raise NoEligibleStudents()
        if class_flipped:
            logger.info(f"Rotation exhausted, flipping class token to {active.value}")

        winner = eligible[self.rng.randrange(len(eligible))]
        logger.debug(f"Picked {winner!r} out of {len(eligible)} eligible students")
        return Pick(
            student=winner,
            student_rotation=active.opposite,
            class_rotation=active,
            class_flipped=class_flipped,
        )
