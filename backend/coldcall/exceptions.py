"""Custom exception classes for the cold-call service.

Engine errors (``NoEligibleStudents``, ``InvalidRotationToken``) come from
the selector itself. The remaining ones are raised by the roster store before
data ever reaches the selector.
"""


class ColdCallError(Exception):
    """Base exception for all cold-call errors."""

    pass


class NoEligibleStudents(ColdCallError):
    """Raised when no student can be picked even after one rotation flip."""

    def __init__(self, class_id=None):
        """Initialize the exception.

        Args:
            class_id: The class that ran out of eligible students, when known.
        """
        self.class_id = class_id
        if class_id is None:
            message = "No eligible students"
        else:
            message = f"No eligible students in class '{class_id}'"
        super().__init__(message)


class InvalidRotationToken(ColdCallError):
    """Raised when a rotation value is not one of the two valid tokens."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid rotation token: {value!r}")


class UnknownClass(ColdCallError):
    """Raised when a requested class cannot be found."""

    def __init__(self, class_id: str):
        self.class_id = class_id
        super().__init__(f"Class '{class_id}' not found")


class UnknownStudent(ColdCallError):
    """Raised when a requested student cannot be found."""

    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"Student '{student_id}' not found")


class NotClassTeacher(ColdCallError):
    """Raised when a teacher touches a class they do not own."""

    def __init__(self, class_id: str, teacher_id: str):
        self.class_id = class_id
        self.teacher_id = teacher_id
        super().__init__("You are not the teacher of this class")


class RosterMismatch(ColdCallError):
    """Raised when a roster snapshot holds a student from another class."""

    def __init__(self, class_id: str, student_id: str):
        self.class_id = class_id
        self.student_id = student_id
        super().__init__(f"Student '{student_id}' does not belong to class '{class_id}'")


class PickConflict(ColdCallError):
    """Raised when a pick keeps losing concurrent writes on the same class."""

    def __init__(self, class_id: str, attempts: int):
        self.class_id = class_id
        self.attempts = attempts
        super().__init__(f"Could not pick a student for class '{class_id}' after {attempts} attempts")
