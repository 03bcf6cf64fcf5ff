"""Fair random cold-calling for classrooms."""

__version__ = "0.1.0"
