"""Class and student roster: storage, HTTP routes and schemas."""
from .service import RosterService
from .router import router as roster_router

__all__ = [
    'RosterService',
    'roster_router',
]
