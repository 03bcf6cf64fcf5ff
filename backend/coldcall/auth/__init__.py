"""Authentication package for the application."""
from .service import TokenData, create_access_token, verify_token, get_current_teacher_id

__all__ = [
    'TokenData',
    'create_access_token',
    'verify_token',
    'get_current_teacher_id',
]
