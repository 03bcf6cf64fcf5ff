"""Environment configuration for the cold-call service."""

import os

# Database URL from environment
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./coldcall.db")
SQL_DEBUG = os.getenv("SQL_DEBUG", "false").lower() == "true"

# JWT verification; tokens are issued by the identity provider with the same secret
SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key-keep-it-secure")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")

# How many times a pick is retried after losing a concurrent write on the same class
PICK_MAX_ATTEMPTS = int(os.getenv("PICK_MAX_ATTEMPTS", "3"))
