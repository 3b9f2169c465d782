from __future__ import annotations

import os


STORAGE_BACKENDS = ("mongodb", "postgres", "memory")

DEFAULT_MONGODB_URL = "mongodb://localhost:27017"
DEFAULT_MONGODB_DATABASE = "property_manager"
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:3001"
DEFAULT_API_BASE_URL = "http://localhost:8000/api"


def storage_backend() -> str:
    backend = os.getenv("PROPERTY_STORE", "mongodb").strip().lower()

    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(
            f"PROPERTY_STORE must be one of {', '.join(STORAGE_BACKENDS)}, got '{backend}'"
        )

    return backend


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def mongo_url() -> str:
    return os.getenv("MONGODB_URL", DEFAULT_MONGODB_URL)


def mongo_database() -> str:
    return os.getenv("MONGODB_DATABASE", DEFAULT_MONGODB_DATABASE)


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def api_base_url() -> str:
    """Base URL the API client talks to (includes the /api prefix)."""
    return os.getenv("PROPERTY_API_URL", DEFAULT_API_BASE_URL).rstrip("/")
