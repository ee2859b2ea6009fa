"""Settings shared by every environment; each module overrides what differs."""

import os

from src.timecard_system.timecard_system.core.constants import DEFAULT_PUBLIC_ROUTES


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "timecard_db"),
    }


def clerk_config_from_env() -> dict:
    return {
        "secret_key": os.getenv("CLERK_SECRET_KEY", ""),
        "issuer": os.getenv("CLERK_ISSUER", ""),
        "jwks_url": os.getenv("CLERK_JWKS_URL", ""),
        "jwt_key": os.getenv("CLERK_JWT_KEY", ""),
        "api_url": os.getenv("CLERK_API_URL", "https://api.clerk.com/v1"),
    }


def stripe_config_from_env() -> dict:
    return {
        "secret_key": os.getenv("STRIPE_SECRET_KEY", ""),
        "webhook_secret": os.getenv("STRIPE_WEBHOOK_SECRET", ""),
    }


def public_routes_from_env() -> tuple:
    raw = os.getenv("PUBLIC_ROUTES", "")
    if not raw.strip():
        return DEFAULT_PUBLIC_ROUTES
    return tuple(p.strip() for p in raw.split(",") if p.strip())
