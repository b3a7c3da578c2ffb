import os
from itsdangerous import BadSignature, URLSafeTimedSerializer

SESSION_COOKIE = "ft_session"
SESSION_MAX_AGE = 60 * 60 * 24 * 30  # 30 days


def _get_signer() -> URLSafeTimedSerializer:
    key = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")
    return URLSafeTimedSerializer(key)


def app_password() -> str:
    """Read APP_PASSWORD at call time so tests can set it via env."""
    return os.environ.get("APP_PASSWORD", "")


def auth_enabled() -> bool:
    """The household password gate is only active when APP_PASSWORD is set."""
    return bool(app_password())


def create_session_token() -> str:
    return _get_signer().dumps("ok")


def verify_session_token(token: str) -> bool:
    try:
        _get_signer().loads(token, max_age=SESSION_MAX_AGE)
        return True
    except BadSignature:
        return False


# Paths that don't require auth
_PUBLIC_PREFIXES = ("/login", "/logout", "/health", "/docs", "/openapi.json")


def is_public(path: str) -> bool:
    return any(path.startswith(p) for p in _PUBLIC_PREFIXES)
