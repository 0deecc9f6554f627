import secrets
import time


SESSION_TOKEN_BYTES = 32  # 256 bits -> 64 hex characters


def generate_session_token() -> str:
    """Return a cryptographically random, lowercase hex session token."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def now_ms() -> int:
    return time.time_ns() // 1_000_000
