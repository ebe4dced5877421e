"""Security utilities.

Re-exports token helpers for convenience.
"""

from src.vfxflow.core.security.crypto import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_token,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "create_access_token",
    "decode_token",
]
