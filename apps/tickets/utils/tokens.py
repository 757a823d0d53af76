"""
Ticket access tokens.

Tokens are user-facing and typed by hand, so they use an alphabet without
look-alike characters (no 0/O, 1/I/L) and come from ``secrets``.
"""

import re
import secrets

TOKEN_ALPHABET = 'ABCDEFGHJKMNPQRSTUVWXYZ23456789'
TOKEN_LENGTH = 12

TOKEN_PATTERN = re.compile(rf'^[{TOKEN_ALPHABET}]{{{TOKEN_LENGTH}}}$')


def mint_token(length: int = TOKEN_LENGTH) -> str:
    """Draw a fresh uppercase token from a cryptographically strong source."""
    return ''.join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def normalize_token(raw_token: str) -> str:
    """Uppercase a user-entered token and strip surrounding whitespace."""
    return (raw_token or '').strip().upper()


def is_valid_token(token: str) -> bool:
    return bool(TOKEN_PATTERN.match(token or ''))
