"""
Path-segment transport encoding for capability tokens.

A JWT is three base64url sections joined by "."; links carry it with each
"." replaced by "~". The base64url alphabet never contains "~", so the
substitution is lossless. This is cosmetic only and protects nothing.
"""

from .exceptions import InvalidTokenError

_SEPARATOR = "."
_SUBSTITUTE = "~"


def to_path_segment(token: str) -> str:
    """Encode a token for use as a single URL path segment."""
    if _SUBSTITUTE in token:
        raise ValueError("Token contains the transport substitute character")
    return token.replace(_SEPARATOR, _SUBSTITUTE)


def from_path_segment(segment: str) -> str:
    """Decode a path segment produced by to_path_segment()."""
    if not segment or _SEPARATOR in segment:
        raise InvalidTokenError("Malformed token link")
    return segment.replace(_SUBSTITUTE, _SEPARATOR)
