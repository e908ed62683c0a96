"""
Token module.

Signs and verifies short-lived, purpose-bound claims with a shared secret,
and encodes tokens for transport inside URL path segments.

Public API:
- TokenCodec: issue/verify signed claims
- TokenClaim, TokenPurpose, IssuedToken: claim models
- to_path_segment / from_path_segment: reversible transport encoding
- Token exceptions: InvalidTokenError, ExpiredTokenError
"""

from .codec import TokenCodec, Clock, utc_now
from .models import TokenClaim, TokenPurpose, IssuedToken
from .transport import to_path_segment, from_path_segment
from .exceptions import TokenError, InvalidTokenError, ExpiredTokenError

__all__ = [
    # Codec
    "TokenCodec",
    "Clock",
    "utc_now",
    # Models
    "TokenClaim",
    "TokenPurpose",
    "IssuedToken",
    # Transport
    "to_path_segment",
    "from_path_segment",
    # Exceptions
    "TokenError",
    "InvalidTokenError",
    "ExpiredTokenError",
]
