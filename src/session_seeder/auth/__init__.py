"""Token acquisition and id token decoding."""

from .claims import decode_id_token_claims
from .token_client import PasswordGrantClient, build_token_request_form
from .types import IdentityClaims, TokenResponse

__all__ = [
    "IdentityClaims",
    "PasswordGrantClient",
    "TokenResponse",
    "build_token_request_form",
    "decode_id_token_claims",
]
