from .policy import Tier, authorize
from .verifier import Claims, CredentialVerifier, ExpiredToken, InvalidToken

__all__ = ["Tier", "authorize", "Claims", "CredentialVerifier", "ExpiredToken", "InvalidToken"]
