from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
import jwt
from cryptography.hazmat.primitives.serialization import load_pem_public_key
from .policy import Tier, tier_from_claim

TENANT_CLAIM = "aid"
TIER_CLAIM = "invsvc"

class InvalidToken(Exception):
    """Token absent, malformed, signed with the wrong algorithm or key."""

class ExpiredToken(InvalidToken):
    """Signature verified but the ``exp`` claim has passed."""

@dataclass(frozen=True)
class Claims:
    tenant_id: int
    tier: Optional[Tier]
    expiry: Optional[datetime] = None
    subject: Optional[str] = None

def _int_claim(value) -> int:
    # numeric claims may arrive as JSON floats
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    return 0

class CredentialVerifier:
    """Verifies bearer tokens against a single RSA public key."""

    def __init__(self, public_key_pem: bytes, algorithm: str = "PS256", leeway: int = 0):
        if isinstance(public_key_pem, str):
            public_key_pem = public_key_pem.encode()
        self._public_key = load_pem_public_key(public_key_pem)
        self.algorithm = algorithm
        self.leeway = leeway

    @classmethod
    def from_file(cls, path: str, algorithm: str = "PS256", leeway: int = 0) -> "CredentialVerifier":
        with open(path, "rb") as fh:
            return cls(fh.read(), algorithm=algorithm, leeway=leeway)

    def verify(self, token: Optional[str]) -> Claims:
        if not token:
            raise InvalidToken("cannot get token from context")

        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError as e:
            raise InvalidToken(str(e)) from e

        alg = header.get("alg")
        if alg != self.algorithm:
            raise InvalidToken(f"unexpected signing method: {alg}")

        try:
            payload = jwt.decode(
                token,
                self._public_key,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"verify_aud": False},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredToken("token is expired") from e
        except jwt.PyJWTError as e:
            raise InvalidToken(str(e)) from e

        expiry = None
        if isinstance(payload.get("exp"), (int, float)):
            expiry = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)

        subject = payload.get("sub")
        return Claims(
            tenant_id=_int_claim(payload.get(TENANT_CLAIM)),
            tier=tier_from_claim(payload.get(TIER_CLAIM)),
            expiry=expiry,
            subject=subject if isinstance(subject, str) else None,
        )
