from enum import IntEnum
from typing import Optional

class Tier(IntEnum):
    """Permission tiers; a higher tier implies every lower one."""
    READ_ONLY = 1
    READ_WRITE = 2
    ADMIN = 3

# Values of the ``invsvc`` claim
TIER_CLAIMS = {
    "invro": Tier.READ_ONLY,
    "invrw": Tier.READ_WRITE,
    "invadmin": Tier.ADMIN,
}

def tier_from_claim(value) -> Optional[Tier]:
    if not isinstance(value, str):
        return None
    return TIER_CLAIMS.get(value)

def authorize(tier: Optional[Tier], required: Tier) -> bool:
    """True when ``tier`` meets ``required``. A missing tier authorizes nothing."""
    if tier is None:
        return False
    return tier >= required
