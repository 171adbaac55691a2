"""
Reward Issuer
Reward catalog, unique reward codes and per-capture reward resolution
"""

import logging
import random
import secrets
from typing import NamedTuple, Optional

from sqlalchemy.orm import Session

from golfcapture.config import settings
from golfcapture.exceptions import ConflictError, ValidationError
from golfcapture.models.ab_test import ABTest, Variant
from golfcapture.models.capture import Capture
from golfcapture.models.location import Location

logger = logging.getLogger(__name__)

# No 0/O/1/I so codes survive being read aloud at the bar
REWARD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
REWARD_CODE_LENGTH = 6
DEFAULT_CODE_PREFIX = "CP"

# Rewards a golfer may pick on the capture form
REWARD_CATALOG = {
    "free_beer": {"description": "A cold one after your round", "emoji": "🍺"},
    "free_soft_drink": {"description": "Any fountain drink or water", "emoji": "🥤"},
    "pro_shop_5": {"description": "$5 Pro Shop Credit", "emoji": "🏌️"},
    "food_bev_5": {"description": "$5 Food & Bev Credit", "emoji": "🍔"},
}


class ResolvedReward(NamedTuple):
    reward_type: str
    description: str
    emoji: str
    ab_test: Optional[ABTest] = None
    variant: Optional[str] = None


DEFAULT_REWARD = ResolvedReward("free_beer", "Free beer after your round", "🍺")


def generate_reward_code(prefix: str = DEFAULT_CODE_PREFIX) -> str:
    """<prefix> + 6 symbols from REWARD_ALPHABET (32^6 space)"""
    suffix = "".join(secrets.choice(REWARD_ALPHABET) for _ in range(REWARD_CODE_LENGTH))
    return f"{prefix}{suffix}"


def normalize_reward_code(code: str) -> str:
    return code.strip().upper()


def issue_unique_reward_code(db: Session, prefix: Optional[str] = None) -> str:
    """
    Generate a code not yet present in captures.reward_code

    The UNIQUE constraint on the column still guards the insert itself.

    Raises:
        ConflictError: If every attempt collided
    """
    prefix = prefix or DEFAULT_CODE_PREFIX

    for attempt in range(1, settings.REWARD_CODE_ATTEMPTS + 1):
        code = generate_reward_code(prefix)
        exists = db.query(Capture.id).filter(Capture.reward_code == code).first()
        if exists is None:
            return code
        logger.warning(f"Reward code collision on attempt {attempt}: {code}")

    raise ConflictError("Could not generate a unique reward code", reason="reward_code_exhausted")


def get_active_ab_test(db: Session, location_id) -> Optional[ABTest]:
    return (
        db.query(ABTest)
        .filter(ABTest.location_id == location_id, ABTest.is_active.is_(True))
        .order_by(ABTest.started_at.desc())
        .first()
    )


def resolve_reward(db: Session, location: Optional[Location], chosen: Optional[str] = None) -> ResolvedReward:
    """
    Decide which reward a capture earns

    Precedence: active A/B test on the location, then the golfer's explicit
    catalog choice, then the location default, then the global default.

    Raises:
        ValidationError: If the explicit choice is not in the catalog
    """
    if location is not None:
        ab_test = get_active_ab_test(db, location.id)
        if ab_test is not None:
            variant = random.choice([Variant.A.value, Variant.B.value])
            reward_type, description, emoji = ab_test.variant_reward(variant)
            return ResolvedReward(reward_type, description, emoji or "🎁", ab_test, variant)

    if chosen:
        entry = REWARD_CATALOG.get(chosen)
        if entry is None:
            raise ValidationError(f"Unknown reward '{chosen}'", field="reward_type")
        return ResolvedReward(chosen, entry["description"], entry["emoji"])

    if location is not None and location.reward_type:
        return ResolvedReward(
            location.reward_type,
            location.reward_description or DEFAULT_REWARD.description,
            location.reward_emoji or DEFAULT_REWARD.emoji,
        )

    return DEFAULT_REWARD
