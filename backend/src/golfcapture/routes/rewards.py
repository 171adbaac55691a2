"""
Reward API Routes
Reward lookup (public) and redemption (staff)
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_current_staff
from golfcapture.models.capture import Capture
from golfcapture.models.staff_user import StaffUser
from golfcapture.schemas.capture import RedeemRequest, RewardStatus
from golfcapture.services.capture_service import lookup_reward, redeem_reward

router = APIRouter(prefix="/rewards", tags=["Rewards"])


def _reward_status(capture: Capture) -> RewardStatus:
    reward = RewardStatus.model_validate(capture)
    if capture.customer is not None:
        reward.first_name = capture.customer.first_name
        reward.last_name = capture.customer.last_name
    return reward


@router.get("/{code}", response_model=RewardStatus)
async def get_reward(code: str, db: Session = Depends(get_db)):
    """Check a reward code's status"""
    return _reward_status(lookup_reward(db, code))


@router.post("/{code}/redeem", response_model=RewardStatus)
async def redeem(
    code: str,
    payload: Optional[RedeemRequest] = None,
    db: Session = Depends(get_db),
    current_staff: StaffUser = Depends(get_current_staff),
):
    """
    Redeem a reward code (exactly once)

    - **404**: unknown code
    - **409**: already redeemed
    """
    redeemed_by = payload.redeemed_by if payload and payload.redeemed_by else current_staff.name
    return _reward_status(redeem_reward(db, code, redeemed_by=redeemed_by))
