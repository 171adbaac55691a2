"""
Membership Scoring
Deterministic 0-100 prospect score computed after every customer mutation
"""

from typing import Any, Mapping, Optional, Union

# Persisted is_membership_prospect flag: strict rule, locality is a hard gate
PROSPECT_FLAG_MIN_SCORE = 60

# "Browse prospects" read path: looser filter on the stored score,
# never derived from the persisted flag
BROWSE_PROSPECT_MIN_SCORE = 50

MAX_SCORE = 100

LOCAL_POINTS = 30
PLAY_FREQUENCY_POINTS = {"weekly": 25, "monthly": 15, "rarely": 5}
NOT_MEMBER_ELSEWHERE_POINTS = 15
COMPLETE_CONTACT_POINTS = 5
ZIP_POINTS = 5


def _visit_points(visit_count: int) -> int:
    # Only the highest applicable tier counts
    if visit_count >= 5:
        return 20
    if visit_count >= 3:
        return 15
    if visit_count >= 2:
        return 10
    return 0


def _get(customer: Union[Mapping[str, Any], Any], field: str) -> Any:
    if isinstance(customer, Mapping):
        return customer.get(field)
    return getattr(customer, field, None)


def calculate_membership_score(customer: Union[Mapping[str, Any], Any]) -> int:
    """
    Score a customer's membership potential.

    Accepts a Customer row or any mapping with the same field names.
    Pure function: no I/O, no side effects.

    Args:
        customer: Customer-like object

    Returns:
        Integer score in [0, 100]
    """
    score = 0

    if _get(customer, "is_local") is True:
        score += LOCAL_POINTS

    play_frequency = _get(customer, "play_frequency")
    if play_frequency is not None and hasattr(play_frequency, "value"):
        play_frequency = play_frequency.value
    score += PLAY_FREQUENCY_POINTS.get(play_frequency, 0)

    score += _visit_points(_get(customer, "visit_count") or 0)

    if _get(customer, "member_elsewhere") is False:
        score += NOT_MEMBER_ELSEWHERE_POINTS

    if _get(customer, "email") and _get(customer, "phone"):
        score += COMPLETE_CONTACT_POINTS

    if _get(customer, "zip"):
        score += ZIP_POINTS

    return max(0, min(score, MAX_SCORE))


def is_membership_prospect(score: int, is_local: Optional[bool]) -> bool:
    """Persisted prospect flag: score >= 60 and known to be local"""
    return score >= PROSPECT_FLAG_MIN_SCORE and is_local is True


def apply_membership_score(customer: Any) -> int:
    """Recompute and store score + prospect flag on a Customer row"""
    score = calculate_membership_score(customer)
    customer.membership_score = score
    customer.is_membership_prospect = is_membership_prospect(score, customer.is_local)
    return score
