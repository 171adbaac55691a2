"""
Tests for Membership Scoring
"""

from golfcapture.models.customer import Customer
from golfcapture.services.scoring import (
    BROWSE_PROSPECT_MIN_SCORE,
    PROSPECT_FLAG_MIN_SCORE,
    apply_membership_score,
    calculate_membership_score,
    is_membership_prospect,
)


def _profile(**overrides):
    profile = {
        "is_local": None,
        "play_frequency": None,
        "visit_count": 0,
        "member_elsewhere": None,
        "email": None,
        "phone": None,
        "zip": None,
    }
    profile.update(overrides)
    return profile


# Fixed surroundings for the one-field-at-a-time comparisons; the last one sits at the 100 cap
BASE_PROFILES = [
    {},
    {"play_frequency": "monthly", "visit_count": 1},
    {"visit_count": 3, "member_elsewhere": False, "zip": "29579"},
    {"visit_count": 12, "email": "a@b.com", "phone": "8435551234", "member_elsewhere": True},
    {
        "play_frequency": "weekly",
        "visit_count": 5,
        "member_elsewhere": False,
        "email": "a@b.com",
        "phone": "8435551234",
        "zip": "29579",
    },
]


class TestCalculateMembershipScore:
    """Point table"""

    def test_empty_profile_scores_zero(self):
        assert calculate_membership_score(_profile()) == 0

    def test_full_profile_caps_at_100(self):
        profile = _profile(
            is_local=True,
            play_frequency="weekly",
            visit_count=5,
            member_elsewhere=False,
            email="a@b.com",
            phone="8435551234",
            zip="29579",
        )
        # 30 + 25 + 20 + 15 + 5 + 5
        assert calculate_membership_score(profile) == 100

    def test_visit_tiers_only_highest_counts(self):
        assert calculate_membership_score(_profile(visit_count=1)) == 0
        assert calculate_membership_score(_profile(visit_count=2)) == 10
        assert calculate_membership_score(_profile(visit_count=3)) == 15
        assert calculate_membership_score(_profile(visit_count=4)) == 15
        assert calculate_membership_score(_profile(visit_count=12)) == 20

    def test_play_frequency_points(self):
        assert calculate_membership_score(_profile(play_frequency="weekly")) == 25
        assert calculate_membership_score(_profile(play_frequency="monthly")) == 15
        assert calculate_membership_score(_profile(play_frequency="rarely")) == 5

    def test_unknown_member_elsewhere_scores_nothing(self):
        assert calculate_membership_score(_profile(member_elsewhere=None)) == 0
        assert calculate_membership_score(_profile(member_elsewhere=True)) == 0
        assert calculate_membership_score(_profile(member_elsewhere=False)) == 15

    def test_contact_points_need_both_keys(self):
        assert calculate_membership_score(_profile(email="a@b.com")) == 0
        assert calculate_membership_score(_profile(email="a@b.com", phone="8435551234")) == 5

    def test_more_visits_never_lowers_score(self):
        scores = [calculate_membership_score(_profile(is_local=True, visit_count=n)) for n in range(0, 10)]
        assert scores == sorted(scores)

    def test_higher_play_frequency_never_lowers_score(self):
        for base in BASE_PROFILES:
            scores = [
                calculate_membership_score(_profile(**{**base, "play_frequency": frequency}))
                for frequency in ("rarely", "monthly", "weekly")
            ]
            assert scores == sorted(scores), base

    def test_becoming_local_never_lowers_score(self):
        for base in BASE_PROFILES:
            visitor = calculate_membership_score(_profile(**{**base, "is_local": False}))
            local = calculate_membership_score(_profile(**{**base, "is_local": True}))
            assert visitor <= local, base

    def test_accepts_customer_rows(self):
        customer = Customer(is_local=True, play_frequency="weekly", visit_count=3)
        assert calculate_membership_score(customer) == 70


class TestProspectFlag:
    """Persisted flag vs browse threshold"""

    def test_thresholds_are_distinct(self):
        assert PROSPECT_FLAG_MIN_SCORE == 60
        assert BROWSE_PROSPECT_MIN_SCORE == 50

    def test_locality_is_a_hard_gate(self):
        assert is_membership_prospect(95, True) is True
        assert is_membership_prospect(95, False) is False
        assert is_membership_prospect(95, None) is False

    def test_below_threshold(self):
        assert is_membership_prospect(59, True) is False
        assert is_membership_prospect(60, True) is True

    def test_apply_sets_score_and_flag(self):
        customer = Customer(
            is_local=True, play_frequency="weekly", member_elsewhere=False, visit_count=1, email=None, phone=None
        )
        score = apply_membership_score(customer)

        assert score == 70
        assert customer.membership_score == 70
        assert customer.is_membership_prospect is True

    def test_visitor_never_flagged(self):
        customer = Customer(
            is_local=False,
            play_frequency="weekly",
            member_elsewhere=False,
            visit_count=5,
            email="a@b.com",
            phone="8435551234",
            zip="29579",
        )
        apply_membership_score(customer)

        assert customer.membership_score == 70
        assert customer.is_membership_prospect is False
