#!/usr/bin/env python3
"""
Tests for candidate ranking, match status transitions and profile validation.
"""

import unittest

from core.config_loader import CompatibilityConfig
from core.compatibility import (
    ConnectionType,
    MatchStatus,
    PersonalityType,
    Profile,
    can_transition,
    pair_key,
    rank_candidates,
)


def make_profile(user_id, **overrides):
    data = dict(
        user_id=user_id,
        cgpa=3.2,
        branch="CSE",
        year=2,
        study_style="balanced",
        personality=["analytical"],
        connection_types=["friends"],
    )
    data.update(overrides)
    return Profile(**data)


class TestRankCandidates(unittest.TestCase):

    def setUp(self):
        self.me = make_profile("me", connection_types=["study-partner", "friends"])

    def test_sorted_by_score_descending(self):
        close = make_profile("close")
        far = make_profile("far", cgpa=2.4, branch="IT", year=3)
        ranked = rank_candidates(self.me, [far, close])
        self.assertEqual([c.profile.user_id for c in ranked], ["close", "far"])
        self.assertGreater(ranked[0].result.score, ranked[1].result.score)

    def test_skips_self_and_inactive(self):
        ranked = rank_candidates(self.me, [
            make_profile("me"),
            make_profile("sleepy", is_active=False),
            make_profile("ok"),
        ])
        self.assertEqual([c.profile.user_id for c in ranked], ["ok"])

    def test_requires_shared_connection_type(self):
        ranked = rank_candidates(self.me, [make_profile("dater", connection_types=["dating"])])
        self.assertEqual(ranked, [])

    def test_connection_type_is_first_shared_in_searcher_order(self):
        other = make_profile("other", connection_types=["friends", "study-partner"])
        ranked = rank_candidates(self.me, [other])
        self.assertEqual(ranked[0].connection_type, ConnectionType.STUDY_PARTNER)

    def test_league_is_candidates(self):
        other = make_profile("other", cgpa=3.7)
        ranked = rank_candidates(self.me, [other])
        self.assertEqual(ranked[0].cgpa_league, "Elite (3.5-4.0)")

    def test_minimum_score_filter(self):
        weak = make_profile("weak", cgpa=1.0, branch="ME", year=4, study_style="crammer", personality=[])
        # 0 + 5 + 0 + 0 + 0 + 10 = 15
        self.assertEqual(rank_candidates(self.me, [weak]), [])
        config = CompatibilityConfig(min_match_score=10)
        self.assertEqual(len(rank_candidates(self.me, [weak], config=config)), 1)

    def test_max_results(self):
        pool = [make_profile(f"u{i}") for i in range(15)]
        self.assertEqual(len(rank_candidates(self.me, pool)), 10)
        config = CompatibilityConfig(max_results=3)
        self.assertEqual(len(rank_candidates(self.me, pool, config=config)), 3)

    def test_ties_keep_input_order(self):
        pool = [make_profile("b"), make_profile("a"), make_profile("c")]
        ranked = rank_candidates(self.me, pool)
        self.assertEqual([c.profile.user_id for c in ranked], ["b", "a", "c"])

    def test_existing_matches_excluded_unless_rejected(self):
        pool = [make_profile("pending"), make_profile("rejected"), make_profile("blocked"), make_profile("new")]
        existing = {
            pair_key("me", "pending"): MatchStatus.PENDING,
            pair_key("rejected", "me"): MatchStatus.REJECTED,
            pair_key("me", "blocked"): MatchStatus.BLOCKED,
        }
        ranked = rank_candidates(self.me, pool, existing)
        self.assertEqual(sorted(c.profile.user_id for c in ranked), ["new", "rejected"])


class TestTransitions(unittest.TestCase):

    def test_allowed(self):
        self.assertTrue(can_transition(MatchStatus.PENDING, MatchStatus.ACCEPTED))
        self.assertTrue(can_transition(MatchStatus.PENDING, MatchStatus.REJECTED))
        self.assertTrue(can_transition(MatchStatus.PENDING, MatchStatus.BLOCKED))
        self.assertTrue(can_transition(MatchStatus.ACCEPTED, MatchStatus.BLOCKED))

    def test_disallowed(self):
        self.assertFalse(can_transition(MatchStatus.ACCEPTED, MatchStatus.REJECTED))
        self.assertFalse(can_transition(MatchStatus.ACCEPTED, MatchStatus.PENDING))
        self.assertFalse(can_transition(MatchStatus.REJECTED, MatchStatus.ACCEPTED))
        self.assertFalse(can_transition(MatchStatus.BLOCKED, MatchStatus.ACCEPTED))
        self.assertFalse(can_transition(MatchStatus.PENDING, MatchStatus.PENDING))

    def test_pair_key_is_direction_independent(self):
        self.assertEqual(pair_key("x", "y"), pair_key("y", "x"))


class TestProfile(unittest.TestCase):

    def test_coerces_strings_and_dedupes(self):
        p = make_profile("p", personality=["creative", "creative", "practical"])
        self.assertEqual(p.personality, (PersonalityType.CREATIVE, PersonalityType.PRACTICAL))
        self.assertEqual(p.to_dict()["branch"], "CSE")

    def test_rejects_out_of_range_values(self):
        with self.assertRaises(ValueError):
            make_profile("p", cgpa=4.2)
        with self.assertRaises(ValueError):
            make_profile("p", year=5)
        with self.assertRaises(ValueError):
            make_profile("p", branch="Law")


if __name__ == '__main__':
    unittest.main()
