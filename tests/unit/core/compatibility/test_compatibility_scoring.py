#!/usr/bin/env python3
"""
Tests for the compatibility rubric and CGPA leagues.
"""

import unittest

from core.compatibility import Profile, calculate_compatibility, get_cgpa_league
from core.compatibility.scoring import (
    FALLBACK_REASON,
    score_cgpa,
    score_personality,
    score_study_style,
    score_year,
)


def make_profile(user_id="u1", **overrides):
    data = dict(
        user_id=user_id,
        cgpa=3.2,
        branch="CSE",
        year=2,
        study_style="balanced",
        personality=[],
        connection_types=["friends"],
    )
    data.update(overrides)
    return Profile(**data)


class TestCalculateCompatibility(unittest.TestCase):

    def test_perfect_pair_clamped_to_100(self):
        a = make_profile(
            "a", cgpa=3.6, year=3, study_style="night-owl",
            personality=["introverted", "analytical", "creative"],
            connection_types=["friends", "study-partner"]
        )
        b = make_profile(
            "b", cgpa=3.6, year=3, study_style="night-owl",
            personality=["introverted", "analytical", "creative"],
            connection_types=["friends", "study-partner"]
        )
        # 30 + 20 + 15 + 15 + 20 + 10 = 110
        result = calculate_compatibility(a, b)
        self.assertEqual(result.score, 100)
        self.assertEqual(result.reasons, [
            "Similar academic performance",
            "Same branch - shared interests",
            "Same year - similar experiences",
            "Matching study styles",
            "Shared traits: Introverted, Analytical, Creative",
            "Both looking for: Friends, Study Partner",
        ])

    def test_pre_clamp_total_of_104(self):
        a = make_profile(
            "a", cgpa=3.0, year=2, study_style="consistent",
            personality=["creative", "practical"], connection_types=["dating"]
        )
        b = make_profile(
            "b", cgpa=3.4, year=3, study_style="consistent",
            personality=["creative", "practical"], connection_types=["dating"]
        )
        # 30 + 20 + 10 + 15 + 14 + 10 = 99
        self.assertEqual(calculate_compatibility(a, b).score, 99)

        b_same_year = make_profile(
            "b", cgpa=3.4, year=2, study_style="consistent",
            personality=["creative", "practical"], connection_types=["dating"]
        )
        # 30 + 20 + 15 + 15 + 14 + 10 = 104
        self.assertEqual(calculate_compatibility(a, b_same_year).score, 100)

    def test_fallback_reason_when_nothing_matches(self):
        a = make_profile("a", cgpa=3.9, branch="CSE", year=1, study_style="early-bird",
                         connection_types=["dating"])
        b = make_profile("b", cgpa=1.5, branch="ME", year=4, study_style="night-owl",
                         connection_types=["friends"])
        result = calculate_compatibility(a, b)
        # only the different-branch consolation points
        self.assertEqual(result.score, 5)
        self.assertEqual(result.reasons, [FALLBACK_REASON])

    def test_score_is_symmetric(self):
        a = make_profile("a", cgpa=2.1, branch="IT", year=1, study_style="early-bird",
                         personality=["ambivert", "practical"], connection_types=["friends", "dating"])
        b = make_profile("b", cgpa=3.0, branch="ECE", year=2, study_style="balanced",
                         personality=["practical", "ambivert"], connection_types=["dating"])
        self.assertEqual(calculate_compatibility(a, b).score, calculate_compatibility(b, a).score)

    def test_reasons_follow_first_profile_order(self):
        a = make_profile("a", personality=["creative", "analytical"])
        b = make_profile("b", personality=["analytical", "creative"])
        self.assertIn("Shared traits: Creative, Analytical", calculate_compatibility(a, b).reasons)
        self.assertIn("Shared traits: Analytical, Creative", calculate_compatibility(b, a).reasons)

    def test_score_range(self):
        styles = ["early-bird", "night-owl", "balanced", "crammer", "consistent"]
        for i, style in enumerate(styles):
            a = make_profile("a", cgpa=i * 0.8, year=(i % 4) + 1, study_style=style)
            b = make_profile("b", cgpa=4.0 - i * 0.8, year=4 - (i % 4), study_style=styles[-1 - i])
            score = calculate_compatibility(a, b).score
            self.assertGreaterEqual(score, 0)
            self.assertLessEqual(score, 100)


class TestFactors(unittest.TestCase):

    def test_cgpa_bands(self):
        cases = [
            (3.0, 3.5, 30),
            (3.0, 3.9, 20),
            (2.0, 3.4, 10),
            (1.0, 3.0, 0),
        ]
        for c1, c2, expected in cases:
            points, _ = score_cgpa(make_profile(cgpa=c1), make_profile(cgpa=c2))
            self.assertEqual(points, expected, f"{c1} vs {c2}")

    def test_year_distance(self):
        self.assertEqual(score_year(make_profile(year=2), make_profile(year=3)),
                         (10, "Adjacent years - good mentorship potential"))
        self.assertEqual(score_year(make_profile(year=1), make_profile(year=3)), (0, None))

    def test_complementary_study_styles(self):
        self.assertEqual(
            score_study_style(make_profile(study_style="night-owl"), make_profile(study_style="balanced")),
            (10, "Complementary study schedules")
        )
        self.assertEqual(
            score_study_style(make_profile(study_style="early-bird"), make_profile(study_style="night-owl")),
            (0, None)
        )

    def test_personality_cap(self):
        traits = ["introverted", "analytical", "creative", "practical"]
        points, _ = score_personality(make_profile(personality=traits), make_profile(personality=traits))
        self.assertEqual(points, 20)

        points, _ = score_personality(make_profile(personality=["creative"]), make_profile(personality=["creative"]))
        self.assertEqual(points, 7)


class TestCgpaLeague(unittest.TestCase):

    def test_boundaries(self):
        cases = [
            (4.0, "Elite (3.5-4.0)"),
            (3.5, "Elite (3.5-4.0)"),
            (3.49, "Excellent (3.0-3.49)"),
            (3.0, "Excellent (3.0-3.49)"),
            (2.99, "Good (2.5-2.99)"),
            (2.5, "Good (2.5-2.99)"),
            (2.0, "Average (2.0-2.49)"),
            (1.99, "Below Average (<2.0)"),
            (0.0, "Below Average (<2.0)"),
        ]
        for cgpa, expected in cases:
            self.assertEqual(get_cgpa_league(cgpa), expected, cgpa)

    def test_gap_between_bands_falls_through(self):
        self.assertEqual(get_cgpa_league(3.495), "Excellent (3.0-3.49)")


if __name__ == '__main__':
    unittest.main()
