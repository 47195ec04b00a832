#!/usr/bin/env python3
"""
Repository tests against an in-memory SQLite database.
"""

import unittest
import uuid

from core.alerts import TimetableEntry
from core.compatibility import MatchStatus, Profile, rank_candidates, pair_key
from database.repositories import (
    ConfessionRepository,
    MatchRepository,
    ProfileRepository,
    ScheduleRepository,
    SqlKeyValueStore,
    build_match_id,
)
from tests import create_test_sessionmaker


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


class RepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.Session = create_test_sessionmaker()
        self.db = self.Session()

    def tearDown(self):
        self.db.close()


class TestProfileRepository(RepositoryTestCase):

    def test_upsert_creates_then_updates(self):
        repo = ProfileRepository(self.db)
        repo.upsert_profile(make_profile("u1"))
        repo.upsert_profile(make_profile("u1", cgpa=3.9, bio="Hi"))
        self.db.commit()

        row = repo.get_profile("u1")
        self.assertEqual(row.cgpa, 3.9)
        self.assertEqual(row.bio, "Hi")
        self.assertEqual(repo.to_profile(row), make_profile("u1", cgpa=3.9, bio="Hi"))

    def test_active_profiles_exclude_self_and_inactive(self):
        repo = ProfileRepository(self.db)
        for p in [make_profile("me"), make_profile("a"), make_profile("b", is_active=False)]:
            repo.upsert_profile(p)
        self.db.commit()

        ids = [r.user_id for r in repo.get_active_profiles(exclude_user_id="me")]
        self.assertEqual(ids, ["a"])

    def test_missing_profile(self):
        self.assertIsNone(ProfileRepository(self.db).get_profile("ghost"))


class TestMatchRepository(RepositoryTestCase):

    def _create(self, searcher="me", other="you"):
        me = make_profile(searcher)
        candidate = rank_candidates(me, [make_profile(other)])[0]
        match = MatchRepository(self.db).create_match(searcher, candidate)
        self.db.commit()
        return match

    def test_create_match(self):
        match = self._create()
        self.assertEqual(match.id, "me_you")
        self.assertEqual(match.status, "pending")
        self.assertEqual(match.connection_type, "friends")
        self.assertEqual(match.cgpa_league, "Excellent (3.0-3.49)")
        self.assertTrue(match.match_reasons)

    def test_existing_match_either_direction(self):
        self._create()
        repo = MatchRepository(self.db)
        self.assertEqual(repo.get_existing_match("you", "me").id, "me_you")
        self.assertIsNone(repo.get_existing_match("me", "stranger"))

    def test_statuses_keyed_by_pair(self):
        self._create()
        statuses = MatchRepository(self.db).get_statuses_for_user("you")
        self.assertEqual(statuses, {pair_key("me", "you"): MatchStatus.PENDING})

    def test_accepted_matches_only(self):
        first = self._create("me", "a")
        self._create("b", "me")
        repo = MatchRepository(self.db)
        repo.set_status(first, MatchStatus.ACCEPTED)
        self.db.commit()

        self.assertEqual([m.id for m in repo.get_matches_for_user("me")], ["me_a"])
        self.assertEqual(len(repo.get_matches_for_user("me", status=None)), 2)

    def test_reports(self):
        match = self._create()
        repo = MatchRepository(self.db)
        self.assertIsNone(repo.get_report(match.id, "you"))
        repo.add_report(match.id, "you", "rude")
        self.db.commit()
        self.assertEqual(repo.get_report(match.id, "you").reason, "rude")

    def test_messages_oldest_first_and_scoped_to_match(self):
        match = self._create()
        other = self._create("me", "them")
        repo = MatchRepository(self.db)
        repo.add_message(match.id, "me", "hi")
        repo.add_message(other.id, "them", "elsewhere")
        repo.add_message(match.id, "you", "hello", is_anonymous=False)
        self.db.commit()

        messages = repo.get_messages(match.id)
        self.assertEqual([(m.sender_id, m.message) for m in messages], [("me", "hi"), ("you", "hello")])
        self.assertEqual([m.is_anonymous for m in messages], [True, False])

    def test_build_match_id(self):
        self.assertEqual(build_match_id("x", "y"), "x_y")


class TestConfessionRepository(RepositoryTestCase):

    def test_create_and_list_newest_first(self):
        repo = ConfessionRepository(self.db)
        first = repo.create_confession("First confession text", "gratitude-notes", "u1")
        second = repo.create_confession("Second confession text", "college-truths", "u2", ["warn"])
        self.db.commit()

        self.assertEqual(second.moderation_warnings, ["warn"])
        listed = repo.list_approved()
        self.assertEqual({c.id for c in listed}, {first.id, second.id})
        self.assertEqual([c.id for c in repo.list_approved(category="gratitude-notes")], [first.id])
        self.assertEqual(len(repo.list_approved(limit=1)), 1)

    def test_toggle_like(self):
        repo = ConfessionRepository(self.db)
        confession = repo.create_confession("Some confession text", "college-truths", "u1")
        self.assertTrue(repo.toggle_like(confession, "u2"))
        self.assertEqual(confession.likes, 1)
        self.assertTrue(repo.toggle_like(confession, "u3"))
        self.assertFalse(repo.toggle_like(confession, "u2"))
        self.assertEqual(confession.likes, 1)

    def test_report_and_delete(self):
        repo = ConfessionRepository(self.db)
        confession = repo.create_confession("Some confession text", "college-truths", "u1")
        repo.add_report(confession, "u2", "spam")
        repo.toggle_like(confession, "u3")
        self.db.commit()
        self.assertEqual(confession.reports, 1)
        self.assertIsNotNone(repo.get_report(confession.id, "u2"))

        confession_id = confession.id
        repo.delete(confession)
        self.db.commit()
        self.assertIsNone(repo.get_by_id(confession_id))
        self.assertIsNone(repo.get_report(confession_id, "u2"))

    def test_get_unknown(self):
        self.assertIsNone(ConfessionRepository(self.db).get_by_id(uuid.uuid4()))


class TestScheduleRepository(RepositoryTestCase):

    def test_entries_ordered_by_weekday_then_time(self):
        repo = ScheduleRepository(self.db)
        repo.add_entries("u1", [
            TimetableEntry(day="Wednesday", start_time="09:00", end_time="10:00", subject="Maths"),
            TimetableEntry(day="Monday", start_time="11:00", end_time="12:00", subject="Physics"),
            TimetableEntry(day="Monday", start_time="09:00", end_time="10:00", subject="Chemistry", room="L2"),
        ])
        repo.add_entries("u2", [
            TimetableEntry(day="Monday", start_time="08:00", end_time="09:00", subject="Biology"),
        ])
        self.db.commit()

        rows = repo.get_entries("u1")
        self.assertEqual([r.subject for r in rows], ["Chemistry", "Physics", "Maths"])
        self.assertEqual(repo.get_user_ids(), ["u1", "u2"])

        entry = repo.to_timetable_entry(rows[0])
        self.assertEqual(entry.room, "L2")
        self.assertEqual(entry.id, str(rows[0].id))

    def test_delete_entry(self):
        repo = ScheduleRepository(self.db)
        row = repo.add_entries("u1", [
            TimetableEntry(day="Friday", start_time="09:00", end_time="10:00", subject="Maths"),
        ])[0]
        repo.delete_entry(row)
        self.db.commit()
        self.assertEqual(repo.get_entries("u1"), [])


class TestSqlKeyValueStore(RepositoryTestCase):

    def test_get_set_delete(self):
        store = SqlKeyValueStore(self.db)
        self.assertIsNone(store.get("k"))
        store.set("k", "1")
        store.set("k", "2")
        self.db.commit()
        self.assertEqual(store.get("k"), "2")
        store.delete("k")
        store.delete("k")
        self.assertIsNone(store.get("k"))

    def test_values_visible_to_other_sessions_after_commit(self):
        SqlKeyValueStore(self.db).set("shared", "yes")
        self.db.commit()

        other = self.Session()
        try:
            self.assertEqual(SqlKeyValueStore(other).get("shared"), "yes")
        finally:
            other.close()


if __name__ == '__main__':
    unittest.main()
