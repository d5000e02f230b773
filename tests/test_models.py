"""Tests für Datenmodelle und Belegungs-Ledger."""

import pytest
from pydantic import ValidationError

from config.defaults import default_planner_config
from models.course import Course
from models.placement import Placement
from models.room import Room
from models.schedule import Schedule
from models.schedule_data import CourseDefinition, ScheduleData
from models.teacher import Teacher
from data.sample_data import sample_data


# ─── Lehrkraft-Ledger ─────────────────────────────────────────────────────────

class TestTeacherLedger:
    def test_fresh_teacher_available(self):
        t = Teacher(name="Dr. Johnson", max_hours_per_week=15)
        assert t.is_available("Monday", "9:00-10:20")
        assert t.assigned_hours == 0
        assert t.hours_on("Monday") == 0

    def test_reserved_slot_unavailable(self):
        t = Teacher(name="Dr. Johnson", max_hours_per_week=15)
        t.reserve_slot("Monday", "9:00-10:20")
        assert not t.is_available("Monday", "9:00-10:20")
        assert t.is_available("Monday", "10:30-11:50")
        assert t.is_available("Tuesday", "9:00-10:20")

    def test_daily_cap_uses_hours_of_the_day(self):
        """max_hours_per_week wird gegen die Tageslast verglichen."""
        t = Teacher(name="Mr. Vitaliy", max_hours_per_week=3)
        t.assign_hours("Monday", 2)
        assert t.is_available("Monday", "10:30-11:50")
        t.assign_hours("Monday", 2)
        assert not t.is_available("Monday", "12:40-14:00")
        # anderer Tag unberührt, obwohl Wochensumme (4) > 3
        assert t.is_available("Tuesday", "9:00-10:20")

    def test_cap_reached_exactly_blocks(self):
        t = Teacher(name="X", max_hours_per_week=4)
        t.assign_hours("Monday", 4)
        assert not t.is_available("Monday", "9:00-10:20")

    def test_zero_cap_never_available(self):
        t = Teacher(name="X", max_hours_per_week=0)
        assert not t.is_available("Monday", "9:00-10:20")
        assert not t.is_available("Monday")

    def test_day_only_check_ignores_reservations(self):
        t = Teacher(name="X", max_hours_per_week=10)
        t.reserve_slot("Monday", "9:00-10:20")
        assert t.is_available("Monday")
        assert not t.is_available("Monday", "9:00-10:20")

    def test_assign_hours_accumulates(self):
        t = Teacher(name="X", max_hours_per_week=10)
        t.assign_hours("Monday", 2)
        t.assign_hours("Monday", 2)
        t.assign_hours("Tuesday", 2)
        assert t.hours_on("Monday") == 4
        assert t.hours_on("Tuesday") == 2
        assert t.assigned_hours == 6

    def test_ledger_not_serialized(self):
        t = Teacher(name="X", max_hours_per_week=10)
        t.reserve_slot("Monday", "9:00-10:20")
        t.assign_hours("Monday", 2)
        dumped = t.model_dump()
        assert set(dumped) == {"name", "preferred_days", "max_hours_per_week"}

    def test_fresh_copy_has_empty_ledger(self):
        t = Teacher(name="X", max_hours_per_week=10)
        t.reserve_slot("Monday", "9:00-10:20")
        t.assign_hours("Monday", 2)
        copy = t.fresh_copy()
        assert copy.assigned_hours == 0
        assert copy.is_available("Monday", "9:00-10:20")
        assert t.assigned_hours == 2

    def test_negative_cap_rejected(self):
        with pytest.raises(ValidationError):
            Teacher(name="X", max_hours_per_week=-1)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Teacher(name="  ", max_hours_per_week=5)


# ─── Raum-Ledger ──────────────────────────────────────────────────────────────

class TestRoomLedger:
    def test_reserve_blocks_exact_slot(self):
        r = Room(name="A101", capacity=30, resources=["computers"])
        assert r.is_available("Monday", "9:00-10:20")
        r.reserve("Monday", "9:00-10:20")
        assert not r.is_available("Monday", "9:00-10:20")
        assert r.is_available("Monday", "10:30-11:50")
        assert r.is_available("Tuesday", "9:00-10:20")

    def test_reserved_count(self):
        r = Room(name="A101", capacity=30)
        r.reserve("Monday", "9:00-10:20")
        r.reserve("Friday", "18:40-20:00")
        assert r.reserved_count == 2


# ─── Kurs + Placement ─────────────────────────────────────────────────────────

def _placement(course: str = "Math", duration: int = 2) -> Placement:
    return Placement(course=course, teacher="Dr. Andrii", room="A101",
                     day="Monday", time_slot="9:00-10:20", duration=duration)


class TestCourse:
    def test_remaining_starts_at_total(self):
        c = Course(name="Math", total_hours=30,
                   teacher=Teacher(name="Dr. Andrii", max_hours_per_week=20))
        assert c.remaining_hours == 30
        assert c.placements == ()
        assert not c.is_complete

    def test_schedule_placement_decrements(self):
        c = Course(name="Math", total_hours=4,
                   teacher=Teacher(name="Dr. Andrii", max_hours_per_week=20))
        c.schedule_placement(_placement())
        assert c.remaining_hours == 2
        assert c.scheduled_hours == 2
        c.schedule_placement(_placement())
        assert c.remaining_hours == 0
        assert c.is_complete
        assert len(c.placements) == 2

    def test_overbooking_rejected(self):
        c = Course(name="IT", total_hours=1,
                   teacher=Teacher(name="Mr. Vlad", max_hours_per_week=13))
        with pytest.raises(ValueError):
            c.schedule_placement(_placement("IT"))
        assert c.remaining_hours == 1

    def test_teacher_identity_kept(self):
        t = Teacher(name="Dr. Sasha", max_hours_per_week=10)
        c1 = Course(name="Web", total_hours=4, teacher=t)
        c2 = Course(name="Psychology", total_hours=4, teacher=t)
        assert c1.teacher is t
        assert c2.teacher is t

    def test_zero_hours_rejected(self):
        with pytest.raises(ValidationError):
            Course(name="X", total_hours=0, teacher=Teacher(name="T", max_hours_per_week=1))


class TestPlacement:
    def test_frozen(self):
        p = _placement()
        with pytest.raises(ValidationError):
            p.room = "B202"

    def test_describe(self):
        assert _placement().describe() == "Monday 9:00-10:20: Math in A101 by Dr. Andrii"


class TestSchedule:
    def test_append_only_view(self):
        s = Schedule(time_slots=["a", "b"], days=["Monday"])
        s.add_placement(_placement())
        view = s.placements
        assert isinstance(view, tuple)
        assert len(s) == 1

    def test_queries(self):
        s = Schedule(time_slots=["9:00-10:20", "10:30-11:50"], days=["Monday"])
        s.add_placement(Placement(course="B", teacher="T2", room="R2", day="Monday",
                                  time_slot="10:30-11:50"))
        s.add_placement(_placement())
        assert [p.course for p in s.get_day_schedule("Monday")] == ["Math", "B"]
        assert len(s.get_teacher_schedule("T2")) == 1
        assert len(s.get_room_schedule("A101")) == 1
        assert len(s.get_course_schedule("Math")) == 1


# ─── Datensatz ────────────────────────────────────────────────────────────────

class TestScheduleData:
    def test_sample_is_feasible(self):
        report = sample_data().validate_feasibility()
        assert report.is_feasible, report.errors

    def test_build_roster_shares_teacher_objects(self):
        roster = sample_data().build_roster()
        math = next(c for c in roster.courses if c.name == "Math")
        sport = next(c for c in roster.courses if c.name == "Sport")
        assert math.teacher is sport.teacher
        assert math.teacher is roster.teachers["Dr. Andrii"]

    def test_build_roster_is_fresh_each_time(self):
        data = sample_data()
        r1 = data.build_roster()
        r1.teachers["Mr. Smith"].assign_hours("Monday", 2)
        r1.rooms[0].reserve("Monday", "9:00-10:20")
        r2 = data.build_roster()
        assert r2.teachers["Mr. Smith"].assigned_hours == 0
        assert r2.rooms[0].is_available("Monday", "9:00-10:20")

    def test_unknown_teacher_reported(self):
        data = ScheduleData(
            teachers=[Teacher(name="A", max_hours_per_week=4)],
            rooms=[Room(name="R", capacity=10)],
            courses=[CourseDefinition(name="C", total_hours=2, teacher="B")],
            config=default_planner_config(),
        )
        report = data.validate_feasibility()
        assert not report.is_feasible
        assert any("'B'" in e for e in report.errors)
        with pytest.raises(KeyError):
            data.build_roster()

    def test_duplicate_names_reported(self):
        data = ScheduleData(
            teachers=[Teacher(name="A", max_hours_per_week=4)],
            rooms=[Room(name="R", capacity=10), Room(name="R", capacity=20)],
            courses=[CourseDefinition(name="C", total_hours=2, teacher="A")],
            config=default_planner_config(),
        )
        assert not data.validate_feasibility().is_feasible

    def test_zero_cap_warns(self):
        data = ScheduleData(
            teachers=[Teacher(name="A", max_hours_per_week=0)],
            rooms=[Room(name="R", capacity=10)],
            courses=[CourseDefinition(name="C", total_hours=2, teacher="A")],
            config=default_planner_config(),
        )
        report = data.validate_feasibility()
        assert report.is_feasible
        assert report.warnings

    def test_json_roundtrip(self, tmp_path):
        data = sample_data()
        path = tmp_path / "data.json"
        data.save_json(path)
        loaded = ScheduleData.load_json(path)
        assert [c.name for c in loaded.courses] == [c.name for c in data.courses]
        assert loaded.created_at is not None

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ScheduleData.load_json(tmp_path / "fehlt.json")

    def test_summary_mentions_counts(self):
        text = sample_data().summary()
        assert "Lehrkräfte: 10" in text
        assert "Kurse: 13" in text
        assert "Räume: 9" in text
