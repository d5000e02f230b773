"""Tests für die Post-Run Validierung."""

from config.defaults import default_planner_config
from data.sample_data import sample_data
from models.placement import Placement
from models.room import Room
from models.schedule_data import CourseDefinition, ScheduleData
from models.teacher import Teacher
from analysis.solution_validator import SolutionValidator
from solver.allocator import AllocationResult, GreedyAllocator

S1, S2, S3 = "9:00-10:20", "10:30-11:50", "12:40-14:00"


def _data(cap: int = 10) -> ScheduleData:
    return ScheduleData(
        teachers=[
            Teacher(name="T1", max_hours_per_week=cap),
            Teacher(name="T2", max_hours_per_week=cap),
        ],
        rooms=[Room(name="R1", capacity=20), Room(name="R2", capacity=20)],
        courses=[
            CourseDefinition(name="A", total_hours=4, teacher="T1"),
            CourseDefinition(name="B", total_hours=2, teacher="T2"),
        ],
        config=default_planner_config(),
    )


def _p(course: str, teacher: str, room: str, slot: str, day: str = "Monday",
       duration: int = 2) -> Placement:
    return Placement(course=course, teacher=teacher, room=room, day=day,
                     time_slot=slot, duration=duration)


def _result(placements: list[Placement], unmet: dict[str, int] | None = None) -> AllocationResult:
    return AllocationResult(
        placements=placements,
        messages=[],
        unmet_hours=unmet or {},
        days=["Monday", "Tuesday"],
        time_slots=[S1, S2, S3],
    )


class TestSolutionValidator:
    def test_clean_result_is_valid(self):
        result = _result([
            _p("A", "T1", "R1", S1), _p("A", "T1", "R1", S2), _p("B", "T2", "R2", S1),
        ])
        report = SolutionValidator().validate(result, _data())
        assert report.is_valid
        assert report.violations == []

    def test_room_double_booking_detected(self):
        result = _result([
            _p("A", "T1", "R1", S1), _p("A", "T1", "R2", S2), _p("B", "T2", "R1", S1),
        ])
        report = SolutionValidator().validate(result, _data())
        assert not report.is_valid
        hits = report.by_constraint("room_double_booking")
        assert len(hits) == 1
        assert hits[0].entity == "R1"

    def test_teacher_double_booking_detected(self):
        result = _result([
            _p("A", "T1", "R1", S1), _p("A", "T1", "R2", S1), _p("B", "T2", "R1", S2),
        ])
        report = SolutionValidator().validate(result, _data())
        assert len(report.by_constraint("teacher_double_booking")) == 1

    def test_booking_beyond_daily_cap_is_error(self):
        """Limit 2: zweite Buchung am selben Tag startet bei Tageslast 2."""
        result = _result([
            _p("A", "T1", "R1", S1), _p("A", "T1", "R1", S2), _p("B", "T2", "R2", S1),
        ])
        report = SolutionValidator().validate(result, _data(cap=2))
        errors = report.by_constraint("daily_cap")
        assert [v.entity for v in errors] == ["T1"]
        assert not report.is_valid

    def test_overshoot_is_only_warning(self):
        """Limit 3: Tageslast 2 < 3 erlaubt eine zweite Buchung → 4h."""
        result = _result([
            _p("A", "T1", "R1", S1), _p("A", "T1", "R1", S2), _p("B", "T2", "R2", S1),
        ])
        report = SolutionValidator().validate(result, _data(cap=3))
        assert report.is_valid
        warnings = report.by_constraint("daily_cap_overshoot")
        assert len(warnings) == 1
        assert warnings[0].severity == "warning"

    def test_hour_conservation_violation(self):
        result = _result([_p("A", "T1", "R1", S1), _p("B", "T2", "R2", S1)])
        report = SolutionValidator().validate(result, _data())
        hits = report.by_constraint("hour_conservation")
        assert [v.entity for v in hits] == ["A"]

    def test_incomplete_course_is_warning(self):
        result = _result(
            [_p("A", "T1", "R1", S1), _p("B", "T2", "R2", S1)],
            unmet={"A": 2},
        )
        report = SolutionValidator().validate(result, _data())
        assert report.is_valid
        assert [v.entity for v in report.by_constraint("course_incomplete")] == ["A"]

    def test_unknown_references(self):
        result = _result([
            _p("A", "T2", "R1", S1), _p("A", "T1", "R9", S2), _p("B", "T2", "R2", S1),
        ], unmet={"A": 0})
        report = SolutionValidator().validate(result, _data())
        assert len(report.by_constraint("unknown_reference")) == 2

    def test_sample_run_is_valid(self):
        data = sample_data()
        roster = data.build_roster()
        result = GreedyAllocator.from_config(data.config).allocate(roster.courses, roster.rooms)
        report = SolutionValidator().validate(result, data)
        assert report.is_valid, [v.description for v in report.violations]
        assert not report.by_constraint("hour_conservation")
