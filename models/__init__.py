from models.teacher import Teacher
from models.room import Room
from models.placement import Placement
from models.course import Course
from models.schedule import Schedule
from models.schedule_data import ScheduleData, CourseDefinition, FeasibilityReport, Roster

__all__ = [
    "Teacher",
    "Room",
    "Placement",
    "Course",
    "Schedule",
    "ScheduleData",
    "CourseDefinition",
    "FeasibilityReport",
    "Roster",
]
