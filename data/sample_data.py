"""Beispieldatensatz: 10 Lehrkräfte, 13 Kurse, 9 Räume.

Enthält absichtliche Engpässe:
  1. Mr. Vitaliy: max_hours_per_week = 3 → höchstens 2 Veranstaltungen pro Tag
  2. Dr. Andrii und Dr. Sasha tragen je zwei große Kurse (50h bzw. 42h)
  3. B405 hat nur 10 Plätze (Kapazität wird vom Allokator nicht geprüft)
"""

from typing import Optional

from config.defaults import default_planner_config
from config.schema import PlannerConfig
from models.room import Room
from models.schedule_data import CourseDefinition, ScheduleData
from models.teacher import Teacher

# Name, Wunschtage, max_hours_per_week
_TEACHERS = [
    ("Mr. Smith",   ["Monday", "Wednesday"], 20),
    ("Dr. Johnson", ["Tuesday", "Thursday"], 15),
    ("Dr. Maks",    ["Monday", "Wednesday"], 30),
    ("Dr. Andrii",  ["Tuesday", "Friday"],   20),
    ("Dr. Alex",    ["Tuesday"],             18),
    ("Mr. Vlad",    ["Monday", "Wednesday"], 13),
    ("Dr. Petro",   ["Tuesday", "Friday"],   29),
    ("Dr. Sasha",   ["Monday", "Thursday"],  10),
    ("Mr. Vitaliy", ["Tuesday", "Friday"],   3),
    ("Ms. Natalia", ["Monday", "Wednesday"], 23),
]

# Kurs, Stunden, Lehrkraft, Typ
_COURSES = [
    ("Cybersecurity",     20, "Mr. Smith",   "Lecture"),
    ("Data Science",      12, "Dr. Johnson", "Lecture"),
    ("ITSM",              15, "Dr. Maks",    "Seminary"),
    ("Math",              30, "Dr. Andrii",  "Lecture"),
    ("Cryptography",      14, "Dr. Alex",    "Seminary"),
    ("IT",                 5, "Mr. Vlad",    "Lecture"),
    ("DataBase_Security", 23, "Dr. Petro",   "Seminary"),
    ("Web_tehnology",     27, "Dr. Sasha",   "Lecture"),
    ("ITOB",              17, "Mr. Vitaliy", "Seminary"),
    ("Virtual_asistent",  13, "Ms. Natalia", "Seminary"),
    ("Sport",             20, "Dr. Andrii",  "Seminary"),
    ("Psychology",        15, "Dr. Sasha",   "Lecture"),
    ("Philosophy",        10, "Ms. Natalia", "Seminary"),
]

# Raum, Kapazität, Ausstattung
_ROOMS = [
    ("A101", 30, ["computers", "projector"]),
    ("B202", 50, ["whiteboard"]),
    ("B102", 20, ["whiteboard"]),
    ("B103", 30, ["whiteboard"]),
    ("B203", 40, ["whiteboard"]),
    ("B303", 55, ["whiteboard"]),
    ("B301", 50, ["whiteboard"]),
    ("B302", 60, ["whiteboard"]),
    ("B405", 10, ["whiteboard"]),
]


def sample_data(config: Optional[PlannerConfig] = None) -> ScheduleData:
    """Erzeugt den Beispieldatensatz mit der übergebenen (oder Default-)Config."""
    return ScheduleData(
        teachers=[
            Teacher(name=n, preferred_days=days, max_hours_per_week=cap)
            for n, days, cap in _TEACHERS
        ],
        rooms=[Room(name=n, capacity=cap, resources=res) for n, cap, res in _ROOMS],
        courses=[
            CourseDefinition(name=n, total_hours=h, teacher=t, course_type=typ)
            for n, h, t, typ in _COURSES
        ],
        config=config or default_planner_config(),
    )
