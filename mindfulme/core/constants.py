"""Shared validation constants and enumerations."""

import re
from typing import Literal

MOOD_SCORE_MIN = 1
MOOD_SCORE_MAX = 10
MOOD_THRESHOLD_LOW = 4
MOOD_THRESHOLD_HIGH = 7

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
DISPLAY_NAME_MIN_LEN = 2
DISPLAY_NAME_MAX_LEN = 50
EMAIL_MAX_LEN = 320
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

JOURNAL_MAX_LENGTH = 5000
RANT_MAX_LENGTH = 1000
TAG_MAX_LENGTH = 50
MAX_TAGS = 20

MOOD_DAYS_DEFAULT = 30
MOOD_DAYS_MAX = 365

AppointmentStatus = Literal["pending", "confirmed", "completed", "cancelled"]
APPOINTMENT_STATUSES: frozenset[str] = frozenset(
    {"pending", "confirmed", "completed", "cancelled"}
)

AssessmentType = Literal["comprehensive", "quick-check", "monthly-review"]
QuestionType = Literal["scale", "multiple-choice", "text"]
