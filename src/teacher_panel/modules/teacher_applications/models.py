"""
Teacher Applications Models

Collection names and status values of the two records the workflows touch:

- teacherApplications/{applicationId}: the intake record under review
- teachers/{uid}: the active teacher profile, keyed by identity uid
"""

import enum

APPLICATIONS_COLLECTION = "teacherApplications"
TEACHERS_COLLECTION = "teachers"

MIN_TEMP_PASSWORD_LENGTH = 8


class ApplicationStatus(str, enum.Enum):
    """Status of a teacher application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TeacherStatus(str, enum.Enum):
    """Status of a teacher profile."""

    ACTIVE = "active"


class ReapprovalPolicy(str, enum.Enum):
    """What approving an already reviewed application does."""

    ALLOW = "allow"
    REQUIRE_FORCE = "require_force"
