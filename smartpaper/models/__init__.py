"""SQLAlchemy 表定义（``sql`` 存储后端）。"""

from smartpaper.models.academics import (
    ClassRecord,
    GradeRecord,
    PaperRecord,
    StudyMaterialRecord,
    SubmissionRecord,
)
from smartpaper.models.enums import UserRole
from smartpaper.models.user import UserRecord

__all__ = [
    "ClassRecord",
    "GradeRecord",
    "PaperRecord",
    "StudyMaterialRecord",
    "SubmissionRecord",
    "UserRecord",
    "UserRole",
]
