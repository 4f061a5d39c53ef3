"""API 请求/响应模型。"""

from smartpaper.schemas.academics import (
    Class,
    ClassUpdate,
    Grade,
    GradeUpdate,
    InsertClass,
    InsertGrade,
    InsertPaper,
    InsertSubmission,
    Paper,
    PaperUpdate,
    Submission,
    SubmissionUpdate,
)
from smartpaper.schemas.admin import AdminStats, MessageResponse
from smartpaper.schemas.materials import (
    InsertStudyMaterial,
    StudyMaterial,
    StudyMaterialUpdate,
)
from smartpaper.schemas.users import (
    InsertUser,
    LoginRequest,
    LoginResponse,
    PublicUser,
    User,
    UserUpdate,
)

__all__ = [
    "AdminStats",
    "Class",
    "ClassUpdate",
    "Grade",
    "GradeUpdate",
    "InsertClass",
    "InsertGrade",
    "InsertPaper",
    "InsertStudyMaterial",
    "InsertSubmission",
    "InsertUser",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Paper",
    "PaperUpdate",
    "PublicUser",
    "StudyMaterial",
    "StudyMaterialUpdate",
    "Submission",
    "SubmissionUpdate",
    "User",
    "UserUpdate",
]
