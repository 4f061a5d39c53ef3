"""班级、试卷、提交与成绩模型。

外键字段（``teacherId``、``classId``、``paperId`` 等）只是普通 id 字符串，
不做存在性校验，删除时也不级联。
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, List, Optional

from pydantic import Field

from smartpaper.schemas.base import CamelModel, PartialUpdate


# === 班级 ===

class InsertClass(CamelModel):
    name: str
    teacher_id: Optional[str] = None
    subject: str


class ClassUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "subject"})

    name: Optional[str] = None
    teacher_id: Optional[str] = None
    subject: Optional[str] = None


class Class(InsertClass):
    id: str
    created_at: datetime


# === 试卷 ===

class InsertPaper(CamelModel):
    """``content`` 为不透明的题目结构，存储层从不解析。"""

    title: str
    subject: str
    class_id: Optional[str] = None
    teacher_id: Optional[str] = None
    content: Optional[Any] = None
    total_marks: int = Field(ge=0)


class PaperUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"title", "subject", "total_marks"})

    title: Optional[str] = None
    subject: Optional[str] = None
    class_id: Optional[str] = None
    teacher_id: Optional[str] = None
    content: Optional[Any] = None
    total_marks: Optional[int] = Field(default=None, ge=0)


class Paper(InsertPaper):
    id: str
    created_at: datetime


# === 提交 ===

class InsertSubmission(CamelModel):
    """学生答卷。``isGraded`` 在创建时总是 ``false``，不接受客户端指定。"""

    paper_id: Optional[str] = None
    student_id: Optional[str] = None
    content: Optional[Any] = None
    files_uploaded: List[str] = Field(default_factory=list)


class SubmissionUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"files_uploaded", "is_graded"})

    paper_id: Optional[str] = None
    student_id: Optional[str] = None
    content: Optional[Any] = None
    files_uploaded: Optional[List[str]] = None
    is_graded: Optional[bool] = None


class Submission(InsertSubmission):
    id: str
    submitted_at: datetime
    is_graded: bool = False


# === 成绩 ===

class InsertGrade(CamelModel):
    submission_id: Optional[str] = None
    student_id: Optional[str] = None
    paper_id: Optional[str] = None
    score: int
    total_marks: int
    feedback: Optional[str] = None


class GradeUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"score", "total_marks"})

    submission_id: Optional[str] = None
    student_id: Optional[str] = None
    paper_id: Optional[str] = None
    score: Optional[int] = None
    total_marks: Optional[int] = None
    feedback: Optional[str] = None


class Grade(InsertGrade):
    id: str
    graded_at: datetime
