"""班级、试卷、提交、成绩与学习资料表。

引用字段（teacher_id、class_id 等）故意不声明 ForeignKey：
删除用户或班级不会级联，也不会因为引用缺失而拒绝写入。
"""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from smartpaper.db import Base
from smartpaper.models.user import new_id, utcnow


class ClassRecord(Base):
    __tablename__ = "classes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    teacher_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )


class PaperRecord(Base):
    """试卷。``content`` 为题目结构的 JSON，存储层不解析。"""

    __tablename__ = "papers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    class_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    teacher_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    content: Mapped[Optional[Any]] = mapped_column(JSON)
    total_marks: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )


class SubmissionRecord(Base):
    __tablename__ = "submissions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    paper_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    student_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    # 格式: {"answers": [...]}
    content: Mapped[Optional[Any]] = mapped_column(JSON)
    # 格式: ["uploads/answer-1.png", ...]
    files_uploaded: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    is_graded: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class GradeRecord(Base):
    __tablename__ = "grades"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    submission_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    student_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    paper_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    total_marks: Mapped[int] = mapped_column(Integer, nullable=False)
    feedback: Mapped[Optional[str]] = mapped_column(Text)
    graded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )


class StudyMaterialRecord(Base):
    __tablename__ = "study_materials"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    content: Mapped[Optional[str]] = mapped_column(Text)
    uploaded_by: Mapped[Optional[str]] = mapped_column(String(36))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
