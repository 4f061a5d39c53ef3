"""SQLAlchemy 存储实现。

与 ``MemStorage`` 行为一致，只是数据落在数据库里，可在重启后保留。
每个操作独立开启一个事务。
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from smartpaper.db import Base, build_engine, build_session_factory, session_scope
from smartpaper.errors import DuplicateUserError
from smartpaper.models import (
    ClassRecord,
    GradeRecord,
    PaperRecord,
    StudyMaterialRecord,
    SubmissionRecord,
    UserRecord,
)
from smartpaper.models.enums import UserRole
from smartpaper.schemas import (
    Class,
    Grade,
    InsertClass,
    InsertGrade,
    InsertPaper,
    InsertStudyMaterial,
    InsertSubmission,
    InsertUser,
    Paper,
    StudyMaterial,
    Submission,
    User,
)
from smartpaper.storage.base import Changes, Storage

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)

_TIMESTAMP_FIELDS = ("created_at", "submitted_at", "graded_at")
_SERVER_FIELDS = frozenset({"id", *_TIMESTAMP_FIELDS})


def _to_schema(schema: Type[S], row: Base) -> S:
    """ORM 行转为 pydantic 模型；SQLite 读出的时间不带时区，统一补为 UTC。"""
    item = schema.model_validate(row)
    fixes = {}
    for name in _TIMESTAMP_FIELDS:
        value = getattr(item, name, None)
        if isinstance(value, datetime) and value.tzinfo is None:
            fixes[name] = value.replace(tzinfo=timezone.utc)
    return item.model_copy(update=fixes) if fixes else item


class SqlStorage(Storage):
    """基于 SQLAlchemy 的存储。"""

    def __init__(self, database_url: str, engine: Optional[Engine] = None) -> None:
        self.engine = engine or build_engine(database_url)
        self.session_factory = build_session_factory(self.engine)
        Base.metadata.create_all(bind=self.engine)

    def close(self) -> None:
        self.engine.dispose()

    # --- 通用操作 ---

    def _insert(self, record_cls: Type[Base], schema: Type[S], values: dict[str, Any]) -> S:
        with session_scope(self.session_factory) as session:
            row = record_cls(**values)
            session.add(row)
            session.flush()
            session.refresh(row)
            logger.debug("Created %s %s", record_cls.__tablename__, row.id)
            return _to_schema(schema, row)

    def _get(self, record_cls: Type[Base], schema: Type[S], record_id: str) -> Optional[S]:
        with session_scope(self.session_factory) as session:
            row = session.get(record_cls, record_id)
            return _to_schema(schema, row) if row is not None else None

    def _first(self, record_cls: Type[Base], schema: Type[S], **criteria: Any) -> Optional[S]:
        with session_scope(self.session_factory) as session:
            row = session.scalars(select(record_cls).filter_by(**criteria).limit(1)).first()
            return _to_schema(schema, row) if row is not None else None

    def _filter(self, record_cls: Type[Base], schema: Type[S], **criteria: Any) -> list[S]:
        with session_scope(self.session_factory) as session:
            rows = session.scalars(select(record_cls).filter_by(**criteria)).all()
            return [_to_schema(schema, row) for row in rows]

    def _apply(self, row: Base, changes: Changes) -> None:
        columns = row.__table__.columns.keys()
        for key, value in changes.items():
            if key in columns and key not in _SERVER_FIELDS:
                setattr(row, key, value)

    def _update(
        self, record_cls: Type[Base], schema: Type[S], record_id: str, changes: Changes
    ) -> Optional[S]:
        with session_scope(self.session_factory) as session:
            row = session.get(record_cls, record_id)
            if row is None:
                return None
            self._apply(row, changes)
            session.flush()
            logger.debug("Updated %s %s: %s", record_cls.__tablename__, record_id, sorted(changes))
            return _to_schema(schema, row)

    def _delete(self, record_cls: Type[Base], record_id: str) -> bool:
        with session_scope(self.session_factory) as session:
            row = session.get(record_cls, record_id)
            if row is None:
                return False
            session.delete(row)
            logger.debug("Deleted %s %s", record_cls.__tablename__, record_id)
            return True

    # --- 用户 ---

    def _ensure_unique(
        self,
        session: Session,
        username: Optional[str],
        email: Optional[str],
        exclude_id: Optional[str] = None,
    ) -> None:
        for field, value in (("username", username), ("email", email)):
            if value is None:
                continue
            stmt = select(UserRecord.id).where(getattr(UserRecord, field) == value)
            if exclude_id is not None:
                stmt = stmt.where(UserRecord.id != exclude_id)
            if session.scalars(stmt.limit(1)).first() is not None:
                raise DuplicateUserError(field, value)

    def get_user(self, user_id: str) -> Optional[User]:
        return self._get(UserRecord, User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._first(UserRecord, User, username=username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._first(UserRecord, User, email=email)

    def get_users_by_role(self, role: UserRole) -> list[User]:
        return self._filter(UserRecord, User, role=UserRole(role))

    def get_all_users(self) -> list[User]:
        return self._filter(UserRecord, User)

    def _raise_conflict(
        self,
        exc: IntegrityError,
        username: Optional[str],
        email: Optional[str],
        exclude_id: Optional[str] = None,
    ) -> None:
        """并发写入时唯一索引兜底报错，用新会话重新查出冲突字段。"""
        with session_scope(self.session_factory) as session:
            self._ensure_unique(session, username, email, exclude_id=exclude_id)
        raise exc

    def create_user(self, data: InsertUser) -> User:
        try:
            with session_scope(self.session_factory) as session:
                self._ensure_unique(session, data.username, data.email)
                row = UserRecord(**data.model_dump())
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_schema(User, row)
        except IntegrityError as exc:
            self._raise_conflict(exc, data.username, data.email)
            raise

    def update_user(self, user_id: str, changes: Changes) -> Optional[User]:
        username, email = changes.get("username"), changes.get("email")
        try:
            with session_scope(self.session_factory) as session:
                row = session.get(UserRecord, user_id)
                if row is None:
                    return None
                self._ensure_unique(session, username, email, exclude_id=user_id)
                self._apply(row, changes)
                session.flush()
                return _to_schema(User, row)
        except IntegrityError as exc:
            self._raise_conflict(exc, username, email, exclude_id=user_id)
            raise

    def delete_user(self, user_id: str) -> bool:
        return self._delete(UserRecord, user_id)

    # --- 班级 ---

    def get_class(self, class_id: str) -> Optional[Class]:
        return self._get(ClassRecord, Class, class_id)

    def get_classes_by_teacher(self, teacher_id: str) -> list[Class]:
        return self._filter(ClassRecord, Class, teacher_id=teacher_id)

    def get_all_classes(self) -> list[Class]:
        return self._filter(ClassRecord, Class)

    def create_class(self, data: InsertClass) -> Class:
        return self._insert(ClassRecord, Class, data.model_dump())

    def update_class(self, class_id: str, changes: Changes) -> Optional[Class]:
        return self._update(ClassRecord, Class, class_id, changes)

    def delete_class(self, class_id: str) -> bool:
        return self._delete(ClassRecord, class_id)

    # --- 试卷 ---

    def get_paper(self, paper_id: str) -> Optional[Paper]:
        return self._get(PaperRecord, Paper, paper_id)

    def get_papers_by_teacher(self, teacher_id: str) -> list[Paper]:
        return self._filter(PaperRecord, Paper, teacher_id=teacher_id)

    def get_papers_by_class(self, class_id: str) -> list[Paper]:
        return self._filter(PaperRecord, Paper, class_id=class_id)

    def get_all_papers(self) -> list[Paper]:
        return self._filter(PaperRecord, Paper)

    def create_paper(self, data: InsertPaper) -> Paper:
        return self._insert(PaperRecord, Paper, data.model_dump())

    def update_paper(self, paper_id: str, changes: Changes) -> Optional[Paper]:
        return self._update(PaperRecord, Paper, paper_id, changes)

    def delete_paper(self, paper_id: str) -> bool:
        return self._delete(PaperRecord, paper_id)

    # --- 提交 ---

    def get_submission(self, submission_id: str) -> Optional[Submission]:
        return self._get(SubmissionRecord, Submission, submission_id)

    def get_submissions_by_paper(self, paper_id: str) -> list[Submission]:
        return self._filter(SubmissionRecord, Submission, paper_id=paper_id)

    def get_submissions_by_student(self, student_id: str) -> list[Submission]:
        return self._filter(SubmissionRecord, Submission, student_id=student_id)

    def get_all_submissions(self) -> list[Submission]:
        return self._filter(SubmissionRecord, Submission)

    def create_submission(self, data: InsertSubmission) -> Submission:
        return self._insert(
            SubmissionRecord, Submission, {**data.model_dump(), "is_graded": False}
        )

    def update_submission(self, submission_id: str, changes: Changes) -> Optional[Submission]:
        return self._update(SubmissionRecord, Submission, submission_id, changes)

    def delete_submission(self, submission_id: str) -> bool:
        return self._delete(SubmissionRecord, submission_id)

    # --- 成绩 ---

    def get_grade(self, grade_id: str) -> Optional[Grade]:
        return self._get(GradeRecord, Grade, grade_id)

    def get_grades_by_student(self, student_id: str) -> list[Grade]:
        return self._filter(GradeRecord, Grade, student_id=student_id)

    def get_grades_by_paper(self, paper_id: str) -> list[Grade]:
        return self._filter(GradeRecord, Grade, paper_id=paper_id)

    def get_grades_by_submission(self, submission_id: str) -> list[Grade]:
        return self._filter(GradeRecord, Grade, submission_id=submission_id)

    def get_all_grades(self) -> list[Grade]:
        return self._filter(GradeRecord, Grade)

    def create_grade(self, data: InsertGrade) -> Grade:
        return self._insert(GradeRecord, Grade, data.model_dump())

    def update_grade(self, grade_id: str, changes: Changes) -> Optional[Grade]:
        return self._update(GradeRecord, Grade, grade_id, changes)

    def delete_grade(self, grade_id: str) -> bool:
        return self._delete(GradeRecord, grade_id)

    # --- 学习资料 ---

    def get_study_material(self, material_id: str) -> Optional[StudyMaterial]:
        return self._get(StudyMaterialRecord, StudyMaterial, material_id)

    def get_study_materials_by_subject(self, subject: str) -> list[StudyMaterial]:
        return self._filter(StudyMaterialRecord, StudyMaterial, subject=subject)

    def get_all_study_materials(self) -> list[StudyMaterial]:
        return self._filter(StudyMaterialRecord, StudyMaterial)

    def create_study_material(self, data: InsertStudyMaterial) -> StudyMaterial:
        return self._insert(StudyMaterialRecord, StudyMaterial, data.model_dump())

    def update_study_material(
        self, material_id: str, changes: Changes
    ) -> Optional[StudyMaterial]:
        return self._update(StudyMaterialRecord, StudyMaterial, material_id, changes)

    def delete_study_material(self, material_id: str) -> bool:
        return self._delete(StudyMaterialRecord, material_id)
