"""进程内存储实现。

每类实体一个 ``Collection``，内部是 ``id -> 记录`` 的字典，并各自持有一把锁：
FastAPI 在线程池中执行同步路由，同一字典的并发写必须互斥。
"""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel

from smartpaper.errors import DuplicateUserError
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

T = TypeVar("T", bound=BaseModel)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Collection(Generic[T]):
    """单类实体的线程安全字典。

    ``writable`` 是允许通过 ``update`` 修改的字段；``id`` 与时间戳不在其中，
    因此创建后不可变。
    """

    def __init__(self, name: str, writable: Iterable[str]) -> None:
        self.name = name
        self.writable = frozenset(writable)
        self.lock = threading.RLock()
        self._records: dict[str, T] = {}

    def insert(self, record: T) -> T:
        with self.lock:
            self._records[record.id] = record
        logger.debug("Created %s %s", self.name, record.id)
        return record.model_copy(deep=True)

    def get(self, record_id: str) -> Optional[T]:
        with self.lock:
            record = self._records.get(record_id)
            return record.model_copy(deep=True) if record is not None else None

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        with self.lock:
            for record in self._records.values():
                if predicate(record):
                    return record.model_copy(deep=True)
        return None

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        with self.lock:
            return [r.model_copy(deep=True) for r in self._records.values() if predicate(r)]

    def all(self) -> list[T]:
        with self.lock:
            return [r.model_copy(deep=True) for r in self._records.values()]

    def update(self, record_id: str, changes: Changes) -> Optional[T]:
        allowed = copy.deepcopy({k: v for k, v in changes.items() if k in self.writable})
        with self.lock:
            existing = self._records.get(record_id)
            if existing is None:
                return None
            updated = existing.model_copy(update=allowed)
            self._records[record_id] = updated
        if allowed:
            logger.debug("Updated %s %s: %s", self.name, record_id, sorted(allowed))
        return updated.model_copy(deep=True)

    def delete(self, record_id: str) -> bool:
        with self.lock:
            removed = self._records.pop(record_id, None) is not None
        if removed:
            logger.debug("Deleted %s %s", self.name, record_id)
        return removed


class MemStorage(Storage):
    """基于字典的存储，生命周期与进程相同，重启即清空。"""

    def __init__(self) -> None:
        self.users: Collection[User] = Collection("user", InsertUser.model_fields)
        self.classes: Collection[Class] = Collection("class", InsertClass.model_fields)
        self.papers: Collection[Paper] = Collection("paper", InsertPaper.model_fields)
        self.submissions: Collection[Submission] = Collection(
            "submission", [*InsertSubmission.model_fields, "is_graded"]
        )
        self.grades: Collection[Grade] = Collection("grade", InsertGrade.model_fields)
        self.study_materials: Collection[StudyMaterial] = Collection(
            "study_material", InsertStudyMaterial.model_fields
        )

    # --- 用户 ---

    def _ensure_unique(
        self, username: Optional[str], email: Optional[str], exclude_id: Optional[str] = None
    ) -> None:
        for user in self.users.filter(lambda u: u.id != exclude_id):
            if username is not None and user.username == username:
                raise DuplicateUserError("username", username)
            if email is not None and user.email == email:
                raise DuplicateUserError("email", email)

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.users.find(lambda u: u.username == username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.users.find(lambda u: u.email == email)

    def get_users_by_role(self, role: UserRole) -> list[User]:
        return self.users.filter(lambda u: u.role == role)

    def get_all_users(self) -> list[User]:
        return self.users.all()

    def create_user(self, data: InsertUser) -> User:
        # 检查与写入必须在同一把锁内完成
        with self.users.lock:
            self._ensure_unique(data.username, data.email)
            user = User(id=_new_id(), created_at=_now(), **data.model_dump())
            return self.users.insert(user)

    def update_user(self, user_id: str, changes: Changes) -> Optional[User]:
        with self.users.lock:
            if self.users.get(user_id) is None:
                return None
            self._ensure_unique(changes.get("username"), changes.get("email"), exclude_id=user_id)
            return self.users.update(user_id, changes)

    def delete_user(self, user_id: str) -> bool:
        return self.users.delete(user_id)

    # --- 班级 ---

    def get_class(self, class_id: str) -> Optional[Class]:
        return self.classes.get(class_id)

    def get_classes_by_teacher(self, teacher_id: str) -> list[Class]:
        return self.classes.filter(lambda c: c.teacher_id == teacher_id)

    def get_all_classes(self) -> list[Class]:
        return self.classes.all()

    def create_class(self, data: InsertClass) -> Class:
        return self.classes.insert(Class(id=_new_id(), created_at=_now(), **data.model_dump()))

    def update_class(self, class_id: str, changes: Changes) -> Optional[Class]:
        return self.classes.update(class_id, changes)

    def delete_class(self, class_id: str) -> bool:
        return self.classes.delete(class_id)

    # --- 试卷 ---

    def get_paper(self, paper_id: str) -> Optional[Paper]:
        return self.papers.get(paper_id)

    def get_papers_by_teacher(self, teacher_id: str) -> list[Paper]:
        return self.papers.filter(lambda p: p.teacher_id == teacher_id)

    def get_papers_by_class(self, class_id: str) -> list[Paper]:
        return self.papers.filter(lambda p: p.class_id == class_id)

    def get_all_papers(self) -> list[Paper]:
        return self.papers.all()

    def create_paper(self, data: InsertPaper) -> Paper:
        return self.papers.insert(Paper(id=_new_id(), created_at=_now(), **data.model_dump()))

    def update_paper(self, paper_id: str, changes: Changes) -> Optional[Paper]:
        return self.papers.update(paper_id, changes)

    def delete_paper(self, paper_id: str) -> bool:
        return self.papers.delete(paper_id)

    # --- 提交 ---

    def get_submission(self, submission_id: str) -> Optional[Submission]:
        return self.submissions.get(submission_id)

    def get_submissions_by_paper(self, paper_id: str) -> list[Submission]:
        return self.submissions.filter(lambda s: s.paper_id == paper_id)

    def get_submissions_by_student(self, student_id: str) -> list[Submission]:
        return self.submissions.filter(lambda s: s.student_id == student_id)

    def get_all_submissions(self) -> list[Submission]:
        return self.submissions.all()

    def create_submission(self, data: InsertSubmission) -> Submission:
        submission = Submission(
            id=_new_id(), submitted_at=_now(), is_graded=False, **data.model_dump()
        )
        return self.submissions.insert(submission)

    def update_submission(self, submission_id: str, changes: Changes) -> Optional[Submission]:
        return self.submissions.update(submission_id, changes)

    def delete_submission(self, submission_id: str) -> bool:
        return self.submissions.delete(submission_id)

    # --- 成绩 ---

    def get_grade(self, grade_id: str) -> Optional[Grade]:
        return self.grades.get(grade_id)

    def get_grades_by_student(self, student_id: str) -> list[Grade]:
        return self.grades.filter(lambda g: g.student_id == student_id)

    def get_grades_by_paper(self, paper_id: str) -> list[Grade]:
        return self.grades.filter(lambda g: g.paper_id == paper_id)

    def get_grades_by_submission(self, submission_id: str) -> list[Grade]:
        return self.grades.filter(lambda g: g.submission_id == submission_id)

    def get_all_grades(self) -> list[Grade]:
        return self.grades.all()

    def create_grade(self, data: InsertGrade) -> Grade:
        return self.grades.insert(Grade(id=_new_id(), graded_at=_now(), **data.model_dump()))

    def update_grade(self, grade_id: str, changes: Changes) -> Optional[Grade]:
        return self.grades.update(grade_id, changes)

    def delete_grade(self, grade_id: str) -> bool:
        return self.grades.delete(grade_id)

    # --- 学习资料 ---

    def get_study_material(self, material_id: str) -> Optional[StudyMaterial]:
        return self.study_materials.get(material_id)

    def get_study_materials_by_subject(self, subject: str) -> list[StudyMaterial]:
        return self.study_materials.filter(lambda m: m.subject == subject)

    def get_all_study_materials(self) -> list[StudyMaterial]:
        return self.study_materials.all()

    def create_study_material(self, data: InsertStudyMaterial) -> StudyMaterial:
        material = StudyMaterial(id=_new_id(), created_at=_now(), **data.model_dump())
        return self.study_materials.insert(material)

    def update_study_material(
        self, material_id: str, changes: Changes
    ) -> Optional[StudyMaterial]:
        return self.study_materials.update(material_id, changes)

    def delete_study_material(self, material_id: str) -> bool:
        return self.study_materials.delete(material_id)
