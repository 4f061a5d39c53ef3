"""存储接口定义。

``Storage`` 描述六类实体（用户、班级、试卷、提交、成绩、学习资料）的增删改查
以及按外键筛选的查询。实现类只需保证：

- ``get_*`` 找不到记录时返回 ``None``，不抛异常；
- ``update_*`` 只合并传入的字段，记录不存在时返回 ``None``；
- ``delete_*`` 返回是否真的删除了记录，重复删除不是错误；
- ``get_*_by_*`` 没有匹配时返回空列表；
- 返回值是副本，调用方修改它们不会影响已存储的数据。

外键字段只是 id 字符串，存储层不校验引用是否存在，也不做级联删除。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

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

Changes = Mapping[str, Any]


class Storage(ABC):
    """实体存储的抽象接口。"""

    # --- 用户 ---

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def get_users_by_role(self, role: UserRole) -> list[User]: ...

    @abstractmethod
    def get_all_users(self) -> list[User]: ...

    @abstractmethod
    def create_user(self, data: InsertUser) -> User:
        """创建用户。用户名或邮箱被占用时抛出 ``DuplicateUserError``。"""

    @abstractmethod
    def update_user(self, user_id: str, changes: Changes) -> Optional[User]:
        """部分更新用户。改成他人已占用的用户名或邮箱时抛出 ``DuplicateUserError``。"""

    @abstractmethod
    def delete_user(self, user_id: str) -> bool: ...

    # --- 班级 ---

    @abstractmethod
    def get_class(self, class_id: str) -> Optional[Class]: ...

    @abstractmethod
    def get_classes_by_teacher(self, teacher_id: str) -> list[Class]: ...

    @abstractmethod
    def get_all_classes(self) -> list[Class]: ...

    @abstractmethod
    def create_class(self, data: InsertClass) -> Class: ...

    @abstractmethod
    def update_class(self, class_id: str, changes: Changes) -> Optional[Class]: ...

    @abstractmethod
    def delete_class(self, class_id: str) -> bool: ...

    # --- 试卷 ---

    @abstractmethod
    def get_paper(self, paper_id: str) -> Optional[Paper]: ...

    @abstractmethod
    def get_papers_by_teacher(self, teacher_id: str) -> list[Paper]: ...

    @abstractmethod
    def get_papers_by_class(self, class_id: str) -> list[Paper]: ...

    @abstractmethod
    def get_all_papers(self) -> list[Paper]: ...

    @abstractmethod
    def create_paper(self, data: InsertPaper) -> Paper: ...

    @abstractmethod
    def update_paper(self, paper_id: str, changes: Changes) -> Optional[Paper]: ...

    @abstractmethod
    def delete_paper(self, paper_id: str) -> bool: ...

    # --- 提交 ---

    @abstractmethod
    def get_submission(self, submission_id: str) -> Optional[Submission]: ...

    @abstractmethod
    def get_submissions_by_paper(self, paper_id: str) -> list[Submission]: ...

    @abstractmethod
    def get_submissions_by_student(self, student_id: str) -> list[Submission]: ...

    @abstractmethod
    def get_all_submissions(self) -> list[Submission]: ...

    @abstractmethod
    def create_submission(self, data: InsertSubmission) -> Submission:
        """创建提交，``is_graded`` 固定为 ``False``。"""

    @abstractmethod
    def update_submission(self, submission_id: str, changes: Changes) -> Optional[Submission]: ...

    @abstractmethod
    def delete_submission(self, submission_id: str) -> bool: ...

    def mark_submission_graded(self, submission_id: str) -> Optional[Submission]:
        """把提交标记为已评分。

        创建成绩时不会自动调用，需要由调用方显式触发；重复调用结果不变。
        """
        return self.update_submission(submission_id, {"is_graded": True})

    # --- 成绩 ---

    @abstractmethod
    def get_grade(self, grade_id: str) -> Optional[Grade]: ...

    @abstractmethod
    def get_grades_by_student(self, student_id: str) -> list[Grade]: ...

    @abstractmethod
    def get_grades_by_paper(self, paper_id: str) -> list[Grade]: ...

    @abstractmethod
    def get_grades_by_submission(self, submission_id: str) -> list[Grade]: ...

    @abstractmethod
    def get_all_grades(self) -> list[Grade]: ...

    @abstractmethod
    def create_grade(self, data: InsertGrade) -> Grade: ...

    @abstractmethod
    def update_grade(self, grade_id: str, changes: Changes) -> Optional[Grade]: ...

    @abstractmethod
    def delete_grade(self, grade_id: str) -> bool: ...

    # --- 学习资料 ---

    @abstractmethod
    def get_study_material(self, material_id: str) -> Optional[StudyMaterial]: ...

    @abstractmethod
    def get_study_materials_by_subject(self, subject: str) -> list[StudyMaterial]: ...

    @abstractmethod
    def get_all_study_materials(self) -> list[StudyMaterial]: ...

    @abstractmethod
    def create_study_material(self, data: InsertStudyMaterial) -> StudyMaterial: ...

    @abstractmethod
    def update_study_material(
        self, material_id: str, changes: Changes
    ) -> Optional[StudyMaterial]: ...

    @abstractmethod
    def delete_study_material(self, material_id: str) -> bool: ...

    def close(self) -> None:
        """释放底层资源，内存实现无需处理。"""
