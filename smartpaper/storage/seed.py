"""示例数据：管理员、教师、学生各一名，外加一个班级和一份试卷。"""

import logging

from smartpaper.models.enums import UserRole
from smartpaper.schemas import InsertClass, InsertPaper, InsertUser
from smartpaper.security import DEFAULT_ITERATIONS, hash_password
from smartpaper.storage.base import Storage

logger = logging.getLogger(__name__)

SEED_USERS = [
    {
        "username": "admin",
        "password": "admin123",
        "email": "admin@smartpaper.ai",
        "role": UserRole.ADMIN,
        "full_name": "System Administrator",
    },
    {
        "username": "teacher1",
        "password": "teacher123",
        "email": "sarah.johnson@school.edu",
        "role": UserRole.TEACHER,
        "full_name": "Dr. Sarah Johnson",
    },
    {
        "username": "student1",
        "password": "student123",
        "email": "john.doe@student.edu",
        "role": UserRole.STUDENT,
        "full_name": "John Doe",
    },
]

SEED_PAPER_CONTENT = {
    "questions": [
        {
            "type": "mcq",
            "question": "What is 2x + 3 = 7?",
            "options": ["x=2", "x=3", "x=4"],
            "answer": "x=2",
        },
        {"type": "short", "question": "Solve: 3x - 5 = 16", "marks": 5},
    ]
}


def seed_storage(storage: Storage, iterations: int = DEFAULT_ITERATIONS) -> None:
    """写入示例数据。已有 ``admin`` 用户时视为已初始化，直接跳过。"""

    if storage.get_user_by_username("admin") is not None:
        logger.info("Seed data already present, skipping")
        return

    users = {}
    for data in SEED_USERS:
        payload = InsertUser(**{**data, "password": hash_password(data["password"], iterations)})
        users[data["username"]] = storage.create_user(payload)

    teacher = users["teacher1"]
    math_class = storage.create_class(
        InsertClass(name="Mathematics 9-A", teacher_id=teacher.id, subject="Mathematics")
    )
    storage.create_paper(
        InsertPaper(
            title="Algebra Quiz - Chapter 3",
            subject="Mathematics",
            class_id=math_class.id,
            teacher_id=teacher.id,
            content=SEED_PAPER_CONTENT,
            total_marks=25,
        )
    )
    logger.info("Seeded %d users, 1 class and 1 paper", len(users))
