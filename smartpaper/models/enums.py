"""共享枚举定义。"""

import enum


class UserRole(str, enum.Enum):
    """用户角色枚举。"""
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
