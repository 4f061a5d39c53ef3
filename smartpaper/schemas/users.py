"""用户与认证相关模型。"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field

from smartpaper.models.enums import UserRole
from smartpaper.schemas.base import CamelModel, PartialUpdate


class InsertUser(CamelModel):
    """创建用户的入参。``id`` 与 ``createdAt`` 由服务端生成。"""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    email: str = Field(min_length=1)
    role: UserRole
    full_name: str


class UserUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"username", "password", "email", "role", "full_name"}
    )

    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=1)
    role: Optional[UserRole] = None
    full_name: Optional[str] = None


class PublicUser(CamelModel):
    """对外返回的用户，不含密码字段。"""

    id: str
    username: str
    email: str
    role: UserRole
    full_name: str
    created_at: datetime


class User(PublicUser):
    """存储层中的完整用户记录。``password`` 保存的是哈希值。"""

    password: str

    def to_public(self) -> PublicUser:
        return PublicUser.model_validate(self.model_dump(exclude={"password"}))


class LoginRequest(CamelModel):
    username: str
    password: str


class LoginResponse(CamelModel):
    user: PublicUser
