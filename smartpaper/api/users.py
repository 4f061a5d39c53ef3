"""用户管理接口。所有响应都会去掉 ``password`` 字段。"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from smartpaper.config import Settings
from smartpaper.dependencies import get_app_settings, get_storage
from smartpaper.errors import not_found
from smartpaper.models.enums import UserRole
from smartpaper.schemas import InsertUser, MessageResponse, PublicUser, UserUpdate
from smartpaper.security import hash_password
from smartpaper.storage import Storage

router = APIRouter()


@router.get("", response_model=List[PublicUser])
def list_users(role: Optional[UserRole] = None, storage: Storage = Depends(get_storage)):
    """获取用户列表，可按角色筛选。"""
    users = storage.get_users_by_role(role) if role else storage.get_all_users()
    return [user.to_public() for user in users]


@router.get("/{user_id}", response_model=PublicUser)
def get_user(user_id: str, storage: Storage = Depends(get_storage)):
    user = storage.get_user(user_id)
    if user is None:
        raise not_found("User")
    return user.to_public()


@router.post("", response_model=PublicUser)
def create_user(
    payload: InsertUser,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    """创建用户。密码在进入存储层之前完成哈希。"""
    hashed = payload.model_copy(
        update={"password": hash_password(payload.password, settings.password_hash_iterations)}
    )
    return storage.create_user(hashed).to_public()


@router.put("/{user_id}", response_model=PublicUser)
def update_user(
    user_id: str,
    payload: UserUpdate,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    changes = payload.changes()
    if "password" in changes:
        changes["password"] = hash_password(changes["password"], settings.password_hash_iterations)
    user = storage.update_user(user_id, changes)
    if user is None:
        raise not_found("User")
    return user.to_public()


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, storage: Storage = Depends(get_storage)):
    """删除用户。其名下的班级、试卷不会被级联删除。"""
    if not storage.delete_user(user_id):
        raise not_found("User")
    return MessageResponse(message="User deleted successfully")
