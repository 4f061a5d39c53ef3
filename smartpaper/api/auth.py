"""登录接口。"""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status

from smartpaper.config import Settings
from smartpaper.dependencies import get_app_settings, get_storage
from smartpaper.schemas import LoginRequest, LoginResponse
from smartpaper.security import hash_password, verify_password
from smartpaper.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache
def _dummy_hash(iterations: int) -> str:
    return hash_password("not-a-real-password", iterations=iterations)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> LoginResponse:
    """校验用户名与密码，成功时返回不含密码的用户信息。

    用户不存在时同样做一次哈希校验，使两种失败的耗时一致。
    """
    user = storage.get_user_by_username(payload.username)
    if user is None:
        verify_password(payload.password, _dummy_hash(settings.password_hash_iterations))
        verified = False
    else:
        verified = verify_password(payload.password, user.password)
    if not verified:
        logger.info("Failed login attempt for %r", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return LoginResponse(user=user.to_public())
