"""FastAPI 依赖注入工具。"""

from fastapi import Request

from smartpaper.config import Settings
from smartpaper.storage import Storage


def get_storage(request: Request) -> Storage:
    """当前应用持有的存储实例，由 ``create_app`` 在启动时放到 ``app.state``。"""

    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
