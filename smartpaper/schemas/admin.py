"""管理后台统计与通用消息模型。"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from smartpaper.schemas.base import CamelModel


class AdminStats(CamelModel):
    """管理后台统计。

    ``papersGenerated`` 与 ``submissionsGraded`` 尚未实现统计，固定返回 ``null``，
    前端应显示为“暂无数据”，而不是 0。
    """

    total_users: int
    active_teachers: int
    total_students: int
    total_classes: int
    papers_generated: Optional[int] = Field(default=None, description="尚未统计")
    submissions_graded: Optional[int] = Field(default=None, description="尚未统计")


class MessageResponse(CamelModel):
    message: str
