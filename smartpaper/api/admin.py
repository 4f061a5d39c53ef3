"""管理后台统计接口。"""

from fastapi import APIRouter, Depends

from smartpaper.dependencies import get_storage
from smartpaper.models.enums import UserRole
from smartpaper.schemas import AdminStats
from smartpaper.storage import Storage

router = APIRouter()


def compute_admin_stats(storage: Storage) -> AdminStats:
    """每次请求都全量扫描用户与班级，不做缓存。

    试卷数与已评分提交数尚未统计，保持为 ``None``。
    """
    users = storage.get_all_users()
    classes = storage.get_all_classes()
    return AdminStats(
        total_users=len(users),
        active_teachers=sum(1 for u in users if u.role == UserRole.TEACHER),
        total_students=sum(1 for u in users if u.role == UserRole.STUDENT),
        total_classes=len(classes),
        papers_generated=None,
        submissions_graded=None,
    )


@router.get("/stats", response_model=AdminStats)
def get_admin_stats(storage: Storage = Depends(get_storage)) -> AdminStats:
    return compute_admin_stats(storage)
