"""REST API 路由包入口。"""

from fastapi import APIRouter

from smartpaper.api import (
    admin,
    auth,
    classes,
    grades,
    papers,
    study_materials,
    submissions,
    users,
)

router = APIRouter(prefix="/api")

# 注册子路由
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(classes.router, prefix="/classes", tags=["classes"])
router.include_router(papers.router, prefix="/papers", tags=["papers"])
router.include_router(submissions.router, prefix="/submissions", tags=["submissions"])
router.include_router(grades.router, prefix="/grades", tags=["grades"])
router.include_router(study_materials.router, prefix="/study-materials", tags=["study-materials"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
