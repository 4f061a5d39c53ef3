"""学习资料模型。"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from smartpaper.schemas.base import CamelModel, PartialUpdate


class InsertStudyMaterial(CamelModel):
    title: str
    subject: str
    content: Optional[str] = None
    uploaded_by: Optional[str] = None


class StudyMaterialUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"title", "subject"})

    title: Optional[str] = None
    subject: Optional[str] = None
    content: Optional[str] = None
    uploaded_by: Optional[str] = None


class StudyMaterial(InsertStudyMaterial):
    id: str
    created_at: datetime
