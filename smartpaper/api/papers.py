"""试卷接口。

``classId`` / ``teacherId`` 不校验是否存在，引用一个不存在的班级也能创建成功。
"""

from typing import List

from fastapi import APIRouter, Depends

from smartpaper.dependencies import get_storage
from smartpaper.errors import not_found
from smartpaper.schemas import InsertPaper, MessageResponse, Paper, PaperUpdate
from smartpaper.storage import Storage

router = APIRouter()


@router.get("", response_model=List[Paper])
def list_papers(storage: Storage = Depends(get_storage)):
    return storage.get_all_papers()


@router.get("/teacher/{teacher_id}", response_model=List[Paper])
def list_papers_by_teacher(teacher_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_papers_by_teacher(teacher_id)


@router.get("/class/{class_id}", response_model=List[Paper])
def list_papers_by_class(class_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_papers_by_class(class_id)


@router.get("/{paper_id}", response_model=Paper)
def get_paper(paper_id: str, storage: Storage = Depends(get_storage)):
    paper = storage.get_paper(paper_id)
    if paper is None:
        raise not_found("Paper")
    return paper


@router.post("", response_model=Paper)
def create_paper(payload: InsertPaper, storage: Storage = Depends(get_storage)):
    return storage.create_paper(payload)


@router.put("/{paper_id}", response_model=Paper)
def update_paper(paper_id: str, payload: PaperUpdate, storage: Storage = Depends(get_storage)):
    paper = storage.update_paper(paper_id, payload.changes())
    if paper is None:
        raise not_found("Paper")
    return paper


@router.delete("/{paper_id}", response_model=MessageResponse)
def delete_paper(paper_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_paper(paper_id):
        raise not_found("Paper")
    return MessageResponse(message="Paper deleted successfully")
