"""班级接口。"""

from typing import List

from fastapi import APIRouter, Depends

from smartpaper.dependencies import get_storage
from smartpaper.errors import not_found
from smartpaper.schemas import Class, ClassUpdate, InsertClass, MessageResponse
from smartpaper.storage import Storage

router = APIRouter()


@router.get("", response_model=List[Class])
def list_classes(storage: Storage = Depends(get_storage)):
    return storage.get_all_classes()


@router.get("/teacher/{teacher_id}", response_model=List[Class])
def list_classes_by_teacher(teacher_id: str, storage: Storage = Depends(get_storage)):
    """教师名下的班级；未知教师返回空列表。"""
    return storage.get_classes_by_teacher(teacher_id)


@router.get("/{class_id}", response_model=Class)
def get_class(class_id: str, storage: Storage = Depends(get_storage)):
    found = storage.get_class(class_id)
    if found is None:
        raise not_found("Class")
    return found


@router.post("", response_model=Class)
def create_class(payload: InsertClass, storage: Storage = Depends(get_storage)):
    return storage.create_class(payload)


@router.put("/{class_id}", response_model=Class)
def update_class(class_id: str, payload: ClassUpdate, storage: Storage = Depends(get_storage)):
    updated = storage.update_class(class_id, payload.changes())
    if updated is None:
        raise not_found("Class")
    return updated


@router.delete("/{class_id}", response_model=MessageResponse)
def delete_class(class_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_class(class_id):
        raise not_found("Class")
    return MessageResponse(message="Class deleted successfully")
