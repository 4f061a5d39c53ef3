"""学习资料接口。"""

from typing import List

from fastapi import APIRouter, Depends

from smartpaper.dependencies import get_storage
from smartpaper.errors import not_found
from smartpaper.schemas import (
    InsertStudyMaterial,
    MessageResponse,
    StudyMaterial,
    StudyMaterialUpdate,
)
from smartpaper.storage import Storage

router = APIRouter()


@router.get("", response_model=List[StudyMaterial])
def list_study_materials(storage: Storage = Depends(get_storage)):
    return storage.get_all_study_materials()


@router.get("/subject/{subject}", response_model=List[StudyMaterial])
def list_study_materials_by_subject(subject: str, storage: Storage = Depends(get_storage)):
    return storage.get_study_materials_by_subject(subject)


@router.get("/{material_id}", response_model=StudyMaterial)
def get_study_material(material_id: str, storage: Storage = Depends(get_storage)):
    material = storage.get_study_material(material_id)
    if material is None:
        raise not_found("Study material")
    return material


@router.post("", response_model=StudyMaterial)
def create_study_material(payload: InsertStudyMaterial, storage: Storage = Depends(get_storage)):
    return storage.create_study_material(payload)


@router.put("/{material_id}", response_model=StudyMaterial)
def update_study_material(
    material_id: str, payload: StudyMaterialUpdate, storage: Storage = Depends(get_storage)
):
    material = storage.update_study_material(material_id, payload.changes())
    if material is None:
        raise not_found("Study material")
    return material


@router.delete("/{material_id}", response_model=MessageResponse)
def delete_study_material(material_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_study_material(material_id):
        raise not_found("Study material")
    return MessageResponse(message="Study material deleted successfully")
