"""成绩接口。

创建成绩不会修改对应提交的 ``isGraded``，需要另行调用
``POST /api/submissions/{id}/mark-graded``。
"""

from typing import List

from fastapi import APIRouter, Depends

from smartpaper.dependencies import get_storage
from smartpaper.errors import not_found
from smartpaper.schemas import Grade, GradeUpdate, InsertGrade
from smartpaper.storage import Storage

router = APIRouter()


@router.get("/student/{student_id}", response_model=List[Grade])
def list_grades_by_student(student_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_grades_by_student(student_id)


@router.get("/paper/{paper_id}", response_model=List[Grade])
def list_grades_by_paper(paper_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_grades_by_paper(paper_id)


@router.get("/submission/{submission_id}", response_model=List[Grade])
def list_grades_by_submission(submission_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_grades_by_submission(submission_id)


@router.get("/{grade_id}", response_model=Grade)
def get_grade(grade_id: str, storage: Storage = Depends(get_storage)):
    grade = storage.get_grade(grade_id)
    if grade is None:
        raise not_found("Grade")
    return grade


@router.post("", response_model=Grade)
def create_grade(payload: InsertGrade, storage: Storage = Depends(get_storage)):
    return storage.create_grade(payload)


@router.put("/{grade_id}", response_model=Grade)
def update_grade(grade_id: str, payload: GradeUpdate, storage: Storage = Depends(get_storage)):
    grade = storage.update_grade(grade_id, payload.changes())
    if grade is None:
        raise not_found("Grade")
    return grade
