"""答卷提交接口。"""

from typing import List

from fastapi import APIRouter, Depends

from smartpaper.dependencies import get_storage
from smartpaper.errors import not_found
from smartpaper.schemas import InsertSubmission, Submission, SubmissionUpdate
from smartpaper.storage import Storage

router = APIRouter()


@router.get("/student/{student_id}", response_model=List[Submission])
def list_submissions_by_student(student_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_submissions_by_student(student_id)


@router.get("/paper/{paper_id}", response_model=List[Submission])
def list_submissions_by_paper(paper_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_submissions_by_paper(paper_id)


@router.get("/{submission_id}", response_model=Submission)
def get_submission(submission_id: str, storage: Storage = Depends(get_storage)):
    submission = storage.get_submission(submission_id)
    if submission is None:
        raise not_found("Submission")
    return submission


@router.post("", response_model=Submission)
def create_submission(payload: InsertSubmission, storage: Storage = Depends(get_storage)):
    """提交答卷，新提交一律为未评分状态。"""
    return storage.create_submission(payload)


@router.put("/{submission_id}", response_model=Submission)
def update_submission(
    submission_id: str, payload: SubmissionUpdate, storage: Storage = Depends(get_storage)
):
    submission = storage.update_submission(submission_id, payload.changes())
    if submission is None:
        raise not_found("Submission")
    return submission


@router.post("/{submission_id}/mark-graded", response_model=Submission)
def mark_submission_graded(submission_id: str, storage: Storage = Depends(get_storage)):
    """显式把提交标记为已评分。创建成绩不会自动触发这一步。"""
    submission = storage.mark_submission_graded(submission_id)
    if submission is None:
        raise not_found("Submission")
    return submission
