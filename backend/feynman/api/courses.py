"""Course CRUD + lecture ingestion API endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import BaseModel

from feynman.api.errors import not_found, raise_for_failure
from feynman.api.serializers import serialize_course, serialize_lecture
from feynman.application.course_app_service import CourseAppService
from feynman.application.lecture_app_service import LectureAppService
from feynman.container import get_course_app_service, get_lecture_app_service
from feynman.domain.common.result import ErrorCode

router = APIRouter(tags=["courses"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class CourseBody(BaseModel):
    name: str


class LectureTextBody(BaseModel):
    name: str
    text: str


# ------------------------------------------------------------------
# Health check
# ------------------------------------------------------------------
@router.get("/health")
def health():
    return {"status": "ok"}


# ------------------------------------------------------------------
# Course endpoints
# ------------------------------------------------------------------
@router.get("/courses/")
def list_courses(svc: CourseAppService = Depends(get_course_app_service)):
    return [serialize_course(c) for c in svc.list_courses()]


@router.post("/courses/", status_code=status.HTTP_201_CREATED)
def create_course(body: CourseBody, svc: CourseAppService = Depends(get_course_app_service)):
    result = svc.create_course(body.name)
    if not result.is_success:
        raise_for_failure(result)
    return serialize_course(result.value)


@router.get("/courses/{course_id}")
def get_course(course_id: str, svc: CourseAppService = Depends(get_course_app_service)):
    course = svc.get_course(course_id)
    if not course:
        not_found(ErrorCode.COURSE_NOT_FOUND, f"Course '{course_id}' not found.")
    return serialize_course(course)


@router.delete("/courses/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(course_id: str, svc: CourseAppService = Depends(get_course_app_service)):
    result = svc.delete_course(course_id)
    if not result.is_success:
        raise_for_failure(result)


# ------------------------------------------------------------------
# Lecture ingestion
# ------------------------------------------------------------------
@router.get("/courses/{course_id}/lectures")
def list_lectures(course_id: str, svc: LectureAppService = Depends(get_lecture_app_service)):
    result = svc.list_lectures(course_id)
    if not result.is_success:
        raise_for_failure(result)
    return [serialize_lecture(lecture, detail=False) for lecture in result.value]


@router.post("/courses/{course_id}/lectures", status_code=status.HTTP_201_CREATED)
def ingest_lecture(
    course_id: str,
    body: LectureTextBody,
    svc: LectureAppService = Depends(get_lecture_app_service),
):
    """Store a lecture and its concepts. Succeeds with no concepts if decomposition fails."""
    result = svc.ingest_lecture(course_id, body.name, body.text)
    if not result.is_success:
        raise_for_failure(result)
    return serialize_lecture(result.value)


@router.post("/courses/{course_id}/lectures/audio", status_code=status.HTTP_201_CREATED)
def ingest_audio_lecture(
    course_id: str,
    name: str = Form(...),
    audio: UploadFile = File(...),
    svc: LectureAppService = Depends(get_lecture_app_service),
):
    result = svc.ingest_audio_lecture(course_id, name, audio.file.read(), audio.filename or "lecture.webm")
    if not result.is_success:
        raise_for_failure(result)
    return serialize_lecture(result.value)
