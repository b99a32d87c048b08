from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.core.schemas import ApiResponse, success_response
from app.db.session import get_db
from app.progress.dependencies import (
    ensure_user_exists,
    get_progress_service,
    require_lesson,
    require_query_user,
)
from app.progress.schemas import (
    CompleteLessonRequest,
    LessonProgressResponse,
    StartLessonRequest,
    SubjectProgressBreakdown,
)
from app.progress.services import ProgressService

router = APIRouter()


@router.post(
    "/progress/lessons/{lesson_id}/start",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_lesson)],
)
async def start_lesson(
    lesson_id: UUID,
    request: StartLessonRequest,
    db: Session = Depends(get_db),
    service: ProgressService = Depends(get_progress_service),
) -> ApiResponse[None]:
    """Mark a lesson as started for a user."""
    ensure_user_exists(request.user_id, db)
    service.start_lesson(request.user_id, lesson_id)
    return success_response(message="Lesson started")


@router.post(
    "/progress/lessons/{lesson_id}/complete",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_lesson)],
)
async def complete_lesson(
    lesson_id: UUID,
    request: CompleteLessonRequest,
    db: Session = Depends(get_db),
    service: ProgressService = Depends(get_progress_service),
) -> ApiResponse[None]:
    """Mark a lesson as completed and refresh topic and subject totals."""
    ensure_user_exists(request.user_id, db)
    service.complete_lesson(request.user_id, lesson_id, request.quiz_score)
    return success_response(message="Lesson completed")


@router.get("/progress/dashboard", response_model=ApiResponse[dict[str, int]])
async def get_dashboard_progress(
    user: User = Depends(require_query_user),
    service: ProgressService = Depends(get_progress_service),
) -> ApiResponse[dict[str, int]]:
    """Get percent complete per subject for the dashboard."""
    return success_response(data=service.get_dashboard_progress(user.id))


@router.get("/progress/lessons/{lesson_id}", response_model=ApiResponse[LessonProgressResponse])
async def get_lesson_progress(
    lesson_id: UUID,
    user: User = Depends(require_query_user),
    service: ProgressService = Depends(get_progress_service),
) -> ApiResponse[LessonProgressResponse]:
    """Get a user's progress record for one lesson."""
    progress = service.get_lesson_progress(user.id, lesson_id)
    return success_response(data=LessonProgressResponse.model_validate(progress))


@router.get(
    "/progress/subjects/{course_id}", response_model=ApiResponse[SubjectProgressBreakdown]
)
async def get_subject_progress(
    course_id: UUID,
    user: User = Depends(require_query_user),
    service: ProgressService = Depends(get_progress_service),
) -> ApiResponse[SubjectProgressBreakdown]:
    """Get a subject's percent complete with its per-topic breakdown."""
    breakdown = service.get_subject_breakdown(user.id, course_id)
    return success_response(data=SubjectProgressBreakdown(**breakdown))
