# controller/controller_dependencies.py
from fastapi import Depends, Request
from config.settings import settings
from core.session import EvaluationSession, get_session
from service.claim_evaluation_service import ClaimEvaluationService
from util.enums import ErrorMessage
from util.errors import AppError


def get_claim_evaluation_service(
    session: EvaluationSession = Depends(get_session),
) -> ClaimEvaluationService:
    return ClaimEvaluationService(session)


async def enforce_max_upload_size(request: Request) -> None:
    # Fast pre-check via Content-Length if present; the service applies the
    # hard cap while reading the file itself.
    max_bytes = settings.MAX_FILE_MB * 1024 * 1024
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > max_bytes:
        raise AppError(
            f"{ErrorMessage.FILE_TOO_LARGE.value.message} (max {settings.MAX_FILE_MB} MB)",
            ErrorMessage.FILE_TOO_LARGE.value.http_status,
        )
