# controller/claim_controller.py
from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse
from core.session import EvaluationSession, get_session
from model.api import EvaluateTextRequest, EvaluateUrlRequest, EvaluationResponse
from service.claim_evaluation_service import ClaimEvaluationService, Outcome
from util.constants import InternalURIs
from controller.controller_dependencies import (
    enforce_max_upload_size,
    get_claim_evaluation_service,
)

claim_router = APIRouter(tags=["claims"])


def _respond(outcome: Outcome) -> JSONResponse:
    state, error = outcome
    body = EvaluationResponse.from_state(state).model_dump(mode="json")
    code = error.value.http_status if error else status.HTTP_200_OK
    return JSONResponse(status_code=code, content=body)


@claim_router.post(InternalURIs.EVALUATE_TEXT, response_model=EvaluationResponse)
async def evaluate_text(
    payload: EvaluateTextRequest,
    service: ClaimEvaluationService = Depends(get_claim_evaluation_service),
):
    return _respond(await service.evaluate_text(payload.text))


@claim_router.post(InternalURIs.EVALUATE_URL, response_model=EvaluationResponse)
async def evaluate_url(
    payload: EvaluateUrlRequest,
    service: ClaimEvaluationService = Depends(get_claim_evaluation_service),
):
    return _respond(await service.evaluate_url(payload.url))


@claim_router.post(
    InternalURIs.EVALUATE_DOCUMENT,
    response_model=EvaluationResponse,
    dependencies=[Depends(enforce_max_upload_size)],
)
async def evaluate_document(
    file: Optional[UploadFile] = File(None),
    service: ClaimEvaluationService = Depends(get_claim_evaluation_service),
):
    return _respond(await service.evaluate_upload(file))


@claim_router.get(InternalURIs.STATE, response_model=EvaluationResponse)
async def get_state(session: EvaluationSession = Depends(get_session)) -> EvaluationResponse:
    return EvaluationResponse.from_state(session.snapshot())
