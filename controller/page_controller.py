# controller/page_controller.py
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse
from core.page_renderer import FormValues, render_page
from core.session import EvaluationSession, get_session
from service.claim_evaluation_service import ClaimEvaluationService
from util.constants import InternalURIs
from util.enums import InputMode
from util.errors import AppError
from controller.controller_dependencies import (
    enforce_max_upload_size,
    get_claim_evaluation_service,
)

page_router = APIRouter(tags=["page"])


@page_router.get(InternalURIs.ROOT, response_class=HTMLResponse)
async def show_form(
    mode: Optional[InputMode] = None,
    session: EvaluationSession = Depends(get_session),
) -> HTMLResponse:
    if mode is not None:
        session.select_mode(mode)
    return HTMLResponse(render_page(session.snapshot()))


@page_router.post(InternalURIs.ROOT, response_class=HTMLResponse)
async def submit_form(
    request: Request,
    mode: InputMode = Form(InputMode.TEXT),
    claim_text: str = Form(""),
    url: str = Form(""),
    file: Optional[UploadFile] = File(None),
    service: ClaimEvaluationService = Depends(get_claim_evaluation_service),
) -> HTMLResponse:
    values = FormValues(claim_text=claim_text, url=url)
    # Refusals (413 too large, 409 already running) go back to the browser as
    # the page with a banner, not as the JSON error envelope.
    try:
        await enforce_max_upload_size(request)
        # Only the input of the selected mode is used; the others are ignored.
        if mode == InputMode.URL:
            state, error = await service.evaluate_url(url)
        elif mode == InputMode.DOCUMENT:
            state, error = await service.evaluate_upload(file)
        else:
            state, error = await service.evaluate_text(claim_text)
    except AppError as e:
        page = render_page(service.session.snapshot(), values, notice=str(e.detail))
        return HTMLResponse(page, status_code=e.status_code)
    code = error.value.http_status if error else 200
    return HTMLResponse(render_page(state, values), status_code=code)
