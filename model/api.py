from pydantic import BaseModel
from model.claim import VerdictCategory
from model.state import EvaluationState


class EvaluateTextRequest(BaseModel):
    # Blank text is accepted here and rejected by the pipeline as EmptyInput,
    # so it lands in the published state like every other failure.
    text: str


class EvaluateUrlRequest(BaseModel):
    url: str


class EvaluationResponse(EvaluationState):
    category: VerdictCategory | None = None

    @classmethod
    def from_state(cls, state: EvaluationState) -> "EvaluationResponse":
        return cls(
            **state.model_dump(),
            category=state.analysis.category if state.analysis else None,
        )


class HealthResponse(BaseModel):
    ok: bool
