from typing import Literal, Optional
from pydantic import BaseModel
from model.claim import Analysis
from util.enums import InputMode

RequestStatus = Literal[
    "idle",
    "loading",
    "succeeded",
    "failed",
]


class EvaluationState(BaseModel):
    """
    Snapshot of the request state machine.
      idle      -> analysis None, error None
      loading   -> analysis None, error None
      succeeded -> analysis set
      failed    -> error set, analysis None
    """

    status: RequestStatus = "idle"
    mode: InputMode = InputMode.TEXT
    analysis: Optional[Analysis] = None
    error: Optional[str] = None
