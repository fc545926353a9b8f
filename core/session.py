# core/session.py
import logging
from typing import Optional
from model.claim import Analysis
from model.state import EvaluationState, RequestStatus
from util.enums import ErrorMessage, InputMode
from util.errors import AppError

logger = logging.getLogger(__name__)


class EvaluationSession:
    """
    Request state machine owned by the UI layer.

        idle | succeeded | failed --begin--> loading
        loading --succeed--> succeeded
        loading --fail-----> failed

    Transitions are plain synchronous methods: on a single event loop no other
    coroutine can interleave between the check and the write.
    """

    def __init__(self) -> None:
        self._status: RequestStatus = "idle"
        self._mode: InputMode = InputMode.TEXT
        self._analysis: Optional[Analysis] = None
        self._error: Optional[str] = None

    @property
    def status(self) -> RequestStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._status == "loading"

    def select_mode(self, mode: InputMode) -> None:
        if not self.is_loading:
            self._mode = mode

    def begin(self, mode: InputMode) -> None:
        if self.is_loading:
            logger.warning("session.begin.rejected reason=in_flight")
            raise AppError.of(ErrorMessage.EVALUATION_IN_PROGRESS)
        self._status = "loading"
        self._mode = mode
        self._analysis = None
        self._error = None
        logger.debug("session.loading mode=%s", mode.value)

    def succeed(self, analysis: Analysis) -> None:
        self._require_loading("succeed")
        self._status = "succeeded"
        self._analysis = analysis
        self._error = None

    def fail(self, message: str) -> None:
        self._require_loading("fail")
        self._status = "failed"
        self._analysis = None
        self._error = message

    def snapshot(self) -> EvaluationState:
        return EvaluationState(
            status=self._status,
            mode=self._mode,
            analysis=self._analysis.model_copy() if self._analysis else None,
            error=self._error,
        )

    def _require_loading(self, transition: str) -> None:
        if not self.is_loading:
            raise RuntimeError(f"cannot {transition} from state {self._status!r}")


_session: Optional[EvaluationSession] = None


def get_session() -> EvaluationSession:
    global _session
    if _session is None:
        _session = EvaluationSession()
    return _session
