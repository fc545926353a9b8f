# util/errors.py
from typing import Optional
from fastapi import HTTPException, status
from util.enums import ErrorMessage


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)

    @classmethod
    def of(cls, kind: ErrorMessage) -> "AppError":
        return cls(kind.value.message, kind.value.http_status)


class EvaluationError(Exception):
    """
    Terminal failure of one evaluation attempt.

    `kind` selects the user-facing message and HTTP status; `detail` is the
    underlying diagnostic (status code, library message) and is appended to
    the message when present.
    """

    kind: ErrorMessage = ErrorMessage.INTERNAL_ERROR

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        base = self.kind.value.message
        return f"{base} ({self.detail})" if self.detail else base

    @property
    def http_status(self) -> int:
        return self.kind.value.http_status


class EmptyInput(EvaluationError):
    kind = ErrorMessage.EMPTY_INPUT


class NoReadableText(EmptyInput):
    # blank after extraction (empty page, PDF without a text layer)
    kind = ErrorMessage.NO_READABLE_TEXT


class UnsupportedFileType(EvaluationError):
    kind = ErrorMessage.UNSUPPORTED_FILE_TYPE


class ExtractionFailed(EvaluationError):
    kind = ErrorMessage.EXTRACTION_FAILED


class FetchFailed(EvaluationError):
    kind = ErrorMessage.FETCH_FAILED


class ApiError(EvaluationError):
    kind = ErrorMessage.API_ERROR


class MalformedResponse(EvaluationError):
    kind = ErrorMessage.MALFORMED_RESPONSE


class FileTooLarge(EvaluationError):
    kind = ErrorMessage.FILE_TOO_LARGE
