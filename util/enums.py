# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class InputMode(str, Enum):
    TEXT = "text"
    URL = "url"
    DOCUMENT = "document"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    EMPTY_INPUT = ErrorInfo(
        "Please enter a health claim to analyze.",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    NO_READABLE_TEXT = ErrorInfo(
        "No readable text was found in the provided content.",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    UNSUPPORTED_FILE_TYPE = ErrorInfo(
        "Unsupported file type. Please upload a PDF or DOCX document.",
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    )
    EXTRACTION_FAILED = ErrorInfo(
        "Could not read text from the uploaded document.",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    FETCH_FAILED = ErrorInfo(
        "Could not fetch content from the provided URL.",
        status.HTTP_502_BAD_GATEWAY,
    )
    API_ERROR = ErrorInfo(
        "The analysis service returned an error. Please try again later.",
        status.HTTP_502_BAD_GATEWAY,
    )
    MALFORMED_RESPONSE = ErrorInfo(
        "Failed to parse the AI's response.",
        status.HTTP_502_BAD_GATEWAY,
    )
    EVALUATION_IN_PROGRESS = ErrorInfo(
        "An analysis is already in progress.", status.HTTP_409_CONFLICT
    )
    FILE_TOO_LARGE = ErrorInfo(
        "File too large.", status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    )
    INTERNAL_ERROR = ErrorInfo(
        "Sorry, something went wrong while analyzing the claim. Please try again later.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
