# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(
        default="http://localhost:5173", validation_alias="ALLOWED_ORIGIN"
    )
    MAX_FILE_MB: int = Field(default=10, validation_alias="MAX_FILE_MB")
    MAX_CONTENT_CHARS: int = Field(default=8000, validation_alias="MAX_CONTENT_CHARS")

    # Gemini Settings
    GEMINI_API_KEY: str = Field(default="", validation_alias="GEMINI_API_KEY")
    GEMINI_API_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        validation_alias="GEMINI_API_URL",
    )
    GEMINI_MODEL: str = Field(default="gemini-2.0-flash", validation_alias="GEMINI_MODEL")
    MODEL_TIMEOUT_SECONDS: float = Field(
        default=60.0, validation_alias="MODEL_TIMEOUT_SECONDS"
    )

    # Pass-through proxy used to read arbitrary pages in URL mode
    CONTENT_PROXY_URL: str = Field(
        default="https://api.allorigins.win/raw", validation_alias="CONTENT_PROXY_URL"
    )
    FETCH_TIMEOUT_SECONDS: float = Field(
        default=20.0, validation_alias="FETCH_TIMEOUT_SECONDS"
    )

    # Logging knobs
    LOGGER_NAME: str = "health-claim-checker"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    # Prompts
    ANALYST_PROMPT: str = (
        "You are an expert in medical science and health communication.\n"
    )

    TEXT_TASK_PROMPT: str = (
        "Your task is to analyze the following health claim directly and respond ONLY "
        "with a valid JSON object.\n"
    )

    URL_TASK_PROMPT: str = (
        "The content below is the raw markup of a web page. Ignore navigation menus, ads, "
        "cookie banners, comments and footers; extract the main article and analyze the "
        "health claim(s) it makes. Respond ONLY with a valid JSON object.\n"
    )

    RESPONSE_FORMAT_PROMPT: str = (
        'The JSON object must have exactly two keys: "verdict" and "explanation".\n'
        '- The "verdict" must be one of three strings: "Fact", "Myth", or "Partially True".\n'
        '- The "explanation" should be a clear, concise, and evidence-based analysis for a '
        "general audience.\n"
        "- No code fences and no prose outside the JSON object.\n"
        "\n"
        "Example Response Format (formatting guide only, not data):\n"
        "{\n"
        '  "verdict": "Myth",\n'
        '  "explanation": "This is a common misconception. The body uses all parts of the '
        "brain, just at different times. Brain scans clearly show activity throughout the "
        'entire brain, even during rest."\n'
        "}\n"
    )


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
