# core/prompts.py
from config.settings import settings
from core.entities import ExtractedContent
from util.enums import InputMode


def build_prompt(content: ExtractedContent) -> str:
    """
    Single user message for the model. URL content gets the "skip page chrome"
    instruction; text and documents are analyzed directly. The content is
    embedded verbatim (it is already truncated upstream).
    """
    if content.mode == InputMode.URL:
        task = settings.URL_TASK_PROMPT
        label = "Web Page Content to Analyze"
    elif content.mode == InputMode.DOCUMENT:
        task = settings.TEXT_TASK_PROMPT
        label = "Document Content to Analyze"
    else:
        task = settings.TEXT_TASK_PROMPT
        label = "Health Claim to Analyze"
    return (
        f"{settings.ANALYST_PROMPT}{task}{settings.RESPONSE_FORMAT_PROMPT}\n"
        f'{label}: """\n{content.text}\n"""\n'
    )
