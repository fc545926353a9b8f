from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Verdict(str, Enum):
    fact = "Fact"
    myth = "Myth"
    partially_true = "Partially True"


class VerdictCategory(str, Enum):
    """Display bucket; anything the model invents outside Verdict is `unclassified`."""

    fact = "fact"
    myth = "myth"
    partially_true = "partially_true"
    unclassified = "unclassified"


_CATEGORY_BY_VERDICT = {
    Verdict.fact: VerdictCategory.fact,
    Verdict.myth: VerdictCategory.myth,
    Verdict.partially_true: VerdictCategory.partially_true,
}


class Analysis(BaseModel):
    # Kept as the model's literal string; membership is checked via `known_verdict`.
    verdict: str = Field(min_length=1)
    explanation: str

    @property
    def known_verdict(self) -> Optional[Verdict]:
        try:
            return Verdict(self.verdict)
        except ValueError:
            return None

    @property
    def category(self) -> VerdictCategory:
        known = self.known_verdict
        return _CATEGORY_BY_VERDICT[known] if known else VerdictCategory.unclassified
