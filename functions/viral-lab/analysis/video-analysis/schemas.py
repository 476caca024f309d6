from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from typing import Any, List, Optional

from . import constants


def _require_number(value: Any) -> Any:
    # bool is an int subclass and numeric strings would otherwise be coerced
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a JSON number")
    return value


class ToneScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: StrictStr = Field(..., min_length=1, description="Name of the emotional dimension, e.g. Excitement or Curiosity.")
    score: float = Field(..., ge=0.0, le=1.0, description="Intensity of the tone between 0.0 and 1.0.")

    @field_validator("score", mode="before")
    @classmethod
    def score_must_be_number(cls, value: Any) -> Any:
        return _require_number(value)


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    hook: StrictStr = Field(..., description="Description of the first 3-5 seconds and what grabbed attention.")
    retention: StrictStr = Field(..., description="What kept the viewer watching in the middle of the video.")
    payoff: StrictStr = Field(..., description="How the video ended: CTA, punchline, satisfaction.")
    sentiment: StrictStr = Field(..., description="Overall emotional summary in 1-2 sentences.")
    tones: List[ToneScore] = Field(..., min_length=3, max_length=5, description="Top 3-5 dominant tones with intensity.")
    score: float = Field(..., ge=1, le=10, description="Viral potential score from 1 to 10.")
    improvement_tips: List[StrictStr] = Field(..., min_length=1, description="Concrete suggestions to improve the video.")

    @field_validator("score", mode="before")
    @classmethod
    def score_must_be_number(cls, value: Any) -> Any:
        return _require_number(value)


class ToneLabel(BaseModel):
    """A tone as the remix prompt needs it: only the label is used."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    label: str
    score: Optional[float] = None


class RemixSource(BaseModel):
    """The structural beats a remix is built from. Extra analysis keys are ignored."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    hook: str
    retention: str
    payoff: str
    sentiment: str
    tones: Optional[List[ToneLabel]] = None


class RemixVariables(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    niche: str = Field(..., min_length=1)
    product: str = Field(..., min_length=1)
    audience: str = ""
    # Any free text is accepted, TONE_PRESETS are only suggestions
    tone: str = constants.DEFAULT_TONE


class RemixedScript(BaseModel):
    script: str


class AnalyzeVideoRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_data: str = Field(..., alias="videoData", min_length=1)
    mime_type: Optional[str] = Field(default=None, alias="mimeType")


class RemixScriptRequest(BaseModel):
    analysis: RemixSource
    variables: RemixVariables


class AnalyzeVideoUrlRequest(BaseModel):
    url: str = Field(..., min_length=1)
