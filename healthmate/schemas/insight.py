from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class StructuredSummary(BaseModel):
    """Fields the model is asked to return for the English analysis."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    abnormal_values: list[str] = Field(default_factory=list, alias="abnormalValues")
    suggestions: list[str] = Field(default_factory=list)
    questions_for_doctor: list[str] = Field(default_factory=list, alias="questionsForDoctor")

    @field_validator("summary", mode="before")
    @classmethod
    def summary_as_text(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("abnormal_values", "suggestions", "questions_for_doctor", mode="before")
    @classmethod
    def list_of_text(cls, v):
        # Models sometimes answer with a single string or null instead of a list
        if not isinstance(v, list):
            return []
        return [item if isinstance(item, str) else str(item) for item in v if item is not None]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileCreate(_CamelModel):
    filename: str
    file_url: str
    file_type: str = ""

    @field_validator("filename", "file_url", "file_type")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return (v or "").strip()


class FileRead(_CamelModel):
    id: int
    user: int
    filename: str
    file_url: str
    file_type: str
    uploaded_at: datetime


class InsightRead(_CamelModel):
    id: int
    user: int
    file: int
    summary_english: str
    summary_roman_urdu: str
    highlights: list[str] = []
    questions_for_doctor: list[str] = []
    suggestions: list[str] = []
    created_at: datetime


class InsightWithFile(InsightRead):
    """Insight with the analysed file attached (report page shows both side by side)."""

    file: FileRead | None = None


class AnalyzeResponse(BaseModel):
    message: str = "AI analysis completed"
    insight: InsightRead
