from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Industry = Literal["TI", "SAUDE", "VENDAS", "ADMINISTRATIVO", "ENGENHARIA", "GERAL"]
ExperienceLevel = Literal["ESTAGIO", "JUNIOR", "PLENO", "SENIOR"]

INDUSTRIES: tuple[str, ...] = ("TI", "SAUDE", "VENDAS", "ADMINISTRATIVO", "ENGENHARIA", "GERAL")
EXPERIENCE_LEVELS: tuple[str, ...] = ("ESTAGIO", "JUNIOR", "PLENO", "SENIOR")

MIN_RESUME_CHARS = 500
MAX_RESUME_CHARS = 10000
MAX_JOB_DESCRIPTION_CHARS = 1000


def _upper_or_default(value: Any, default: str) -> Any:
    if value is None:
        return default
    if isinstance(value, str):
        normalized = value.strip().upper()
        return normalized or default
    return value


class AnalysisOptions(BaseModel):
    """Everything about an analysis except the résumé text itself."""

    model_config = ConfigDict(populate_by_name=True)

    industry: Industry = "GERAL"
    experience_level: ExperienceLevel = Field(default="PLENO", alias="experienceLevel")
    job_description: str | None = Field(
        default=None,
        alias="jobDescription",
        max_length=MAX_JOB_DESCRIPTION_CHARS,
    )

    @field_validator("industry", mode="before")
    @classmethod
    def _normalize_industry(cls, value: Any) -> Any:
        return _upper_or_default(value, "GERAL")

    @field_validator("experience_level", mode="before")
    @classmethod
    def _normalize_experience_level(cls, value: Any) -> Any:
        return _upper_or_default(value, "PLENO")


class AnalysisRequest(AnalysisOptions):
    text: str = Field(min_length=MIN_RESUME_CHARS, max_length=MAX_RESUME_CHARS)


class StructuredAnalysis(BaseModel):
    ats: str
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    formatting: str = ""


class ImprovementView(BaseModel):
    heading: str
    body: str = ""


class AnalysisView(BaseModel):
    score: int = Field(ge=0)
    ats: str
    strengths: list[str] = Field(default_factory=list)
    improvements: list[ImprovementView] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    formatting: str = ""


class AnalysisMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    processing_time: int = Field(ge=0, alias="processingTime")
    text_length: int = Field(ge=0, alias="textLength")
    industry: Industry
    experience_level: ExperienceLevel = Field(alias="experienceLevel")


class AnalysisResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    raw_analysis: str = Field(alias="rawAnalysis")
    structured_analysis: StructuredAnalysis = Field(alias="structuredAnalysis")
    display: AnalysisView
    metadata: AnalysisMetadata


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Any = None


class ExtractTextResponse(BaseModel):
    filename: str
    text: str
    characters: int = Field(ge=0)
    pages: int = Field(ge=0)
