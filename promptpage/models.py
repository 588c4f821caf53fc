"""
Data models and schemas for the requirement-to-webpage pipeline.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PipelineStage(str, Enum):
    """Pipeline stage an error can be attributed to."""
    ANALYSIS = "analysis"
    GENERATION = "generation"
    VALIDATION = "validation"
    GATEWAY = "gateway"


class PipelineStatus(str, Enum):
    """Lifecycle of a single pipeline run."""
    IDLE = "idle"
    ANALYZING = "analyzing"
    GENERATING = "generating"
    VALIDATING = "validating"
    COMPLETE = "complete"
    FAILED = "failed"


class GeneratedArtifactSet(BaseModel):
    """HTML, CSS and JavaScript sources extracted from a generation response.

    An empty string means the block was absent, not intentionally empty.
    """
    model_config = ConfigDict(frozen=True)

    html: str = ""
    css: str = ""
    js: str = ""

    def is_empty(self) -> bool:
        """True when no fenced block was found for any language."""
        return not (self.html or self.css or self.js)


class PipelineResponse(BaseModel):
    """Consolidated result of a fully completed three-stage run."""
    analysis: str
    html: str = ""
    css: str = ""
    js: str = ""
    validation: str

    @classmethod
    def from_stages(
        cls,
        analysis: str,
        artifacts: GeneratedArtifactSet,
        validation: str
    ) -> "PipelineResponse":
        return cls(
            analysis=analysis.strip(),
            html=artifacts.html,
            css=artifacts.css,
            js=artifacts.js,
            validation=validation.strip(),
        )


# HTTP request/response bodies

class ProcessRequest(BaseModel):
    """Body of POST /api/process-request."""
    requirement: str = Field(default="", description="Free-text UI requirement")


class ValidateCodeRequest(BaseModel):
    """Body of POST /api/validate-code."""
    html: str = ""
    css: str = ""
    js: str = ""


class ValidationResponse(BaseModel):
    validation: str


class ErrorResponse(BaseModel):
    """Pipeline failure; resubmitting may succeed."""
    error: str
    troubleshooting: str


class UnavailableResponse(BaseModel):
    """Backend is down; the backend must be fixed before retrying."""
    error: str
    solution: str


class HealthResponse(BaseModel):
    status: str
    version: str
    theme: str = "light"
