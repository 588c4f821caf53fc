"""
Error taxonomy for the generation pipeline.

GatewayError is raised by the inference gateway. Everything the orchestrator
raises derives from PipelineError and carries the stage it is attributed to,
so callers can tell a down backend apart from a failed stage.
"""

from typing import Optional

from promptpage.models import PipelineStage


class GatewayError(Exception):
    """The inference backend could not produce a completion."""

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.status_code = status_code


class PipelineError(Exception):
    """Base class for errors that terminate a pipeline request."""

    def __init__(self, message: str, stage: Optional[PipelineStage] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def to_dict(self):
        return {
            "stage": self.stage.value if self.stage else None,
            "message": self.message,
        }


class ValidationError(PipelineError):
    """The requirement was empty or whitespace-only."""

    def __init__(self, message: str = "Requirement must not be empty"):
        super().__init__(message, stage=None)


class BackendUnavailable(PipelineError):
    """The availability probe failed; no stage was attempted."""

    def __init__(self, message: str = "Ollama service unavailable"):
        super().__init__(message, stage=PipelineStage.GATEWAY)


class StageError(PipelineError):
    """A gateway call failed while running a named stage."""

    def __init__(self, stage: PipelineStage, message: str):
        super().__init__(message, stage=stage)
