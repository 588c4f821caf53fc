"""
Request orchestrator: the service boundary around the agent pipeline.
"""

import uuid
from typing import Optional

from promptpage.config import Settings
from promptpage.errors import BackendUnavailable, ValidationError
from promptpage.inference.gateway import InferenceGateway
from promptpage.models import PipelineResponse
from promptpage.pipeline.agents import AgentPipeline
from promptpage.pipeline.extraction import compose_code_blocks, extract_code_blocks
from promptpage.utils.llm_logger import LoggedGateway, get_logger


class RequestOrchestrator:
    """Validates input, gates on backend availability and drives the pipeline."""

    def __init__(self, gateway: InferenceGateway, model: str):
        """
        Args:
            gateway: Gateway used for the availability probe and all stages.
            model: Model name used for every stage.
        """
        self.gateway = gateway
        self.model = model
        self.logger = get_logger()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RequestOrchestrator":
        settings = settings or Settings.from_env()
        return cls(InferenceGateway.from_settings(settings), settings.model)

    def _pipeline(self, request_id: str) -> AgentPipeline:
        return AgentPipeline(LoggedGateway(self.gateway, request_id=request_id), self.model)

    def ensure_available(self, request_id: Optional[str] = None):
        """
        Raises:
            BackendUnavailable: If the backend probe fails.
        """
        if not self.gateway.check_available():
            self.logger.log_event("Availability", "Ollama service unavailable", request_id=request_id)
            raise BackendUnavailable()

    def handle(self, requirement: str) -> PipelineResponse:
        """
        Turn a requirement into analysis, code and validation.

        Args:
            requirement: Free-text UI requirement.

        Returns:
            PipelineResponse built from a fully completed run.

        Raises:
            ValidationError: Empty or whitespace-only requirement.
            BackendUnavailable: Backend probe failed; no stage was run.
            StageError: A stage failed; later stages were not run.
        """
        if not requirement or not requirement.strip():
            raise ValidationError()

        request_id = uuid.uuid4().hex[:12]
        self.logger.log_event(
            "Orchestrator",
            f"New request: {requirement[:50]}...",
            request_id=request_id,
        )
        self.ensure_available(request_id)

        state = self._pipeline(request_id).run(requirement, request_id=request_id)

        artifacts = extract_code_blocks(state["generated"])
        if artifacts.is_empty():
            self.logger.log_warning(
                "Extractor",
                "No html, css or javascript block found in generation output",
                request_id=request_id,
                metadata={"generated_length": len(state["generated"])},
            )

        self.logger.log_event("Orchestrator", "Request completed successfully", request_id=request_id)
        return PipelineResponse.from_stages(state["analysis"], artifacts, state["validation"])

    def validate_only(self, html: str, css: str, js: str) -> str:
        """
        Run only the Validation stage against user-supplied code.

        Returns:
            Trimmed validation text.

        Raises:
            BackendUnavailable: Backend probe failed.
            StageError: The validation call failed.
        """
        request_id = uuid.uuid4().hex[:12]
        self.ensure_available(request_id)

        code = compose_code_blocks(html or "", css or "", js or "")
        validation = self._pipeline(request_id).validate(code)
        return validation.strip()

    def check_available(self) -> bool:
        return self.gateway.check_available()

    def close(self):
        self.gateway.close()
