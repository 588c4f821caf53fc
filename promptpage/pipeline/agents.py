"""
The three pipeline agents and their strictly linear composition.

Each agent is a str -> str stage that makes exactly one gateway call. Raw
model text is threaded from one stage to the next; structure is only
recovered afterwards by the extractor.
"""

from typing import Any, Optional, TypedDict

from promptpage.errors import GatewayError, StageError
from promptpage.models import PipelineStage, PipelineStatus
from promptpage.pipeline.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    GENERATION_SYSTEM_PROMPT,
    VALIDATION_SYSTEM_PROMPT,
    build_analysis_prompt,
    build_generation_prompt,
    build_validation_prompt,
)
from promptpage.utils.llm_logger import get_logger


AGENT_NAMES = {
    PipelineStage.ANALYSIS: "Analysis Agent",
    PipelineStage.GENERATION: "Code Agent",
    PipelineStage.VALIDATION: "Validation Agent",
}


class PipelineRunState(TypedDict, total=False):
    """
    Per-request state of one pipeline run.

    Owned by a single request and discarded with it.
    """

    request_id: Optional[str]
    requirement: str
    status: PipelineStatus

    # Stage outputs, raw and untrimmed
    analysis: Optional[str]
    generated: Optional[str]
    validation: Optional[str]

    failed_stage: Optional[PipelineStage]
    error: Optional[str]


class AgentPipeline:
    """Runs Analysis -> Code Generation -> Validation against one gateway."""

    def __init__(self, gateway: Any, model: str):
        """
        Args:
            gateway: Object with complete(model, prompt, system, component=...).
            model: Model name used for every stage.
        """
        self.gateway = gateway
        self.model = model
        self.logger = get_logger()

    def _run_agent(self, stage: PipelineStage, prompt: str, system: str) -> str:
        agent_name = AGENT_NAMES[stage]
        try:
            return self.gateway.complete(self.model, prompt, system, component=agent_name)
        except GatewayError as e:
            raise StageError(stage, f"{agent_name} failed: {e.message}") from e

    def analyze(self, requirement: str) -> str:
        return self._run_agent(
            PipelineStage.ANALYSIS,
            build_analysis_prompt(requirement),
            ANALYSIS_SYSTEM_PROMPT,
        )

    def generate(self, analysis: str) -> str:
        return self._run_agent(
            PipelineStage.GENERATION,
            build_generation_prompt(analysis),
            GENERATION_SYSTEM_PROMPT,
        )

    def validate(self, code: str) -> str:
        """Review raw code text; also used standalone for user-edited code."""
        return self._run_agent(
            PipelineStage.VALIDATION,
            build_validation_prompt(code),
            VALIDATION_SYSTEM_PROMPT,
        )

    def run(self, requirement: str, request_id: Optional[str] = None) -> PipelineRunState:
        """
        Run all three stages in order.

        Args:
            requirement: Raw requirement text, embedded verbatim.
            request_id: Optional ID for log grouping.

        Returns:
            Completed state with analysis, generated and validation set.

        Raises:
            StageError: The first stage whose gateway call failed. No later
                stage is run.
        """
        state: PipelineRunState = {
            "request_id": request_id,
            "requirement": requirement,
            "status": PipelineStatus.IDLE,
            "analysis": None,
            "generated": None,
            "validation": None,
            "failed_stage": None,
            "error": None,
        }

        steps = [
            (PipelineStatus.ANALYZING, self.analyze, "requirement", "analysis"),
            (PipelineStatus.GENERATING, self.generate, "analysis", "generated"),
            (PipelineStatus.VALIDATING, self.validate, "generated", "validation"),
        ]

        for status, stage_fn, source_key, target_key in steps:
            state["status"] = status
            self.logger.log_event("Pipeline", f"{status.value}...", request_id=request_id)
            try:
                state[target_key] = stage_fn(state[source_key])
            except StageError as e:
                state["status"] = PipelineStatus.FAILED
                state["failed_stage"] = e.stage
                state["error"] = e.message
                raise

        state["status"] = PipelineStatus.COMPLETE
        return state
