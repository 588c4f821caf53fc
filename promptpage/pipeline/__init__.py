"""
Analyze -> Generate -> Validate pipeline and code block extraction.
"""

from promptpage.pipeline.agents import AgentPipeline, PipelineRunState
from promptpage.pipeline.extraction import (
    CodeBlockExtractor,
    compose_code_blocks,
    compose_preview,
    extract_code_blocks,
)
from promptpage.pipeline.orchestrator import RequestOrchestrator

__all__ = [
    "AgentPipeline",
    "PipelineRunState",
    "CodeBlockExtractor",
    "compose_code_blocks",
    "compose_preview",
    "extract_code_blocks",
    "RequestOrchestrator",
]
