"""
Tests for data models.
"""

import pytest
from pydantic import ValidationError as SchemaError

from promptpage.errors import BackendUnavailable, StageError, ValidationError
from promptpage.models import (
    GeneratedArtifactSet,
    PipelineResponse,
    PipelineStage,
    ValidateCodeRequest,
)


def test_artifact_set_defaults_empty():
    """Absent blocks default to empty strings."""
    artifacts = GeneratedArtifactSet()
    assert (artifacts.html, artifacts.css, artifacts.js) == ("", "", "")
    assert artifacts.is_empty()


def test_artifact_set_is_immutable():
    artifacts = GeneratedArtifactSet(html="<p></p>")
    with pytest.raises(SchemaError):
        artifacts.html = "<div></div>"


def test_artifact_set_not_empty():
    assert not GeneratedArtifactSet(js="run();").is_empty()


def test_pipeline_response_from_stages_trims_text():
    artifacts = GeneratedArtifactSet(html="<p></p>", css="p { }")

    response = PipelineResponse.from_stages("  analysis\n", artifacts, "\n validation ")

    assert response.analysis == "analysis"
    assert response.validation == "validation"
    assert response.html == "<p></p>"
    assert response.js == ""


def test_validate_code_request_defaults():
    request = ValidateCodeRequest(html="<p></p>")
    assert request.css == ""
    assert request.js == ""


def test_error_stages():
    """Backend-down and stage failures carry distinct stages."""
    assert ValidationError().stage is None
    assert BackendUnavailable().stage == PipelineStage.GATEWAY

    error = StageError(PipelineStage.VALIDATION, "Validation Agent failed: boom")
    assert error.to_dict() == {"stage": "validation", "message": "Validation Agent failed: boom"}
