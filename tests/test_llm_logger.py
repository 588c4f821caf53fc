"""
Tests for the LLM call logger.
"""

import json

import pytest

from promptpage.errors import GatewayError
from promptpage.utils.llm_logger import LoggedGateway, LogLevel, get_logger


def read_entries(log_dir, request_id):
    log_file = log_dir / request_id / "logs" / "llm_calls.jsonl"
    return [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]


def test_logger_is_singleton():
    assert get_logger() is get_logger()


def test_unknown_level_disables_logging(quiet_logger):
    quiet_logger.configure(level="LOUD")
    assert quiet_logger.level == LogLevel.NONE


def test_disabled_logging_passes_through(make_gateway, tmp_path, capsys):
    gateway = make_gateway(responses=["done"])

    assert LoggedGateway(gateway, request_id="r1").complete("tinyllama", "p", "s") == "done"
    assert capsys.readouterr().out == ""
    assert not (tmp_path / "logs" / "r1").exists()


def test_info_logging_writes_jsonl(quiet_logger, make_gateway, tmp_path, capsys):
    quiet_logger.configure(level="INFO", log_to_file=True, log_dir=str(tmp_path / "logs"))
    gateway = make_gateway(responses=["generated text"])

    LoggedGateway(gateway, request_id="r2").complete("tinyllama", "p", "s", component="Code Agent")

    out = capsys.readouterr().out
    assert "[Code Agent]" in out
    assert "ollama/tinyllama" in out

    entries = read_entries(tmp_path / "logs", "r2")
    assert [entry["event"] for entry in entries] == ["response"]
    assert entries[0]["response"]["content_length"] == len("generated text")
    assert entries[0]["response"]["content"] is None


def test_trace_logging_keeps_full_text(quiet_logger, make_gateway, tmp_path):
    quiet_logger.configure(level="TRACE", log_to_file=True, log_dir=str(tmp_path / "logs"))
    gateway = make_gateway(responses=["full response"])

    LoggedGateway(gateway, request_id="r3").complete("tinyllama", "the prompt", "the system")

    request_entry, response_entry = read_entries(tmp_path / "logs", "r3")
    assert request_entry["request"]["prompt"] == "the prompt"
    assert request_entry["request"]["temperature"] == 0.7
    assert response_entry["response"]["content"] == "full response"


def test_errors_are_logged_and_reraised(quiet_logger, make_gateway, capsys):
    quiet_logger.configure(level="INFO")
    gateway = make_gateway(fail_on=1)

    with pytest.raises(GatewayError):
        LoggedGateway(gateway).complete("tinyllama", "p", "s", component="Analysis Agent")

    assert "LLM Error: [Analysis Agent] GatewayError" in capsys.readouterr().out


def test_delegates_other_attributes(make_gateway):
    gateway = make_gateway(available=False)

    assert LoggedGateway(gateway).check_available() is False


def test_warnings_print_at_default_level(quiet_logger, capsys):
    assert quiet_logger.level == LogLevel.NONE

    quiet_logger.log_warning("Extractor", "No html, css or javascript block found")

    assert "[Extractor] No html, css or javascript block found" in capsys.readouterr().out


def test_unwritable_log_dir_is_reported_not_raised(quiet_logger, tmp_path, capsys):
    not_a_dir = tmp_path / "logfile"
    not_a_dir.write_text("occupied", encoding="utf-8")
    quiet_logger.configure(level="INFO", log_to_file=True, log_dir=str(not_a_dir))

    quiet_logger.log_event("Pipeline", "analyzing...", request_id="r4")

    assert "LLM log write failed" in capsys.readouterr().out
