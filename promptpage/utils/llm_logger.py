"""
LLM Debug Logger for tracking gateway calls and pipeline events.

Supports configurable log levels (NONE, INFO, DEBUG, TRACE) and dual output:
- Console: Human-readable formatted output
- File: JSON Lines format for parsing and analysis
"""

import json
import os
import time
import uuid
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv


class LogLevel(Enum):
    """Logging levels for LLM debug output."""

    NONE = 0
    INFO = 1
    DEBUG = 2
    TRACE = 3


class LLMLogger:
    """Centralized logger for gateway calls with configurable levels."""

    _instance: Optional["LLMLogger"] = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the logger with configuration from environment."""
        if self._initialized:
            return

        load_dotenv()
        self.configure(
            level=os.getenv("LLM_DEBUG_LEVEL", "NONE"),
            log_to_file=os.getenv("LLM_LOG_TO_FILE", "true").lower() == "true",
            log_dir=os.getenv("LLM_LOG_DIR", "outputs"),
        )
        self._initialized = True

    def configure(
        self,
        level: Optional[str] = None,
        log_to_file: Optional[bool] = None,
        log_dir: Optional[str] = None,
    ):
        """Override the environment configuration (used by the CLI and tests)."""
        if level is not None:
            try:
                self.level = LogLevel[level.upper()]
            except KeyError:
                self.level = LogLevel.NONE
        if log_to_file is not None:
            self.log_to_file = log_to_file
        if log_dir is not None:
            self.log_dir = Path(log_dir)

    def _should_log(self, min_level: LogLevel) -> bool:
        """Check if we should log at the given level."""
        return self.level.value >= min_level.value

    def _format_timestamp(self) -> str:
        """Get ISO8601 formatted timestamp."""
        return datetime.now().isoformat()

    def _truncate_content(self, content: str, max_len: int = 200) -> str:
        """Truncate content for preview."""
        if len(content) <= max_len:
            return content
        return content[:max_len] + "... [truncated]"

    def _format_console_info(
        self,
        component: str,
        model: str,
        latency_ms: float,
        response_length: Optional[int] = None,
    ) -> str:
        """Format basic info line for console."""
        parts = [
            f"[{component}]",
            f"ollama/{model}",
            f"{latency_ms:.1f}ms",
        ]
        if response_length is not None:
            parts.append(f"{response_length} chars")
        return " | ".join(parts)

    def _format_block(self, title: str, content: str, limit: int) -> str:
        lines = [f"  {title}:"]
        if len(content) > limit:
            lines.append(f"    {content[:limit]}...")
            lines.append(f"    ... [{len(content) - limit} more chars]")
        else:
            for line in content.split("\n"):
                lines.append(f"    {line}")
        return "\n".join(lines)

    def _write_to_file(self, request_id: Optional[str], log_entry: Dict[str, Any]):
        """Write log entry to JSON Lines file."""
        if not self.log_to_file or not request_id:
            return

        log_file = self.log_dir / request_id / "logs" / "llm_calls.jsonl"
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")
        except OSError as e:
            # A broken log directory must not abort the pipeline
            print(f"[{self._format_timestamp()}] ⚠️  LLM log write failed: {log_file}: {e}")

    def log_invocation(
        self,
        component: str,
        model: str,
        request_id: Optional[str] = None,
    ) -> str:
        """
        Log the start of a gateway call.

        Returns:
            Invocation ID (UUID string) for tracking this call, or "" when
            logging is disabled.
        """
        if not self._should_log(LogLevel.INFO):
            return ""

        invocation_id = str(uuid.uuid4())
        console_msg = f"[{self._format_timestamp()}] 🔵 LLM Call: [{component}] ollama/{model}"
        if request_id:
            console_msg += f" | request_id: {request_id}"
        print(console_msg)

        return invocation_id

    def log_request(
        self,
        invocation_id: str,
        component: str,
        model: str,
        prompt: str,
        system: str,
        temperature: Optional[float] = None,
        request_id: Optional[str] = None,
    ):
        """Log the prompt and system instruction sent to the backend."""
        if not self._should_log(LogLevel.DEBUG):
            return

        if self._should_log(LogLevel.TRACE):
            print(self._format_block("SYSTEM", system, 500))
            print(self._format_block("PROMPT", prompt, 500))
        else:
            print(f"  System: {self._truncate_content(system, 150)}")
            print(f"  Prompt: {self._truncate_content(prompt, 150)}")

        log_entry = {
            "timestamp": self._format_timestamp(),
            "level": self.level.name,
            "event": "request",
            "component": component,
            "invocation_id": invocation_id,
            "model": model,
            "request_id": request_id,
            "request": {
                "prompt": prompt if self.level == LogLevel.TRACE else None,
                "prompt_preview": self._truncate_content(prompt, 200),
                "prompt_length": len(prompt),
                "system": system,
                "temperature": temperature,
            },
        }
        self._write_to_file(request_id, log_entry)

    def log_response(
        self,
        invocation_id: str,
        component: str,
        model: str,
        response: str,
        start_time: float,
        end_time: float,
        request_id: Optional[str] = None,
    ):
        """Log the completion text and timing."""
        if not self._should_log(LogLevel.INFO):
            return

        latency_ms = (end_time - start_time) * 1000

        console_msg = f"[{self._format_timestamp()}] ✅ LLM Response: "
        console_msg += self._format_console_info(component, model, latency_ms, len(response))
        print(console_msg)

        if self._should_log(LogLevel.TRACE):
            print(self._format_block("RESPONSE", response, 1000))
        elif self._should_log(LogLevel.DEBUG):
            print(f"  Response: {self._truncate_content(response, 200)}")

        log_entry = {
            "timestamp": self._format_timestamp(),
            "level": self.level.name,
            "event": "response",
            "component": component,
            "invocation_id": invocation_id,
            "model": model,
            "request_id": request_id,
            "response": {
                "content": response if self.level == LogLevel.TRACE else None,
                "content_preview": (
                    self._truncate_content(response, 200)
                    if self.level.value >= LogLevel.DEBUG.value
                    else None
                ),
                "content_length": len(response),
            },
            "timing": {
                "latency_ms": latency_ms,
                "start_time": datetime.fromtimestamp(start_time).isoformat(),
                "end_time": datetime.fromtimestamp(end_time).isoformat(),
            },
        }
        self._write_to_file(request_id, log_entry)

    def log_error(
        self,
        component: str,
        error: BaseException,
        request_id: Optional[str] = None,
    ):
        """Log a failed call or stage."""
        if not self._should_log(LogLevel.INFO):
            return

        print(f"[{self._format_timestamp()}] ❌ LLM Error: [{component}] {type(error).__name__}: {error}")
        self._write_to_file(request_id, {
            "timestamp": self._format_timestamp(),
            "level": "ERROR",
            "event": "error",
            "component": component,
            "request_id": request_id,
            "error": {"type": type(error).__name__, "message": str(error)},
        })

    def log_event(
        self,
        component: str,
        message: str,
        request_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """Log a pipeline lifecycle event."""
        if not self._should_log(LogLevel.INFO):
            return

        console_msg = f"[{self._format_timestamp()}] [{component}] {message}"
        if request_id:
            console_msg += f" | request_id: {request_id}"
        print(console_msg)
        self._write_to_file(request_id, {
            "timestamp": self._format_timestamp(),
            "level": "INFO",
            "event": "pipeline",
            "component": component,
            "request_id": request_id,
            "message": message,
            "metadata": metadata or {},
        })

    def log_warning(
        self,
        component: str,
        message: str,
        request_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """Log a diagnostic that is not an error (e.g. nothing was extracted).

        Printed at every level, including NONE.
        """
        print(f"[{self._format_timestamp()}] ⚠️  [{component}] {message}")
        self._write_to_file(request_id, {
            "timestamp": self._format_timestamp(),
            "level": "WARNING",
            "event": "warning",
            "component": component,
            "request_id": request_id,
            "message": message,
            "metadata": metadata or {},
        })


def get_logger() -> LLMLogger:
    """Get the singleton logger instance."""
    return LLMLogger()


class LoggedGateway:
    """
    Wrapper around an InferenceGateway to add debug logging.

    Intercepts complete() calls and logs requests, responses, timing and
    errors. All other attributes are delegated to the wrapped gateway.
    """

    def __init__(self, gateway: Any, request_id: Optional[str] = None):
        """
        Initialize LoggedGateway wrapper.

        Args:
            gateway: The gateway instance to wrap.
            request_id: Optional request ID used to group log lines.
        """
        self.gateway = gateway
        self.request_id = request_id
        self.logger = get_logger()

    def __getattr__(self, name: str):
        """Delegate all other attributes to the wrapped gateway."""
        return getattr(self.gateway, name)

    def complete(
        self,
        model: str,
        prompt: str,
        system: str,
        component: str = "Gateway",
    ) -> str:
        invocation_id = self.logger.log_invocation(
            component=component,
            model=model,
            request_id=self.request_id,
        )

        if not invocation_id:
            # Logging disabled, just call directly
            return self.gateway.complete(model, prompt, system, component=component)

        self.logger.log_request(
            invocation_id=invocation_id,
            component=component,
            model=model,
            prompt=prompt,
            system=system,
            temperature=getattr(self.gateway, "temperature", None),
            request_id=self.request_id,
        )

        start_time = time.time()
        try:
            response = self.gateway.complete(model, prompt, system, component=component)
        except Exception as e:
            self.logger.log_error(component, e, request_id=self.request_id)
            raise
        end_time = time.time()

        self.logger.log_response(
            invocation_id=invocation_id,
            component=component,
            model=model,
            response=response,
            start_time=start_time,
            end_time=end_time,
            request_id=self.request_id,
        )

        return response
