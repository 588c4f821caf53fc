"""
HTTP client for the Ollama text-completion backend.
"""

from typing import List, Optional

import httpx

from promptpage.config import Settings
from promptpage.errors import GatewayError


DEFAULT_TEMPERATURE = 0.7


class InferenceGateway:
    """Sends (model, prompt, system) triples to Ollama and returns the completion."""

    def __init__(
        self,
        host: str = "http://127.0.0.1:11434",
        request_timeout: float = 120.0,
        probe_timeout: float = 5.0,
        temperature: float = DEFAULT_TEMPERATURE,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the gateway.

        Args:
            host: Backend base URL.
            request_timeout: Deadline in seconds for each generate call.
            probe_timeout: Timeout in seconds for the availability probe.
            temperature: Sampling temperature sent with every call.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.host = host.rstrip("/")
        self.request_timeout = request_timeout
        self.probe_timeout = probe_timeout
        self.temperature = temperature
        self.client = httpx.Client(
            base_url=self.host,
            timeout=httpx.Timeout(request_timeout, connect=min(request_timeout, 10.0)),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "InferenceGateway":
        return cls(
            host=settings.ollama_host,
            request_timeout=settings.request_timeout,
            probe_timeout=settings.probe_timeout,
            **kwargs
        )

    def complete(
        self,
        model: str,
        prompt: str,
        system: str,
        component: str = "Gateway"
    ) -> str:
        """
        Run one non-streaming completion.

        Args:
            model: Model name loaded in the backend.
            prompt: Prompt text.
            system: System instruction.
            component: Caller name, used in error messages.

        Returns:
            The backend's generated text, unmodified.

        Raises:
            GatewayError: Backend unreachable, non-success status, or a
                response without a text "response" field.
        """
        payload = {
            "model": model,
            "prompt": prompt,
            "system": system,
            "stream": False,
            "options": {"temperature": self.temperature},
        }

        try:
            response = self.client.post("/api/generate", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GatewayError(
                f"Backend returned HTTP {e.response.status_code}: {_error_detail(e.response)}",
                cause=e,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise GatewayError(f"Backend request failed: {e}", cause=e) from e

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError("Backend returned a non-JSON response", cause=e) from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise GatewayError("Backend response is missing the 'response' text field")

        return text

    def check_available(self) -> bool:
        """
        Probe the backend with a read-only model listing.

        Returns:
            True if the backend answered with a success status. Never raises.
        """
        try:
            response = self.client.get("/api/tags", timeout=self.probe_timeout)
            return response.is_success
        except httpx.HTTPError:
            return False

    def list_models(self) -> List[str]:
        """
        List names of the models the backend has loaded.

        Raises:
            GatewayError: If the backend cannot be queried.
        """
        try:
            response = self.client.get("/api/tags", timeout=self.probe_timeout)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise GatewayError(f"Could not list models: {e}", cause=e) from e
        except ValueError as e:
            raise GatewayError("Backend returned a non-JSON model list", cause=e) from e

        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list):
            raise GatewayError("Backend returned a malformed model list")

        return [m.get("name", "") for m in models if isinstance(m, dict)]

    def close(self):
        self.client.close()

    def __enter__(self) -> "InferenceGateway":
        return self

    def __exit__(self, *exc_info):
        self.close()


def _error_detail(response: httpx.Response) -> str:
    """Pull Ollama's {"error": ...} message out of a failed response, if any."""
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return response.reason_phrase
