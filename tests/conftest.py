"""
Shared fixtures: a scripted stand-in for the inference gateway.
"""

import pytest

from promptpage.errors import GatewayError
from promptpage.utils.llm_logger import get_logger


GENERATED_OUTPUT = """Here is your page:
```html
<form id="contact">
  <input name="name">
</form>
```
```css
form { display: grid; }
```
```javascript
```
"""


class FakeGateway:
    """Returns canned completions in order and records every call."""

    def __init__(self, responses=None, available=True, fail_on=None):
        self.responses = list(responses or [])
        self.available = available
        self.fail_on = fail_on  # 1-based index of the call that fails
        self.calls = []
        self.probes = 0
        self.closed = False
        self.temperature = 0.7

    def check_available(self):
        self.probes += 1
        return self.available

    def complete(self, model, prompt, system, component="Gateway"):
        self.calls.append({
            "model": model,
            "prompt": prompt,
            "system": system,
            "component": component,
        })
        if self.fail_on == len(self.calls):
            raise GatewayError("connection refused")
        return self.responses[len(self.calls) - 1]

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Keep the singleton logger silent unless a test turns it on."""
    logger = get_logger()
    logger.configure(level="NONE", log_to_file=False, log_dir=str(tmp_path / "logs"))
    yield logger
    logger.configure(level="NONE", log_to_file=False)


@pytest.fixture
def make_gateway():
    return FakeGateway


@pytest.fixture
def happy_gateway():
    return FakeGateway(responses=[
        "  Needs: form fields, validation, submit handler  \n",
        GENERATED_OUTPUT,
        "\nLooks fine. Add labels for accessibility.\n",
    ])


@pytest.fixture
def generated_output():
    return GENERATED_OUTPUT
