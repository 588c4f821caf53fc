"""
Client side of the Ollama inference backend.
"""

from promptpage.inference.gateway import DEFAULT_TEMPERATURE, InferenceGateway

__all__ = [
    "DEFAULT_TEMPERATURE",
    "InferenceGateway",
]
