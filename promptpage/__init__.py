"""
PromptPage: requirement-to-webpage generation

An Analyze -> Generate -> Validate agent chain over a local Ollama model that
turns a free-text UI requirement into separate HTML, CSS and JavaScript sources.
"""

__version__ = "1.0.1"
