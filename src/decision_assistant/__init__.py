"""Decision assistant: LLM chat with a mandatory reflection timer."""

__version__ = "0.1.0"
