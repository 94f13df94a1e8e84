"""Multi-step survey wizard with a small FastAPI backend."""

__version__ = "0.1.0"
