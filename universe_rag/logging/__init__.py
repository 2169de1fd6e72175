# universe_rag/logging/__init__.py
from universe_rag.logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
