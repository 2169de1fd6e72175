# universe_rag/__init__.py
"""
universe_rag - storage plugin that keeps documents in a Universe server.

Usage:
    from universe_rag import UniverseRAG

    rag = UniverseRAG({"serverUrl": "https://store.example", "universe": "docs"})
    await rag.init({**tokens})
    await rag.add_file("doc1", "hello world")
"""

from universe_rag.client import UniverseRAG
from universe_rag.config import UniverseConfig, load_config
from universe_rag.credentials import credential_name
from universe_rag.exceptions import (
    ApiError,
    ConfigError,
    CredentialError,
    TransportError,
    UniverseRAGError,
    ValidationError,
)
from universe_rag.plugin import RAGPlugin

__version__ = "0.1.0"

__all__ = [
    "UniverseRAG",
    "UniverseConfig",
    "load_config",
    "credential_name",
    "RAGPlugin",
    "UniverseRAGError",
    "ConfigError",
    "CredentialError",
    "ValidationError",
    "TransportError",
    "ApiError",
]
