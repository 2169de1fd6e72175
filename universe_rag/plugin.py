# universe_rag/plugin.py
"""
Contract between the ingestion host and a storage plugin.

Conformance is structural: any object exposing these coroutines (plus the
synchronous credential descriptor) can be driven by the host.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class RAGPlugin(Protocol):
    """Lifecycle operations the host pipeline calls on a storage plugin."""

    def required_credentials(self) -> dict[str, str]: ...

    async def init(self, credentials: Mapping[str, str]) -> None: ...

    async def add_file(self, file_id: str, content: str) -> None: ...

    async def update_file(self, file_id: str, content: str) -> None: ...

    async def delete_file(self, file_id: str) -> None: ...

    async def delete_all_files(self) -> None: ...

    async def finalize(self) -> None: ...
