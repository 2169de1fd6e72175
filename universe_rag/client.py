# universe_rag/client.py
"""Universe server client implementing the ingestion host's plugin contract."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

from universe_rag.config import UniverseConfig, parse_config
from universe_rag.credentials import credential_description, credential_name, lookup_token
from universe_rag.exceptions import ConfigError, CredentialError, ValidationError
from universe_rag.http import create_async_api_client, fetch_api
from universe_rag.logging.logger import get_logger
from universe_rag.logging.tags import UNIVERSE

logger = get_logger(__name__)

ConfigLike = Union[UniverseConfig, Mapping[str, Any]]


def _check_file_id(file_id: Any) -> None:
    if not isinstance(file_id, str) or not file_id.strip():
        raise ValidationError("fileId must be a non-empty string")


class UniverseRAG:
    """
    Client for a Universe server, one universe per instance.

    Every operation is a single request against the server, which commits
    it atomically. The client keeps no open connection between calls.

    Lifecycle:
        rag = UniverseRAG({"serverUrl": url, "universe": "docs"})
        creds = rag.required_credentials()      # ask the host for these
        await rag.init({name: token})
        await rag.add_file("doc1", "hello world")
        await rag.finalize()

    Args:
        config: Mapping with serverUrl and universe (or a UniverseConfig).
            Validated immediately when given; otherwise pass it to
            required_credentials() or init().
        **client_kwargs: Forwarded to httpx.AsyncClient (e.g. transport)
    """

    def __init__(self, config: Optional[ConfigLike] = None, **client_kwargs: Any):
        self.config: Optional[UniverseConfig] = (
            parse_config(config) if config is not None else None
        )
        self._token: Optional[str] = None
        self._client_kwargs = client_kwargs

    def __repr__(self) -> str:
        if self.config is None:
            return "UniverseRAG(unconfigured)"
        return (
            f"UniverseRAG(server_url={self.config.server_url!r}, "
            f"universe={self.config.universe!r}, initialized={self.initialized})"
        )

    @property
    def initialized(self) -> bool:
        return self._token is not None

    def _resolve_config(self, config: Optional[ConfigLike]) -> UniverseConfig:
        if config is not None:
            return parse_config(config)
        if self.config is None:
            raise ConfigError("serverUrl must be specified in the config")
        return self.config

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def required_credentials(self, config: Optional[ConfigLike] = None) -> dict[str, str]:
        """
        Credentials the host must supply to init().

        Returns a single entry keyed by the name derived from serverUrl.
        """
        cfg = self._resolve_config(config)
        return {credential_name(cfg.server_url): credential_description(cfg.server_url)}

    async def init(
        self,
        credentials: Mapping[str, str],
        config: Optional[ConfigLike] = None,
    ) -> None:
        """
        Store the bearer token (and config, if given here).

        Calling again replaces the previous state.

        Raises:
            ConfigError: If no valid config is available
            CredentialError: If the derived credential is missing or empty
        """
        cfg = self._resolve_config(config)
        token = lookup_token(credentials, cfg.server_url)

        self.config = cfg
        self._token = token

        logger.info(f"{UNIVERSE} Initialized for universe '{cfg.universe}' at {cfg.server_url}")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _ready_config(self) -> UniverseConfig:
        if self.config is None or self._token is None:
            raise CredentialError("Client is not initialized; call init() first")
        return self.config

    async def _fetch(self, endpoint: str, method: str, body: Any = None) -> Any:
        config = self._ready_config()

        async with create_async_api_client(
            config.server_url,
            api_key=self._token,
            timeout=config.timeout,
            **self._client_kwargs,
        ) as client:
            return await fetch_api(
                client,
                endpoint,
                method,
                body=body,
                retry_delay=config.retry_delay,
            )

    # ------------------------------------------------------------------
    # Plugin operations
    # ------------------------------------------------------------------

    async def add_file(self, file_id: str, content: str) -> None:
        """Create the item, or overwrite it if the id already exists."""
        _check_file_id(file_id)
        if not isinstance(content, str):
            raise ValidationError("content must be a string")

        universe = self._ready_config().universe
        await self._fetch(
            "/emit",
            "POST",
            {"universe": universe, "thing": {"id": file_id, "text": content}},
        )

    async def update_file(self, file_id: str, content: str) -> None:
        # The server overwrites items with the same id.
        await self.add_file(file_id, content)

    async def delete_file(self, file_id: str) -> None:
        """
        Delete one item.

        A missing id is reported by the server and surfaces as ApiError.
        """
        _check_file_id(file_id)
        universe = self._ready_config().universe
        await self._fetch(f"/thing/{universe}/{quote(file_id, safe='')}", "DELETE")

    async def delete_all_files(self) -> None:
        universe = self._ready_config().universe
        await self._fetch(f"/universe/{universe}", "DELETE")

    async def finalize(self) -> None:
        """No-op: each operation is already committed by the server."""
        pass
