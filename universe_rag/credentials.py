# universe_rag/credentials.py
"""
Credential naming and lookup for the Universe server.

Rules:
- One bearer token per server, keyed by a name derived from the server URL.
- The adapter never reads environment variables on its own; the host passes
  a credentials mapping to init(). resolve_from_env() exists for the CLI.
- Tokens are never logged.
"""

from __future__ import annotations

import os
import re
from typing import Mapping, Optional

from universe_rag.exceptions import CredentialError
from universe_rag.logging.logger import get_logger
from universe_rag.logging.tags import UNIVERSE

logger = get_logger(__name__)

CREDENTIAL_PREFIX = "universe_token_"

# Fallback env var consulted by the CLI after the derived name
GENERIC_TOKEN_ENV = "UNIVERSE_TOKEN"

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def credential_name(server_url: str) -> str:
    """
    Derive the credential key for a server URL.

    >>> credential_name("https://store.example")
    'universe_token_https___store_example'
    """
    return CREDENTIAL_PREFIX + _NON_ALNUM.sub("_", server_url)


def credential_description(server_url: str) -> str:
    """Operator-facing hint for obtaining the token."""
    return (
        "Obtain the bearer token for the Universe server. "
        f"Contact the admins or use {server_url} to obtain access."
    )


def lookup_token(credentials: Mapping[str, str] | None, server_url: str) -> str:
    """
    Return the token stored under the derived credential name.

    Raises:
        CredentialError: If the credential is absent or empty.
    """
    name = credential_name(server_url)
    token = (credentials or {}).get(name)

    if not token:
        raise CredentialError(f'Credential "{name}" is required')

    return token


def resolve_from_env(
    server_url: str,
    environ: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """
    Build a credentials mapping from environment variables.

    Resolution order:
      1. Variable named exactly like the derived credential name
      2. Same name upper-cased
      3. UNIVERSE_TOKEN

    Returns an empty dict when nothing is set, so init() reports the
    missing credential by name.
    """
    env = os.environ if environ is None else environ
    name = credential_name(server_url)

    for env_name in (name, name.upper(), GENERIC_TOKEN_ENV):
        value = env.get(env_name)
        if value:
            logger.debug(f"{UNIVERSE} Using token from env '{env_name}'")
            return {name: value}

    return {}
