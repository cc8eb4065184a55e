"""Configuration — update inputs from the environment and ``.env``.

Inputs follow the GitHub Action convention (``INPUT_<NAME>``), so the
same variables work inside the action and from a shell. Each input also
has a ``DDNS_`` fallback for local use:

    INPUT_MNEMONIC     DDNS_MNEMONIC     mnemonic phrase or private key
    INPUT_RPC          DDNS_RPC          RPC endpoint URL
    INPUT_NAME         DDNS_NAME         domain name
    INPUT_CONTENTHASH  DDNS_CONTENTHASH  content hash
    INPUT_CONTENTTYPE  DDNS_CONTENTTYPE  ipfs-ns | swarm-ns (default ipfs-ns)
    INPUT_DRYRUN       DDNS_DRYRUN       true | false
    INPUT_VERBOSE      DDNS_VERBOSE      true | false
                       DDNS_TX_TIMEOUT   confirmation window in seconds
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from ddns.chain.client import DEFAULT_TX_TIMEOUT

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"", "0", "false", "no", "off"}


def _lookup(env: Mapping[str, str], key: str) -> Optional[str]:
    for name in (f"INPUT_{key}", f"DDNS_{key}"):
        value = env.get(name)
        if value is not None and value.strip():
            return value.strip()
    return None


def parse_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


@dataclass(frozen=True)
class UpdateSettings:
    """Inputs for one update. Missing values are None."""
    secret: Optional[str] = None
    rpc_url: Optional[str] = None
    name: Optional[str] = None
    content_hash: Optional[str] = None
    content_type: str = "ipfs-ns"
    dry_run: bool = False
    verbose: bool = False
    tx_timeout: float = DEFAULT_TX_TIMEOUT

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Path] = None,
    ) -> "UpdateSettings":
        """Read settings from ``env`` (default: ``os.environ`` after ``.env``)."""
        if env is None:
            load_dotenv(dotenv_path or Path.cwd() / ".env")
            env = os.environ
        timeout = env.get("DDNS_TX_TIMEOUT")
        return cls(
            secret=_lookup(env, "MNEMONIC"),
            rpc_url=_lookup(env, "RPC"),
            name=_lookup(env, "NAME"),
            content_hash=_lookup(env, "CONTENTHASH"),
            content_type=_lookup(env, "CONTENTTYPE") or "ipfs-ns",
            dry_run=parse_bool(_lookup(env, "DRYRUN")),
            verbose=parse_bool(_lookup(env, "VERBOSE")),
            tx_timeout=float(timeout) if timeout else DEFAULT_TX_TIMEOUT,
        )

    def missing(self) -> list[str]:
        """Names of required inputs that are not set."""
        required = {
            "mnemonic": self.secret,
            "rpc": self.rpc_url,
            "name": self.name,
            "contentHash": self.content_hash,
        }
        return [key for key, value in required.items() if not value]
