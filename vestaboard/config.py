# vestaboard/config.py
from __future__ import annotations

import ipaddress
import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Literal, Optional

from .board import FLAGSHIP_COLS, FLAGSHIP_ROWS
from .validation import validate_board_dimensions

logger = logging.getLogger(__name__)

LOCAL_DEVICE_PORT = 7000

TransportKind = Literal["none", "rw", "subscription", "local"]


@dataclass(frozen=True)
class BoardSize:
    rows: int = FLAGSHIP_ROWS
    cols: int = FLAGSHIP_COLS

    def __post_init__(self) -> None:
        validate_board_dimensions(self.rows, self.cols)


@dataclass(frozen=True)
class ReadWriteConfig:
    read_write_key: str

    def __post_init__(self) -> None:
        if not self.read_write_key:
            raise ValueError("Read/write key must not be empty")


@dataclass(frozen=True)
class SubscriptionConfig:
    api_key: str
    api_secret: str

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_secret:
            raise ValueError("Subscription api_key and api_secret are required")


@dataclass(frozen=True)
class LocalConfig:
    api_key: str
    ip_address: str
    port: int = LOCAL_DEVICE_PORT

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("Local API key must not be empty")
        try:
            ipaddress.ip_address(self.ip_address)
        except ValueError as e:
            raise ValueError(f"Invalid local device IP '{self.ip_address}'") from e
        if not (0 < self.port <= 0xFFFF):
            raise ValueError(f"Local API port must be 1-65535, got {self.port}")

    @property
    def base_url(self) -> str:
        host = self.ip_address
        if ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{self.port}"


@dataclass(frozen=True)
class TransportConfig:
    kind: TransportKind = "none"
    timeout: float = 10.0
    rw: Optional[ReadWriteConfig] = None
    subscription: Optional[SubscriptionConfig] = None
    local: Optional[LocalConfig] = None
    subscription_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in {"none", "rw", "subscription", "local"}:
            raise ValueError(f"Invalid transport kind '{self.kind}'")
        if self.timeout <= 0:
            raise ValueError("Transport timeout must be > 0")
        if self.kind != "none" and getattr(self, self.kind) is None:
            raise ValueError(f"Transport '{self.kind}' selected but [transport.{self.kind}] is missing")
        if self.kind == "subscription" and not self.subscription_id:
            raise ValueError("Transport 'subscription' needs a subscription_id")


@dataclass(frozen=True)
class VestaboardConfig:
    board: BoardSize = field(default_factory=BoardSize)
    transport: TransportConfig = field(default_factory=TransportConfig)


def _load_rw(entry: dict) -> Optional[ReadWriteConfig]:
    key = os.getenv("VESTABOARD_RW_KEY") or entry.get("read_write_key")
    return ReadWriteConfig(read_write_key=str(key)) if key else None


def _load_subscription(entry: dict) -> Optional[SubscriptionConfig]:
    key = os.getenv("VESTABOARD_API_KEY") or entry.get("api_key")
    secret = os.getenv("VESTABOARD_API_SECRET") or entry.get("api_secret")
    if not key and not secret:
        return None
    return SubscriptionConfig(api_key=str(key or ""), api_secret=str(secret or ""))


def _load_local(entry: dict) -> Optional[LocalConfig]:
    key = os.getenv("VESTABOARD_LOCAL_KEY") or entry.get("api_key")
    ip = os.getenv("VESTABOARD_LOCAL_IP") or entry.get("ip_address")
    if not key and not ip:
        return None
    return LocalConfig(
        api_key=str(key or ""),
        ip_address=str(ip or ""),
        port=int(entry.get("port", LOCAL_DEVICE_PORT)),
    )


def load_from_toml(config_path: str | Path) -> VestaboardConfig:
    """
    Load a VestaboardConfig from a TOML file.

    Expected TOML structure:

    [board]
    rows = 6
    cols = 22

    [transport]
    kind = "local"   # none|rw|subscription|local
    timeout = 10.0
    subscription_id = "..."   # only for kind = "subscription"

    [transport.rw]
    read_write_key = "..."

    [transport.subscription]
    api_key = "..."
    api_secret = "..."

    [transport.local]
    api_key = "..."
    ip_address = "192.168.1.50"
    port = 7000

    Secrets may instead come from VESTABOARD_RW_KEY, VESTABOARD_API_KEY,
    VESTABOARD_API_SECRET, VESTABOARD_LOCAL_KEY and VESTABOARD_LOCAL_IP.
    """
    p = Path(config_path)
    if not p.exists():
        raise FileNotFoundError(f"Configuration file not found: {p}")

    with p.open("rb") as f:
        data = tomllib.load(f)

    board = data.get("board") or {}
    transport = data.get("transport") or {}

    cfg = VestaboardConfig(
        board=BoardSize(
            rows=int(board.get("rows", FLAGSHIP_ROWS)),
            cols=int(board.get("cols", FLAGSHIP_COLS)),
        ),
        transport=TransportConfig(
            kind=str(transport.get("kind", "none")).lower(),  # type: ignore[arg-type]
            timeout=float(transport.get("timeout", 10.0)),
            rw=_load_rw(transport.get("rw") or {}),
            subscription=_load_subscription(transport.get("subscription") or {}),
            local=_load_local(transport.get("local") or {}),
            subscription_id=transport.get("subscription_id"),
        ),
    )

    logger.info(
        "Loaded VestaboardConfig: board=%dx%d, transport=%s",
        cfg.board.rows,
        cfg.board.cols,
        cfg.transport.kind,
    )
    return cfg


def default_config() -> VestaboardConfig:
    """The flagship 6x22 board with no transport, unless the environment provides one."""
    cfg = VestaboardConfig()

    local = _load_local({})
    if local is not None:
        cfg = replace(cfg, transport=TransportConfig(kind="local", local=local))
    else:
        rw = _load_rw({})
        if rw is not None:
            cfg = replace(cfg, transport=TransportConfig(kind="rw", rw=rw))

    return cfg
