"""
discovery/registry.py - Address metadata registry.

Pure lookup table between on-chain addresses and the AssetId / PoolId
handles the engine works with. No pricing, no state.

YAML layout (load_registry):

    assets:
      1: {address: "0x82aF...Bab1", symbol: WETH, decimals: 18}
    pools:
      10: {address: "0xC6962...", kind: UNISWAP_V3, asset0: 1, asset1: 2, fee: 500}
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

from config import load_yaml
from core.constants import ErrorCode, PoolKind
from core.exceptions import ConfigError, ValidationError
from core.ids import AssetId, PoolId
from core.logging import get_logger

logger = get_logger(__name__)

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_address(address: str) -> str:
    """Lower-cased 0x address; raises ValidationError on malformed input."""
    if not isinstance(address, str) or not ADDRESS_PATTERN.match(address):
        raise ValidationError(
            f"invalid address: {address!r}",
            ErrorCode.VALIDATION_INVALID_ADDRESS,
            {"address": address},
        )
    return address.lower()


@dataclass(frozen=True)
class AssetMeta:
    """On-chain descriptor of an asset."""
    address: str
    symbol: str
    decimals: int

    def to_dict(self) -> dict:
        return {"address": self.address, "symbol": self.symbol, "decimals": self.decimals}


@dataclass(frozen=True)
class PoolMeta:
    """On-chain descriptor of a pool."""
    address: str
    kind: PoolKind
    asset0: AssetId
    asset1: AssetId
    fee: int

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "kind": self.kind.value,
            "asset0": self.asset0.value,
            "asset1": self.asset1.value,
            "fee": self.fee,
        }


class Registry:
    """Bidirectional id <-> address lookups for assets and pools."""

    def __init__(self) -> None:
        self._asset_meta: dict[AssetId, AssetMeta] = {}
        self._pool_meta: dict[PoolId, PoolMeta] = {}
        self._asset_by_addr: dict[str, AssetId] = {}
        self._pool_by_addr: dict[str, PoolId] = {}

    def upsert_asset(self, asset: AssetId, meta: AssetMeta) -> None:
        address = normalize_address(meta.address)
        previous = self._asset_meta.get(asset)
        if previous is not None and previous.address != address:
            self._asset_by_addr.pop(previous.address, None)
        meta = AssetMeta(address=address, symbol=meta.symbol, decimals=meta.decimals)
        self._asset_by_addr[address] = asset
        self._asset_meta[asset] = meta

    def upsert_pool(self, pool: PoolId, meta: PoolMeta) -> None:
        address = normalize_address(meta.address)
        previous = self._pool_meta.get(pool)
        if previous is not None and previous.address != address:
            self._pool_by_addr.pop(previous.address, None)
        meta = PoolMeta(
            address=address,
            kind=meta.kind,
            asset0=meta.asset0,
            asset1=meta.asset1,
            fee=meta.fee,
        )
        self._pool_by_addr[address] = pool
        self._pool_meta[pool] = meta

    def asset(self, asset: AssetId) -> Optional[AssetMeta]:
        return self._asset_meta.get(asset)

    def pool(self, pool: PoolId) -> Optional[PoolMeta]:
        return self._pool_meta.get(pool)

    def asset_by_address(self, address: str) -> Optional[AssetId]:
        return self._asset_by_addr.get(normalize_address(address))

    def pool_by_address(self, address: str) -> Optional[PoolId]:
        return self._pool_by_addr.get(normalize_address(address))

    def asset_by_symbol(self, symbol: str) -> Optional[AssetId]:
        for asset, meta in self._asset_meta.items():
            if meta.symbol == symbol:
                return asset
        return None

    def assets(self) -> Iterator[tuple[AssetId, AssetMeta]]:
        return iter(sorted(self._asset_meta.items()))

    def pools(self) -> Iterator[tuple[PoolId, PoolMeta]]:
        return iter(sorted(self._pool_meta.items()))

    def get_summary(self) -> dict:
        kinds: dict[str, int] = {}
        for meta in self._pool_meta.values():
            kinds[meta.kind.value] = kinds.get(meta.kind.value, 0) + 1
        return {
            "assets": len(self._asset_meta),
            "pools": len(self._pool_meta),
            "pool_kinds": kinds,
        }

    def to_dict(self) -> dict:
        return {
            "assets": {a.value: m.to_dict() for a, m in self.assets()},
            "pools": {p.value: m.to_dict() for p, m in self.pools()},
        }

    def save_snapshot(self, filepath: Path) -> Path:
        """Write the registry as JSON."""
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Registry snapshot saved: {filepath}")
        return filepath


def registry_from_dict(data: dict[str, Any]) -> Registry:
    """Build a Registry from the parsed YAML layout."""
    registry = Registry()
    try:
        for raw_id, entry in (data.get("assets") or {}).items():
            registry.upsert_asset(
                AssetId(int(raw_id)),
                AssetMeta(
                    address=entry["address"],
                    symbol=entry.get("symbol", str(raw_id)),
                    decimals=entry.get("decimals", 18),
                ),
            )
        for raw_id, entry in (data.get("pools") or {}).items():
            registry.upsert_pool(
                PoolId(int(raw_id)),
                PoolMeta(
                    address=entry["address"],
                    kind=PoolKind(entry["kind"]),
                    asset0=AssetId(int(entry["asset0"])),
                    asset1=AssetId(int(entry["asset1"])),
                    fee=entry.get("fee", 0),
                ),
            )
    except (KeyError, ValueError, TypeError) as e:
        raise ConfigError(f"invalid registry entry: {e}", details={"error": e}) from e

    logger.info(
        "Registry loaded",
        extra={"context": registry.get_summary()},
    )
    return registry


def load_registry(path: Path) -> Registry:
    """Load a Registry from a YAML file."""
    return registry_from_dict(load_yaml(path))
