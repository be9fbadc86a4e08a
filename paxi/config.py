"""System and benchmark configuration, stored as JSON."""

from __future__ import annotations

import dataclasses
import json
import os
from dataclasses import dataclass, field
from typing import Any

from .identity import ID, id_sort_key


@dataclass
class Bconfig:
    """Benchmark settings."""

    t: int = 60  # running time in seconds
    n: int = 0  # total number of requests
    k: int = 1000  # key space
    w: float = 0.5  # write ratio
    throttle: int = 0  # requests per second, unused if 0
    concurrency: int = 1  # number of simulated clients
    distribution: str = "uniform"
    linearizability_check: bool = True
    conflicts: int = 100  # percentage of conflicting keys
    min: int = 0  # min key
    mu: float = 0.0
    sigma: float = 60.0
    move: bool = False
    speed: int = 500  # milliseconds per key when mu moves
    zipfian_s: float = 2.0
    zipfian_v: float = 1.0
    lambda_: float = 0.01


_BENCH_FIELDS = (
    ("t", "T"),
    ("n", "N"),
    ("k", "K"),
    ("w", "W"),
    ("throttle", "Throttle"),
    ("concurrency", "Concurrency"),
    ("distribution", "Distribution"),
    ("linearizability_check", "LinearizabilityCheck"),
    ("conflicts", "Conflicts"),
    ("min", "Min"),
    ("mu", "Mu"),
    ("sigma", "Sigma"),
    ("move", "Move"),
    ("speed", "Speed"),
    ("zipfian_s", "ZipfianS"),
    ("zipfian_v", "ZipfianV"),
    ("lambda_", "Lambda"),
)

_CONFIG_FIELDS = (
    ("addrs", "address"),
    ("http_addrs", "http_address"),
    ("policy", "policy"),
    ("threshold", "threshold"),
    ("thrifty", "thrifty"),
    ("buffer_size", "buffer_size"),
    ("chan_buffer_size", "chan_buffer_size"),
    ("multiversion", "multiversion"),
    ("benchmark", "benchmark"),
)


def default_bconfig() -> Bconfig:
    """Return the default benchmark settings."""
    return Bconfig()


@dataclass
class Config:
    """Node addresses and protocol settings."""

    addrs: dict[ID, str] = field(default_factory=dict)
    http_addrs: dict[ID, str] = field(default_factory=dict)
    policy: str = "consecutive"
    threshold: float = 3.0
    thrifty: bool = False
    buffer_size: int = 1024
    chan_buffer_size: int = 1024
    multiversion: bool = False
    benchmark: Bconfig = field(default_factory=default_bconfig)

    def ids(self) -> list[ID]:
        """Return every node id, ordered by zone then node."""
        return sorted((ID(i) for i in self.addrs), key=id_sort_key)

    def n(self) -> int:
        """Total number of nodes."""
        return len(self.addrs)

    def z(self) -> int:
        """Total number of zones."""
        return len({ID(i).zone() for i in self.addrs})

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for py, name in _CONFIG_FIELDS:
            value = getattr(self, py)
            if py == "benchmark":
                value = {go: getattr(value, bpy) for bpy, go in _BENCH_FIELDS}
            elif isinstance(value, dict):
                value = {str(k): value[k] for k in sorted(value)}
            out[name] = value
        return out

    def to_json(self) -> str:
        """Return the configuration as a compact JSON document."""
        return json.dumps(self._to_dict(), separators=(",", ":"))

    def __str__(self) -> str:
        return self.to_json()

    def save(self, path: str | os.PathLike = "config.json") -> None:
        """Write the configuration to ``path`` as JSON."""
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json() + "\n")


def make_default_config() -> Config:
    """Return a configuration with default values and no nodes."""
    return Config()


def _coerce(current: Any, value: Any, name: str) -> Any:
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
    elif isinstance(current, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif isinstance(current, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif isinstance(current, str):
        if isinstance(value, str):
            return value
    raise ValueError(f"invalid value {value!r} for field {name!r}")


def _bconfig_from_json(data: Any, base: Bconfig) -> Bconfig:
    if not isinstance(data, dict):
        raise ValueError("benchmark configuration must be a JSON object")
    lookup = {go.lower(): py for py, go in _BENCH_FIELDS}
    changes = {}
    for key, value in data.items():
        py = lookup.get(key.lower())
        if py is None or value is None:
            continue
        changes[py] = _coerce(getattr(base, py), value, key)
    return dataclasses.replace(base, **changes)


def _addresses(data: Any, base: dict[ID, str], name: str) -> dict[ID, str]:
    if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
        raise ValueError(f"{name} must map node ids to address strings")
    merged = dict(base)
    merged.update({ID(k): v for k, v in data.items()})
    return merged


def load_config(path: str | os.PathLike = "config.json") -> Config:
    """Read a JSON configuration file over the defaults."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("configuration must be a JSON object")
    config = make_default_config()
    lookup = {name.lower(): py for py, name in _CONFIG_FIELDS}
    changes: dict[str, Any] = {}
    for key, value in data.items():
        py = lookup.get(key.lower())
        if py is None or value is None:
            continue
        current = getattr(config, py)
        if py == "benchmark":
            changes[py] = _bconfig_from_json(value, current)
        elif py in ("addrs", "http_addrs"):
            changes[py] = _addresses(value, current, key)
        else:
            changes[py] = _coerce(current, value, key)
    return dataclasses.replace(config, **changes)