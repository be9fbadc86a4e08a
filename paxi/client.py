"""HTTP clients for the key-value REST API and the fault-injection endpoints."""

from __future__ import annotations

import base64
import binascii
import itertools
import json
import logging
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import requests

from .config import Config, make_default_config
from .identity import ID, id_sort_key

_log = logging.getLogger(__name__)

HTTP_CLIENT_ID = "Id"
HTTP_COMMAND_ID = "Cid"
HTTP_TIMESTAMP = "Timestamp"
HTTP_NODE_ID = "Id"

_MISSING = object()

Metadata = dict[str, str]


class RequestFailed(Exception):
    """A node answered with a status other than 200 OK."""

    def __init__(self, status: int, reason: str = "", metadata: Metadata | None = None) -> None:
        self.status = status
        self.reason = reason
        self.metadata = dict(metadata or {})
        super().__init__(f"{status} {reason}".strip())


class HTTPClient:
    """Talks to nodes through their REST interface."""

    def __init__(
        self,
        id: str = "",
        config: Config | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config if config is not None else make_default_config()
        self.id = ID(id)
        self.addrs = {ID(k): v for k, v in self.config.addrs.items()}
        self.http = {ID(k): v for k, v in self.config.http_addrs.items()}
        self.n = len(self.addrs)
        self.local_n = (
            sum(1 for node in self.addrs if node.zone() == self.id.zone()) if self.id else 0
        )
        self.cid = 0
        self.session = session if session is not None else requests.Session()

    def get(self, key: int) -> bytes:
        """Read the value of ``key``."""
        self.cid += 1
        value, _ = self.rest_get(self.id, key)
        return value

    def put(self, key: int, value: bytes) -> None:
        """Write ``value`` under ``key``."""
        self.cid += 1
        self.rest_put(self.id, key, value)

    def get_url(self, id: str, key: int) -> str:
        """URL of ``key`` at node ``id``; a random node when ``id`` is empty."""
        ident = ID(id)
        if not ident:
            if not self.http:
                raise LookupError("no HTTP addresses configured")
            ident = random.choice(list(self.http))
        return f"{self.http[ident]}/{int(key)}"

    def _rest(self, id: str, key: int, value: bytes | None) -> tuple[bytes, Metadata]:
        url = self.get_url(id, key)
        headers = {HTTP_CLIENT_ID: str(self.id), HTTP_COMMAND_ID: str(self.cid)}
        if value is None:
            method = "GET"
            response = self.session.get(url, headers=headers)
        else:
            method = "PUT"
            response = self.session.put(url, data=bytes(value), headers=headers)
        with response:
            metadata = dict(response.headers)
            if response.status_code == 200:
                body = response.content
                shown = body if value is None else bytes(value)
                _log.debug("node=%s type=%s key=%s value=%s", id, method, key, shown.hex())
                return body, metadata
            _log.debug("%r", response.content)
            raise RequestFailed(response.status_code, response.reason or "", metadata)

    def rest_get(self, id: str, key: int) -> tuple[bytes, Metadata]:
        """Read ``key`` from node ``id``; returns the value and response headers."""
        return self._rest(id, key, None)

    def rest_put(self, id: str, key: int, value: bytes) -> tuple[bytes, Metadata]:
        """Write ``value`` to node ``id``; returns the reply body and headers."""
        return self._rest(id, key, value)

    def _json(self, id: str, key: int, value: bytes | None) -> bytes:
        url = self.http[ID(id)]
        payload = {
            "Key": int(key),
            "Value": None if value is None else base64.b64encode(bytes(value)).decode("ascii"),
            "ClientID": str(self.id),
            "CommandID": self.cid,
        }
        response = self.session.post(
            url, data=json.dumps(payload), headers={"Content-Type": "json"}
        )
        with response:
            if response.status_code == 200:
                _log.debug("key=%s value=%s", key, response.content.hex())
                return response.content
            _log.debug("%r", response.content)
            raise RequestFailed(response.status_code, response.reason or "", dict(response.headers))

    def json_get(self, key: int) -> bytes:
        """Post a read command as JSON to this client's node."""
        return self._json(self.id, key, None)

    def json_put(self, key: int, value: bytes) -> bytes:
        """Post a write command as JSON to this client's node."""
        return self._json(self.id, key, value)

    def _gather(self, targets: list[ID], key: int) -> tuple[list[bytes], list[Metadata]]:
        if not targets:
            return [], []

        def attempt(ident: ID) -> tuple[bytes, Metadata] | None:
            try:
                return self._rest(ident, key, None)
            except (RequestFailed, requests.RequestException) as exc:
                _log.error("%s", exc)
                return None

        with ThreadPoolExecutor(max_workers=len(targets)) as pool:
            results = [r for r in pool.map(attempt, targets) if r is not None]
        return [v for v, _ in results], [m for _, m in results]

    def quorum_get(self, key: int) -> tuple[list[bytes], list[Metadata]]:
        """Read ``key`` concurrently from a majority of nodes."""
        return self.multi_get(self.n // 2 + 1, key)

    def multi_get(self, n: int, key: int) -> tuple[list[bytes], list[Metadata]]:
        """Read ``key`` concurrently from ``n`` nodes; failed reads are left out."""
        return self._gather(list(self.http)[: max(n, 0)], key)

    def local_quorum_get(self, key: int) -> tuple[list[bytes], list[Metadata]]:
        """Read ``key`` concurrently from half of the nodes in this client's zone."""
        zone = self.id.zone()
        local = [ident for ident in self.http if ident.zone() == zone]
        return self._gather(local[: self.local_n // 2], key)

    def quorum_put(self, key: int, value: bytes) -> None:
        """Write ``value`` concurrently to half of the nodes."""
        targets = list(self.http)[: self.n // 2]
        if not targets:
            return

        def attempt(ident: ID) -> None:
            try:
                self._rest(ident, key, value)
            except (RequestFailed, requests.RequestException) as exc:
                _log.error("%s", exc)

        with ThreadPoolExecutor(max_workers=len(targets)) as pool:
            list(pool.map(attempt, targets))

    def _history(self, url: str, key: int) -> list[Any]:
        response = self.session.get(f"{url}/history?key={int(key)}")
        with response:
            data = json.loads(response.content)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError("history is not a JSON list")
        return [None if item is None else base64.b64decode(item) for item in data]

    def consensus(self, key: int) -> bool:
        """Whether every node holds the same value history for ``key``."""
        histories: dict[ID, list[Any]] = {}
        for ident, url in self.http.items():
            histories[ident] = []
            try:
                histories[ident] = self._history(url, key)
            except (requests.RequestException, ValueError, TypeError, binascii.Error) as exc:
                _log.error("%s", exc)
                continue
            _log.debug("node=%s key=%s h=%s", ident, key, histories[ident])
        for column in itertools.zip_longest(*histories.values(), fillvalue=_MISSING):
            if len({v for v in column if v is not _MISSING}) > 1:
                return False
        return True

    def _admin(self, url: str) -> None:
        try:
            self.session.get(url).close()
        except requests.RequestException as exc:
            _log.error("%s", exc)

    def crash(self, id: str, seconds: int) -> None:
        """Stop node ``id`` for ``seconds``; forever when negative."""
        self._admin(f"{self.http[ID(id)]}/crash?t={int(seconds)}")

    def drop(self, source: str, target: str, seconds: int) -> None:
        """Make ``source`` drop every message to ``target`` for ``seconds``."""
        self._admin(f"{self.http[ID(source)]}/drop?id={target}&t={int(seconds)}")

    def partition(self, seconds: int, *args: str) -> None:
        """Cut the given nodes off from all others for ``seconds``."""
        nodes = [ID(a) for a in args]
        inside = set(nodes)
        for source in self.addrs:
            if source not in inside:
                for target in nodes:
                    self.drop(source, target, seconds)


class ChainClient(HTTPClient):
    """Writes to the head of the chain and reads from its tail."""

    def __init__(self, config: Config | None = None, session: requests.Session | None = None) -> None:
        super().__init__("", config, session)
        ids = sorted(self.addrs, key=id_sort_key)
        if not ids:
            raise ValueError("chain needs at least one node")
        self.head = ids[0]
        self.tail = ids[-1]

    def get(self, key: int) -> bytes:
        """Read ``key`` from the tail."""
        value, _ = self.rest_get(self.tail, key)
        return value

    def put(self, key: int, value: bytes) -> None:
        """Write ``value`` under ``key`` at the head."""
        self.cid += 1
        self.rest_put(self.head, key, value)