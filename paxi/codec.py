"""Message serialization over a byte stream in JSON or pickle form."""

from __future__ import annotations

import base64
import dataclasses
import io
import json
import pickle
from abc import ABC, abstractmethod
from typing import Any, BinaryIO


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


class Codec(ABC):
    """Writes objects to and reads objects from one stream."""

    scheme: str = ""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    @abstractmethod
    def encode(self, obj: Any) -> None:
        """Write one object to the stream."""

    @abstractmethod
    def decode(self) -> Any:
        """Read the next object from the stream."""

    def _flush(self) -> None:
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()


class JSONCodec(Codec):
    """One JSON document per line; bytes travel as base64 strings."""

    scheme = "json"

    def encode(self, obj: Any) -> None:
        text = json.dumps(obj, default=_json_default, separators=(",", ":")) + "\n"
        if isinstance(self._stream, io.TextIOBase):
            self._stream.write(text)
        else:
            self._stream.write(text.encode("utf-8"))
        self._flush()

    def decode(self) -> Any:
        line = self._stream.readline()
        if not line:
            raise EOFError("no more JSON documents in stream")
        return json.loads(line)


class PickleCodec(Codec):
    """Python objects in pickle form, type information included."""

    scheme = "pickle"

    def encode(self, obj: Any) -> None:
        pickle.dump(obj, self._stream)
        self._flush()

    def decode(self) -> Any:
        return pickle.load(self._stream)


_CODECS: dict[str, type[Codec]] = {
    JSONCodec.scheme: JSONCodec,
    PickleCodec.scheme: PickleCodec,
}


def new_codec(scheme: str, stream: BinaryIO) -> Codec:
    """Return the codec for ``scheme`` ("json" or "pickle") bound to ``stream``."""
    try:
        return _CODECS[scheme](stream)
    except KeyError:
        raise ValueError(f"unknown codec scheme {scheme!r}") from None