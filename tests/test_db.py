import base64
import json

from paxi.db import Command, Database, conflict, conflict_batch
from paxi.identity import ID


def test_command_kinds():
    assert Command().empty()
    assert not Command(key=1).empty()
    assert Command(key=1).is_read()
    assert Command(key=1, value=b"x").is_write()
    assert not Command(key=1, value=b"x").is_read()


def test_command_str():
    assert str(Command(key=1, client_id=ID("1.1"), command_id=2)) == "Get{key=1 id=1.1 cid=2}"
    text = str(Command(key=1, value=b"\x01\xab", client_id=ID("1.1"), command_id=2))
    assert text.startswith("Put{key=1 value=01ab ")


def test_execute_returns_previous_value():
    db = Database()
    assert db.execute(Command(key=1, value=b"a")) is None
    assert db.execute(Command(key=1, value=b"b")) == b"a"
    assert db.get(1) == b"b"


def test_read_does_not_write():
    db = Database()
    db.put(1, b"a")
    before = db.version(1)
    assert db.execute(Command(key=1)) == b"a"
    assert db.version(1) == before
    assert db.get(1) == b"a"


def test_version_counts_writes():
    db = Database()
    db.put(1, b"a")
    db.put(2, b"b")
    db.put(3, None)
    assert db.version(1) == 2


def test_history_only_when_multiversion():
    multi = Database(multiversion=True)
    single = Database()
    for value in (b"a", b"b", b"c"):
        multi.put(5, value)
        single.put(5, value)
    assert multi.history(5) == [b"a", b"b", b"c"]
    assert single.history(5) == []
    assert multi.history(6) == []


def test_str_round_trips_values():
    db = Database()
    db.put(1, b"a")
    db.put(2, b"bc")
    data = json.loads(str(db))
    assert {k: base64.b64decode(v) for k, v in data.items()} == {"1": b"a", "2": b"bc"}


def test_conflict():
    read = Command(key=1)
    write = Command(key=1, value=b"x")
    other = Command(key=2, value=b"x")
    assert conflict(read, write)
    assert conflict(write, write)
    assert not conflict(read, Command(key=1))
    assert not conflict(write, other)


def test_conflict_batch():
    a = [Command(key=1), Command(key=2)]
    b = [Command(key=3, value=b"x"), Command(key=2, value=b"y")]
    assert conflict_batch(a, b)
    assert not conflict_batch(a, [Command(key=1), Command(key=4, value=b"z")])
    assert not conflict_batch([], b)