# paxi

Building blocks for working with replicated key-value stores:

- `paxi.identity`: node identifiers `ID` in `zone.node` form (`new_id`,
  `ID.zone()`, `ID.node()`, `id_sort_key`),
- `paxi.ballot`: `Ballot` numbers that pack a 32-bit round counter with a
  16-bit zone and a 16-bit node (`new_ballot`, `ballot_from_string`,
  `next_ballot`, `leader_id`),
- `paxi.containers`: `Stack`, `Queue`, and the thread-safe `CMap`, `CSet`
  and two-level `MMap`,
- `paxi.graph`: a directed `Graph` with BFS, DFS, reverse BFS, transpose,
  cycle detection and strongly connected components (Tarjan),
- `paxi.hash_ring`: an MD5-keyed consistent `HashRing`,
- `paxi.codec`: stream codecs, `new_codec("json", stream)` (one JSON document
  per line, bytes as base64) and `new_codec("pickle", stream)`,
- `paxi.config`: cluster configuration `Config` and benchmark settings
  `Bconfig`, read with `load_config(path)` and written with `Config.save(path)`,
- `paxi.db`: `Command` and an in-memory `Database` that can keep the full value
  history of each key (`Database(multiversion=True)`), plus `conflict` and
  `conflict_batch`,
- message dataclasses for ABD (`paxi.abd`), chain replication (`paxi.chain`),
  Dynamo-style replication (`paxi.dynamo`), EPaxos (`paxi.epaxos`, with
  `Instance` and `Status`) and per-slot Paxos (`paxi.hpaxos`),
- `paxi.blockchain`: a proof-of-work `Block` and `genesis()`,
- `paxi.client`: `HTTPClient` for the nodes' REST API, with quorum reads and
  writes, a `consensus` check and fault injection (`crash`, `drop`,
  `partition`), and `ChainClient`, which writes to the head of the chain and
  reads from its tail,
- `paxi.cli`: the `paxi` command line client.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Using the library

Identifiers and ballots:

```python
from paxi.identity import new_id
from paxi.ballot import new_ballot

node = new_id(2, 1)          # "2.1"
node.zone(), node.node()     # (2, 1)

b = new_ballot(0, node)
b = b.next(node)             # ballots are immutable; next() returns a new one
b.n()                        # 1
b.id()                       # "2.1"
str(b)                       # "1.2.1"
```

A graph with cycle detection:

```python
from paxi.graph import Graph

g = Graph()
g.add_edge(1, 2)
g.add_edge(1, 3)
g.add_edge(2, 4)
g.bfs(1)                     # [1, 2, 3, 4]
g.add_edge(4, 3)
g.add_edge(3, 2)
g.cyclic()                   # True
```

A consistent hash ring:

```python
from paxi.hash_ring import HashRing

ring = HashRing()
ring.insert("a", b"a")
ring.insert("b", b"b")
ring.get(b"some key")        # "a" or "b"
ring.next("a")               # "b"
```

The key-value database:

```python
from paxi.db import Command, Database

db = Database(multiversion=True)
db.execute(Command(key=1, value=b"x"))   # None, the value before
db.execute(Command(key=1, value=b"y"))   # b"x"
db.history(1)                            # [b"x", b"y"]
```

Talking to a cluster:

```python
from paxi.config import load_config
from paxi.client import HTTPClient

config = load_config("config.json")
client = HTTPClient("1.1", config)
client.put(7, b"hello")
client.get(7)                # b"hello"
client.consensus(7)          # True when every node has the same history
```

A configuration file is JSON with node addresses under `address`, HTTP
addresses under `http_address`, and optional `policy`, `threshold`,
`thrifty`, `buffer_size`, `chan_buffer_size`, `multiversion` and `benchmark`
entries; anything left out keeps its default.

## The command line client

The `paxi` command talks to a running cluster through its HTTP API. Given a
command it runs it once; without one it opens a prompt (`paxi $ `) and reads
commands line by line until `exit` or end of input.

```
paxi -config config.json -id 1.1
paxi -config config.json -algorithm chain get 7
```

Options: `-id` (node this client talks to; empty picks a random node),
`-algorithm` (`chain` to use `ChainClient`), `-config` (default
`config.json`), `-log_dir` and `-log_level`. Logs go to a file named after
the program and process id in `-log_dir`; warnings and errors also go to
stderr.

Commands:

```
get KEY
put KEY VALUE
consensus KEY              compare the value history of KEY on every node
crash ID SECONDS           stop node ID for a while
partition SECONDS IDS...   cut the listed nodes off from the rest
help
exit
```

## What this package does not do

- It has no replica or server: nothing here runs a node, serves the HTTP API
  or carries messages between nodes. The clients need a cluster that is
  already running.
- The protocol modules hold message and instance types only; no code here
  handles those messages or runs the protocols.
- `Bconfig` holds benchmark settings, but there is no benchmark driver and no
  linearizability checker.