# orderlab

Small building blocks for working with orders: domain models and
factories, thread-safe in-memory stores and buffers, shard routing with
MurmurHash3, a generator-based number pipeline, JSON-line logging,
request metrics in the Prometheus text format, JSON request handlers for
orders, Kafka client settings, and a small HTTP key/value cache server.
Everything runs on the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `orderlab.domain` | `Order` (with `to_dict`), `OrderFactory` and the generators `SeqGen`, `RndGen`, `Clock`, `UUIDv4Generator`; `new_default_factory()` makes random user ids below 1000, a UUID description and the current time |
| `orderlab.events` | `EventType`, `Event` (with `to_json`), `EventFactory` and `new_default_factory(start)` with sequential ids from `start` |
| `orderlab.emit_msg` | `Command`, `Result` and `handle(cmd)`, which raises `CountMustBePositiveError` when `count` is not above zero |
| `orderlab.buffers` | `RingBuffer`, which writes slots in a circle starting at the first, and `WindowBuffer`, which keeps the latest `size` values oldest first (starting out filled with empty strings) |
| `orderlab.order_cache` | Order stores keyed by id: `LockedOrderRepo` (one lock), `ReadWriteLockedOrderRepo` (readers-writer lock), `ShardedOrderRepo` (locked shards chosen by `id % shards_count`) and `DictOrderRepo` (plain dict) |
| `orderlab.concurrency` | `iterate`, `iterate_threads`, `iterate_locked` sum `0 .. counter-1` in different ways; `LockedMap`; `operate(deadline, limit)` sums until `time.monotonic()` reaches the deadline and then raises `DeadlineExceeded` carrying the partial sum |
| `orderlab.pipeline` | Stages `source`, `parse`, `sink`, `run_pipeline`, plus generic `process` and `drain`; failures are raised as `PipelineError` |
| `orderlab.leaky_cache` | `LeakyCache`, a byte-value cache whose entries expire `ttl` seconds after being set; `get` raises `CacheNoValueError` for missing or expired keys |
| `orderlab.metrics` | `Metrics`: per-handler request counters and duration histograms, readable with `request_count` and `bucket_counts` and rendered with `render()` |
| `orderlab.logger` | `Logger` writing one JSON object per line, `new_logger` for the process-wide logger, `bind_logger` to route logging in a context, and module-level `infow` / `errorw` |
| `orderlab.shard_manager` | `murmur3_32`, `murmur3_shard_fn`, `ShardManager` (`shard_index`, `shard_index_from_id`, `pick`); `pick` raises `ShardIndexOutOfRangeError` for an unknown index |
| `orderlab.order_api` | The `OrderRepository` protocol and `OrderHandler`, whose `create`, `get_by_id`, `list_by_user_id` and `list_by_id` take a JSON body and return `(status, body)` |
| `orderlab.kafka_config` | `BrokerConfig`, `ClientConfig`, the enums `Partitioner`, `RequiredAcks`, `Compression`, `prepare_producer_config(*options)` and the `with_*` options |
| `orderlab.cache_server` | `CacheApp` with `handle_set`, `handle_get` and `handle_metrics`, `make_server` and `main` |

## Examples

Routing keys to shards:

```python
from orderlab.shard_manager import ShardManager, murmur3_32, murmur3_shard_fn

manager = ShardManager(murmur3_shard_fn(4), ["db0", "db1", "db2", "db3"])
shard = manager.pick(manager.shard_index("42"))   # the same key always lands on the same shard
digest = murmur3_32(b"42", 0)
```

Running the number pipeline in code:

```python
from orderlab.pipeline import PipelineError, run_pipeline

run_pipeline(["1", "12", "25"])          # 38
try:
    run_pipeline(["1", "150"])
except PipelineError as exc:
    print(exc)                           # 150 is bigger than 100
```

Building producer settings from options:

```python
from orderlab.kafka_config import (
    RequiredAcks,
    prepare_producer_config,
    with_idempotent,
    with_max_retries,
    with_required_acks,
)

config = prepare_producer_config(
    with_idempotent(),
    with_required_acks(RequiredAcks.WAIT_FOR_ALL),
    with_max_retries(5),
)
```

## Commands

Sum numbers through the pipeline. With no arguments it uses `1 12 25`;
any number above 100 makes it print an error and exit with status 1:

```
orderlab-pipeline
orderlab-pipeline 4 8 15
```

Serve the cache over HTTP (`POST /set` with a JSON body
`{"Key": ..., "Value": ...}`, `GET /get?key=...`, `GET /metrics`).
It listens on port 8080 by default; `--host` and `--port` change that:

```
orderlab-cache-server
orderlab-cache-server --port 9000
```

## What it does not do

- `OrderHandler` only turns request bodies into calls on an
  `OrderRepository` you supply. The package ships no database-backed
  repository and no HTTP server for the order endpoints.
- `orderlab.kafka_config` only holds settings. There is no producer or
  consumer that connects to Kafka brokers.
- The cache server keeps its data in memory only; nothing is persisted,
  and it exports no traces.