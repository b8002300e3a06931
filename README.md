# samsa

Building blocks for Kafka and Redpanda clients, in plain Python with no
runtime dependencies:

- `samsa.encode`: serialisers for the Kafka wire format (big-endian
  integers, zig-zag varints, length-prefixed strings and byte strings, arrays).
- `samsa.errors`: the broker's numeric error codes as the `KafkaCode` enum,
  and an exception hierarchy rooted at `SamsaError`.
- `samsa.assignor`: round-robin partition assignment for consumer groups.
- `samsa.metadata`: cluster metadata (brokers, topics, partitions) and
  routing of topic partitions to the brokers that lead them.
- `samsa.consumer`: consumed-message and fetch-parameter types, a topic
  partitions builder, and the entries of fetch and offset commit requests.
- `samsa.consumer_builder`: consumer configuration and turning offset
  replies into starting offsets.
- `samsa.group`: consumer group configuration and the group leader's
  assignment step.

## Installation

```
pip install samsa
```

## Encoding

```python
from samsa.encode import encode_i16, encode_string, encode_strings, encode_varint

encode_i16(5)                    # b"\x00\x05"
encode_string("test")            # b"\x00\x04test"
encode_varint(11)                # b"\x16"
encode_strings(["abc", "defg"])  # i32 count, then each i16-prefixed string
```

`encode_nullable_bytes(None)` and `encode_nullable_str(None)` write an i32
length of -1; `encode_nullable_string(None)` writes an i16 length of -1.
Values out of range for their type, and strings longer than 32767 bytes,
raise `samsa.errors.EncodingError`.

## Errors

Every error the package raises derives from `samsa.errors.SamsaError`.
`KafkaCode.from_value(code)` maps a broker's numeric code to a member
(unknown values map to `KafkaCode.UNKNOWN`), and `raise_for_error()` raises
`KafkaError` for anything other than `KafkaCode.NONE`.

## Assigning partitions to a group

```python
from samsa.assignor import assign

members = assign("roundrobin", [("t0", [0, 1, 2]), ("t1", [0, 1, 2])], 2)
# member 0: t0 [0, 2], t1 [1]
# member 1: t0 [1],    t1 [0, 2]
```

Topics are sorted by name and every member gets a `PartitionAssignment` for
every topic. Any strategy other than `"roundrobin"` raises
`AssignmentStrategyNotSupported`; fewer than one consumer raises `ArgError`.

`samsa.group.build_assignments(protocol_name, group_topic_partitions, member_ids)`
does the same for a list of member ids and returns `(member_id, assignment)`
pairs. `topic_partitions_from_assignment(assignment, group_topic_partitions)`
turns the assignment a member received back into topic partitions to consume,
raising `MetadataNeedsSync` for a topic the group does not know.

## Topic partitions and metadata

```python
from samsa.consumer import TopicPartitionsBuilder
from samsa.metadata import Broker, ClusterMetadata, Partition, Topic

topic_partitions = TopicPartitionsBuilder().assign("purchases", [0, 1, 2, 3]).build()

cluster = ClusterMetadata()
cluster.update(
    brokers=[Broker(1, "localhost", 9092), Broker(2, "localhost", 9093)],
    topics=[Topic("purchases", [
        Partition(0, leader_id=2), Partition(1, leader_id=1),
        Partition(2, leader_id=2), Partition(3, leader_id=1),
    ])],
    controller_id=1,
)
cluster.get_leaders_for_topic_partitions(topic_partitions)
# {2: {"purchases": [0, 2]}, 1: {"purchases": [1, 3]}}
```

A partition without a known leader raises `MetadataNeedsSync`.
`cluster.sync(connect)` calls `connect(broker.addr())` for every broker and
stores the results in `broker_connections`; afterwards
`get_connections_for_topic_partitions(...)` pairs each leader's connection
with the partitions it leads.

## Consumer configuration and offsets

```python
from samsa.consumer_builder import ConsumerConfig, offsets_from_group

config = ConsumerConfig(assigned_topic_partitions=topic_partitions)
config = config.with_fetch(max_bytes=3_000_000, max_partition_bytes=3_000_000)
config = config.seek(offsets_from_group([("purchases", 0, -1, 0)], ["purchases"]))
# config.offsets == {("purchases", 0): 0}
```

`with_fetch` and `ConsumerGroupConfig.with_options` return new configs and
reject unknown option names with `ArgError`. `offsets_from_group` and
`offsets_from_list` raise `KafkaError` for an entry with a non-zero error code
and `MetadataNeedsSync` for a topic not in the known list.
`samsa.consumer.fetch_entries` and `commit_entries` list the per-partition
entries of fetch and offset commit requests; a partition with no known offset
is fetched from 0.

## What the package does not do

It opens no network connections and has no request or response types for the
broker protocol: there is no producer, no consumer stream, no group
membership loop (join, sync, heartbeat), no topic administration, and no TLS
or SASL. Connections are whatever the caller's `connect` function returns to
`ClusterMetadata.sync`.

## Running the tests

```
pip install -e ".[test]"
pytest
```