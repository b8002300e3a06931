"""Consumer-side types and request building for fetching records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

DEFAULT_CORRELATION_ID = 1
DEFAULT_CLIENT_ID = "samsa"

DEFAULT_MAX_WAIT_MS = 200
DEFAULT_MIN_BYTES = 100
DEFAULT_MAX_BYTES = 30000
DEFAULT_MAX_PARTITION_BYTES = 20000
DEFAULT_ISOLATION_LEVEL = 0

COMMIT_METADATA = "metadata"

TopicPartitionKey = tuple[str, int]
TopicPartitions = dict[str, list[int]]
PartitionOffsets = dict[TopicPartitionKey, int]


@dataclass(frozen=True)
class ConsumeMessage:
    """A record read from a topic partition."""

    key: bytes
    value: bytes
    offset: int
    timestamp: int
    topic_name: str
    partition_index: int


@dataclass
class FetchParams:
    """Parameters used for every fetch request."""

    correlation_id: int = DEFAULT_CORRELATION_ID
    client_id: str = DEFAULT_CLIENT_ID
    max_wait_ms: int = DEFAULT_MAX_WAIT_MS
    min_bytes: int = DEFAULT_MIN_BYTES
    max_bytes: int = DEFAULT_MAX_BYTES
    max_partition_bytes: int = DEFAULT_MAX_PARTITION_BYTES
    isolation_level: int = DEFAULT_ISOLATION_LEVEL


class TopicPartitionsBuilder:
    """Build a topic to partitions assignment for consumers.

    Assigning the same topic again replaces its earlier partitions.
    """

    def __init__(self) -> None:
        self._data: TopicPartitions = {}

    def assign(self, topic: str, partitions: Sequence[int]) -> "TopicPartitionsBuilder":
        """Assign ``partitions`` of ``topic`` and return the builder."""
        self._data[topic] = list(partitions)
        return self

    def build(self) -> TopicPartitions:
        """Return the finished assignment."""
        return {topic: list(partitions) for topic, partitions in self._data.items()}


def fetch_entries(
    topic_partitions: Mapping[str, Sequence[int]],
    offsets: Mapping[TopicPartitionKey, int],
    max_partition_bytes: int,
) -> list[tuple[str, int, int, int]]:
    """List (topic, partition, offset, max bytes) for a fetch request.

    Partitions without a known offset start from 0.
    """
    return [
        (topic, partition, offsets.get((topic, partition), 0), max_partition_bytes)
        for topic, partitions in topic_partitions.items()
        for partition in partitions
    ]


def commit_entries(
    offsets: Mapping[TopicPartitionKey, int],
) -> list[tuple[str, int, int, str]]:
    """List (topic, partition, offset, metadata) for an offset commit request."""
    return [
        (topic, partition, offset, COMMIT_METADATA)
        for (topic, partition), offset in offsets.items()
    ]