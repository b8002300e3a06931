"""Partition assignment strategies for consumer groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from samsa.errors import ArgError, AssignmentStrategyNotSupported

ROUND_ROBIN_PROTOCOL = "roundrobin"
RANGE_PROTOCOL = "range"
DEFAULT_VERSION = 3

TopicPartitionsInput = Union[
    Mapping[str, Sequence[int]], Iterable[Tuple[str, Sequence[int]]]
]


@dataclass
class PartitionAssignment:
    """Partitions of one topic given to a member."""

    topic_name: str
    partitions: list[int] = field(default_factory=list)


@dataclass
class MemberAssignment:
    """Everything assigned to one group member."""

    version: int = DEFAULT_VERSION
    partition_assignments: list[PartitionAssignment] = field(default_factory=list)
    user_data: Optional[bytes] = None


def assign(
    strategy: str,
    assigned_topic_partitions: TopicPartitionsInput,
    number_of_consumers: int,
) -> list[MemberAssignment]:
    """Split topic partitions among consumers using the named strategy."""
    if strategy != ROUND_ROBIN_PROTOCOL:
        raise AssignmentStrategyNotSupported(strategy)
    if isinstance(assigned_topic_partitions, Mapping):
        pairs = list(assigned_topic_partitions.items())
    else:
        pairs = list(assigned_topic_partitions)
    return _round_robin(pairs, number_of_consumers)


def _round_robin(
    pairs: list[Tuple[str, Sequence[int]]], number_of_consumers: int
) -> list[MemberAssignment]:
    """Lay out all partitions and deal them out to consumers in turn."""
    if number_of_consumers < 1:
        raise ArgError(f"number of consumers must be positive: {number_of_consumers}")
    pairs = sorted(pairs, key=lambda pair: pair[0])
    members = [
        MemberAssignment(
            partition_assignments=[PartitionAssignment(topic) for topic, _ in pairs]
        )
        for _ in range(number_of_consumers)
    ]
    for topic_index, (_, partitions) in enumerate(pairs):
        for partition_index, partition in enumerate(partitions):
            member = ((topic_index + 1) + (partition_index + 1)) % number_of_consumers
            members[member].partition_assignments[topic_index].partitions.append(partition)
    return members