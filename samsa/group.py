"""Consumer group configuration and partition assignment handling."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from samsa.assignor import MemberAssignment, assign
from samsa.consumer import (
    DEFAULT_CLIENT_ID,
    DEFAULT_CORRELATION_ID,
    FetchParams,
    TopicPartitions,
)
from samsa.errors import ArgError, DecodingUtf8Error, MetadataNeedsSync

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOL_TYPE = "consumer"
DEFAULT_RETENTION_TIME_MS = 100000
DEFAULT_SESSION_TIMEOUT_MS = 10000
DEFAULT_REBALANCE_TIMEOUT_MS = 10000

Name = Union[str, bytes]

_GROUP_OPTIONS = frozenset(
    {"retention_time_ms", "session_timeout_ms", "rebalance_timeout_ms"}
)
_FETCH_OPTIONS = frozenset(f.name for f in dataclasses.fields(FetchParams))


def _decode(name: Name) -> str:
    if isinstance(name, str):
        return name
    try:
        return bytes(name).decode("utf-8")
    except UnicodeDecodeError as err:
        logger.error("Error converting from UTF8 %r", err)
        raise DecodingUtf8Error(str(err)) from err


@dataclass
class ConsumerGroupConfig:
    """Settings of one consumer group member.

    The configuring methods return a new config and leave this one as it is.
    """

    connection_params: Any
    group_id: str
    group_topic_partitions: TopicPartitions = field(default_factory=dict)
    correlation_id: int = DEFAULT_CORRELATION_ID
    client_id: str = DEFAULT_CLIENT_ID
    session_timeout_ms: int = DEFAULT_SESSION_TIMEOUT_MS
    rebalance_timeout_ms: int = DEFAULT_REBALANCE_TIMEOUT_MS
    retention_time_ms: int = DEFAULT_RETENTION_TIME_MS
    fetch_params: FetchParams = field(default_factory=FetchParams)

    def with_options(self, **kwargs: object) -> "ConsumerGroupConfig":
        """Return a config with the named options changed.

        Timeouts and retention apply to the group; every fetch parameter,
        correlation id and client id included, applies to fetching.
        """
        unknown = sorted(set(kwargs) - _GROUP_OPTIONS - _FETCH_OPTIONS)
        if unknown:
            raise ArgError(f"unknown consumer group options: {', '.join(unknown)}")
        group = {k: v for k, v in kwargs.items() if k in _GROUP_OPTIONS}
        fetch = {k: v for k, v in kwargs.items() if k in _FETCH_OPTIONS}
        params = dataclasses.replace(self.fetch_params, **fetch)
        return dataclasses.replace(self, fetch_params=params, **group)


def build_assignments(
    protocol_name: Name,
    group_topic_partitions: Mapping[str, Sequence[int]],
    member_ids: Sequence[bytes],
) -> list[tuple[bytes, MemberAssignment]]:
    """Assign the group's partitions to its members, as the group leader does.

    Returns (member id, assignment) pairs in the order the members are given.
    """
    strategy = _decode(protocol_name)
    members = list(member_ids)
    assignments = assign(strategy, dict(group_topic_partitions), len(members))
    return list(zip(members, assignments))


def topic_partitions_from_assignment(
    assignment: Optional[MemberAssignment],
    group_topic_partitions: Mapping[str, Sequence[int]],
) -> TopicPartitions:
    """Turn a member's assignment into topic partitions to consume."""
    result: TopicPartitions = {}
    if assignment is None:
        return result
    for partition_assignment in assignment.partition_assignments:
        topic = _decode(partition_assignment.topic_name)
        if topic not in group_topic_partitions:
            raise MetadataNeedsSync(f"assigned topic not in group: {topic!r}")
        result[topic] = list(partition_assignment.partitions)
    return result