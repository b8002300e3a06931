"""Consumer configuration and offset seeking."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence, Tuple, Union

from samsa.consumer import FetchParams, PartitionOffsets, TopicPartitions
from samsa.errors import (
    ArgError,
    DecodingUtf8Error,
    KafkaCode,
    KafkaError,
    MetadataNeedsSync,
)

logger = logging.getLogger(__name__)

NO_COMMITTED_OFFSET = -1

Name = Union[str, bytes]
OffsetEntry = Tuple[Name, int, int, int]


@dataclass
class ConsumerConfig:
    """Fetch parameters, topic partition assignment and starting offsets.

    The configuring methods return a new config and leave this one as it is.
    """

    assigned_topic_partitions: TopicPartitions = field(default_factory=dict)
    fetch_params: FetchParams = field(default_factory=FetchParams)
    offsets: PartitionOffsets = field(default_factory=dict)

    def seek(self, offsets: Mapping[Tuple[str, int], int]) -> "ConsumerConfig":
        """Return a config whose offsets are replaced by ``offsets``."""
        logger.debug("Seeking offsets to given values")
        return dataclasses.replace(self, offsets=dict(offsets))

    def with_fetch(self, **kwargs: object) -> "ConsumerConfig":
        """Return a config with the named fetch parameters changed."""
        known = {f.name for f in dataclasses.fields(FetchParams)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ArgError(f"unknown fetch parameters: {', '.join(unknown)}")
        params = dataclasses.replace(self.fetch_params, **kwargs)
        return dataclasses.replace(self, fetch_params=params)


def _decode_name(name: Name) -> str:
    if isinstance(name, str):
        return name
    try:
        return bytes(name).decode("utf-8")
    except UnicodeDecodeError as err:
        logger.error("Error converting from UTF8 %r", err)
        raise DecodingUtf8Error(str(err)) from err


def _known_topic(name: Name, known_topics: Sequence[str]) -> str:
    topic = _decode_name(name)
    if topic not in known_topics:
        raise MetadataNeedsSync(f"topic not in metadata: {topic!r}")
    return topic


def _check(error_code: int) -> None:
    code = KafkaCode.from_value(int(error_code))
    if code is not KafkaCode.NONE:
        raise KafkaError(code)


def offsets_from_group(
    entries: Iterable[OffsetEntry], known_topics: Sequence[str]
) -> PartitionOffsets:
    """Build offsets from (topic, partition, committed offset, error code) entries.

    A partition without a committed offset starts from 0.
    """
    known = list(known_topics)
    offsets: PartitionOffsets = {}
    for name, partition, committed, error_code in entries:
        _check(error_code)
        topic = _known_topic(name, known)
        if committed == NO_COMMITTED_OFFSET:
            logger.debug(
                "No offset found for topic %s partition %d, initializing to 0",
                topic,
                partition,
            )
            committed = 0
        offsets[(topic, partition)] = committed
    return offsets


def offsets_from_list(
    entries: Iterable[OffsetEntry], known_topics: Sequence[str]
) -> PartitionOffsets:
    """Build offsets from (topic, partition, offset, error code) list-offsets entries."""
    known = list(known_topics)
    offsets: PartitionOffsets = {}
    for name, partition, offset, error_code in entries:
        _check(error_code)
        topic = _known_topic(name, known)
        offsets[(topic, partition)] = offset
    return offsets