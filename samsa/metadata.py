"""Cluster metadata: brokers, topics, partition leaders and connections."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Sequence, TypeVar, Union

from samsa.errors import DecodingUtf8Error, KafkaCode, MetadataNeedsSync

logger = logging.getLogger(__name__)

C = TypeVar("C")

TopicPartitions = dict[str, list[int]]

_PORT_MAX = (1 << 16) - 1


def _as_text(value: Union[str, bytes]) -> str:
    if isinstance(value, str):
        return value
    try:
        return bytes(value).decode("utf-8")
    except UnicodeDecodeError as err:
        logger.error("Error converting from UTF8 %r", err)
        raise DecodingUtf8Error(str(err)) from err


def _same_name(name: Union[str, bytes], wanted: str) -> bool:
    if isinstance(name, str):
        return name == wanted
    return bytes(name) == wanted.encode("utf-8")


@dataclass(frozen=True)
class BrokerAddress:
    """Host and port of a broker."""

    host: str
    port: int


@dataclass
class Broker:
    """A broker as described by the cluster metadata."""

    node_id: int
    host: Union[str, bytes]
    port: int
    rack: Optional[Union[str, bytes]] = None

    def addr(self) -> BrokerAddress:
        """Return the address to connect to this broker."""
        host = _as_text(self.host)
        if not 0 <= self.port <= _PORT_MAX:
            logger.error("Error decoding broker port from metadata: %d", self.port)
            raise MetadataNeedsSync(f"invalid broker port {self.port}")
        return BrokerAddress(host=host, port=self.port)


@dataclass
class Partition:
    """A partition of a topic and the brokers that hold it."""

    partition_index: int
    leader_id: int
    replica_nodes: list[int] = field(default_factory=list)
    isr_nodes: list[int] = field(default_factory=list)
    error_code: KafkaCode = KafkaCode.NONE


@dataclass
class Topic:
    """A topic and its partitions."""

    name: Union[str, bytes]
    partitions: list[Partition] = field(default_factory=list)
    is_internal: bool = False
    error_code: KafkaCode = KafkaCode.NONE


@dataclass
class ClusterMetadata(Generic[C]):
    """Brokers, topics and open broker connections of a cluster."""

    connection_params: Any = None
    broker_connections: dict[int, C] = field(default_factory=dict)
    brokers: list[Broker] = field(default_factory=list)
    topics: list[Topic] = field(default_factory=list)
    correlation_id: int = 1
    client_id: str = "samsa"
    topic_names: list[str] = field(default_factory=list)
    controller_id: int = -1

    def get_broker_by_id(self, broker_id: int) -> Optional[Broker]:
        return next((b for b in self.brokers if b.node_id == broker_id), None)

    def get_topic_partition_by_id(
        self, topic_name: str, partition_id: int
    ) -> Optional[Partition]:
        topic = next((t for t in self.topics if _same_name(t.name, topic_name)), None)
        if topic is None:
            return None
        return next(
            (p for p in topic.partitions if p.partition_index == partition_id), None
        )

    def get_leader_id_for_cluster(self) -> int:
        return self.controller_id

    def get_leader_id_for_topic_partition(
        self, topic_name: str, partition_id: int
    ) -> Optional[int]:
        partition = self.get_topic_partition_by_id(topic_name, partition_id)
        if partition is None:
            return None
        leader = self.get_broker_by_id(partition.leader_id)
        if leader is None:
            return None
        logger.debug(
            "Leader is %r for topic %s and partition %d", leader, topic_name, partition_id
        )
        return leader.node_id

    def update(
        self, brokers: Iterable[Broker], topics: Iterable[Topic], controller_id: int
    ) -> None:
        """Replace brokers, topics and controller with a fresh metadata view."""
        self.brokers = list(brokers)
        self.topics = list(topics)
        self.controller_id = controller_id

    def sync(self, connect: Callable[[BrokerAddress], C]) -> None:
        """Open a connection to every known broker using ``connect``."""
        logger.debug("Syncing metadata")
        for broker in self.brokers:
            self.broker_connections[broker.node_id] = connect(broker.addr())

    def get_leaders_for_topic_partitions(
        self, topic_partitions: Mapping[str, Sequence[int]]
    ) -> dict[int, TopicPartitions]:
        """Map each leading broker id to the topic partitions it leads."""
        placed = []
        for topic_name, partitions in topic_partitions.items():
            for partition in partitions:
                broker_id = self.get_leader_id_for_topic_partition(topic_name, partition)
                if broker_id is None:
                    raise MetadataNeedsSync(
                        f"no leader for topic {topic_name!r} partition {partition}"
                    )
                placed.append((topic_name, partition, broker_id))

        result: dict[int, TopicPartitions] = {}
        for topic_name, partition, broker_id in placed:
            owned = result.setdefault(broker_id, {}).setdefault(topic_name, [])
            if partition not in owned:
                owned.append(partition)
        return result

    def get_connections_for_topic_partitions(
        self, topic_partitions: Mapping[str, Sequence[int]]
    ) -> list[tuple[C, TopicPartitions]]:
        """Pair each leader's connection with the topic partitions it leads."""
        connections = []
        for broker_id, assignments in self.get_leaders_for_topic_partitions(
            topic_partitions
        ).items():
            conn = self.broker_connections.get(broker_id)
            if conn is None:
                logger.error("No broker connection for assignment %r", assignments)
                raise MetadataNeedsSync(f"no connection for broker {broker_id}")
            logger.debug("Broker %d is in charge of %r", broker_id, assignments)
            connections.append((conn, assignments))
        return connections