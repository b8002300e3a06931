"""Client and protocol level errors."""

from __future__ import annotations

import enum


class KafkaCode(enum.IntEnum):
    """Error codes reported by a remote Kafka broker."""

    UNKNOWN = -1
    NONE = 0
    OFFSET_OUT_OF_RANGE = 1
    CORRUPT_MESSAGE = 2
    UNKNOWN_TOPIC_OR_PARTITION = 3
    INVALID_MESSAGE_SIZE = 4
    LEADER_NOT_AVAILABLE = 5
    NOT_LEADER_FOR_PARTITION = 6
    REQUEST_TIMED_OUT = 7
    BROKER_NOT_AVAILABLE = 8
    REPLICA_NOT_AVAILABLE = 9
    MESSAGE_SIZE_TOO_LARGE = 10
    STALE_CONTROLLER_EPOCH = 11
    OFFSET_METADATA_TOO_LARGE = 12
    NETWORK_EXCEPTION = 13
    GROUP_LOAD_IN_PROGRESS = 14
    GROUP_COORDINATOR_NOT_AVAILABLE = 15
    NOT_COORDINATOR_FOR_GROUP = 16
    INVALID_TOPIC = 17
    RECORD_LIST_TOO_LARGE = 18
    NOT_ENOUGH_REPLICAS = 19
    NOT_ENOUGH_REPLICAS_AFTER_APPEND = 20
    INVALID_REQUIRED_ACKS = 21
    ILLEGAL_GENERATION = 22
    INCONSISTENT_GROUP_PROTOCOL = 23
    INVALID_GROUP_ID = 24
    UNKNOWN_MEMBER_ID = 25
    INVALID_SESSION_TIMEOUT = 26
    REBALANCE_IN_PROGRESS = 27
    INVALID_COMMIT_OFFSET_SIZE = 28
    TOPIC_AUTHORIZATION_FAILED = 29
    GROUP_AUTHORIZATION_FAILED = 30
    CLUSTER_AUTHORIZATION_FAILED = 31
    INVALID_TIMESTAMP = 32
    UNSUPPORTED_SASL_MECHANISM = 33
    ILLEGAL_SASL_STATE = 34
    UNSUPPORTED_VERSION = 35
    TOPIC_ALREADY_EXISTS = 36
    NOT_CONTROLLER = 41
    SASL_AUTHENTICATION_FAILED = 58

    @classmethod
    def from_value(cls, value: int) -> "KafkaCode":
        """Map a wire value to a code; values not known map to UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    def raise_for_error(self) -> None:
        """Raise KafkaError unless this code is NONE."""
        if self is not KafkaCode.NONE:
            raise KafkaError(self)


class SamsaError(Exception):
    """Base class of every error raised by the client."""


class NoConnectionForBroker(SamsaError):
    """The broker is in the metadata but has no open connection."""

    def __init__(self, broker_id: int) -> None:
        super().__init__(f"no connection for broker {broker_id}")
        self.broker_id = broker_id


class NoLeaderForTopicPartition(SamsaError):
    """The topic partition has no leader in the metadata."""

    def __init__(self, topic: str, partition: int) -> None:
        super().__init__(f"no leader for topic {topic!r} partition {partition}")
        self.topic = topic
        self.partition = partition


class EncodingError(SamsaError):
    """Data could not be encoded into the wire format."""


class ArgError(SamsaError):
    """An argument failed validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(SamsaError):
    """An error in the network layer."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"network error: {kind}")
        self.kind = kind


class KafkaError(SamsaError):
    """An error code reported by the broker."""

    def __init__(self, code: int) -> None:
        code = KafkaCode.from_value(int(code))
        super().__init__(f"kafka error: {code.name}")
        self.code = code


class DecodingUtf8Error(SamsaError):
    """Bytes could not be decoded as UTF-8."""


class ParsingError(SamsaError):
    """Received data could not be parsed."""

    def __init__(self, data: bytes = b"") -> None:
        super().__init__(f"could not parse {len(data)} bytes")
        self.data = bytes(data)


class MissingData(SamsaError):
    """Expected data was not present."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MetadataNeedsSync(SamsaError):
    """Cluster metadata is out of date."""


class AssignmentStrategyNotSupported(SamsaError):
    """The requested partition assignment strategy is not available."""

    def __init__(self, strategy: str) -> None:
        super().__init__(f"assignment strategy not supported: {strategy!r}")
        self.strategy = strategy


class LockError(SamsaError):
    """A shared resource could not be locked."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(SamsaError):
    """The requested resource does not exist."""


class MissingBrokerConfigOptions(SamsaError):
    """No broker configuration options were given."""


class IncorrectConnectionUsage(SamsaError):
    """A connection was used in a way it does not support."""


class InvalidSaslMechanism(SamsaError):
    """The SASL mechanism is not valid."""