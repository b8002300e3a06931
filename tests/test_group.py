import pytest

from samsa.assignor import MemberAssignment, PartitionAssignment, ROUND_ROBIN_PROTOCOL
from samsa.errors import (
    ArgError,
    AssignmentStrategyNotSupported,
    DecodingUtf8Error,
    MetadataNeedsSync,
)
from samsa.group import (
    ConsumerGroupConfig,
    build_assignments,
    topic_partitions_from_assignment,
)

TOPICS = {"t0": [0, 1, 2], "t1": [0, 1, 2]}


def make_config():
    return ConsumerGroupConfig(connection_params=[], group_id="Squad")


def test_config_defaults():
    config = make_config()
    assert config.session_timeout_ms == 10000
    assert config.rebalance_timeout_ms == 10000
    assert config.retention_time_ms == 100000
    assert config.client_id == "samsa"


def test_with_options_group_settings():
    config = make_config()
    changed = config.with_options(session_timeout_ms=5000, retention_time_ms=1000)
    assert changed.session_timeout_ms == 5000
    assert changed.retention_time_ms == 1000
    assert config.session_timeout_ms == 10000


def test_with_options_fetch_settings_go_to_fetch_params():
    config = make_config()
    changed = config.with_options(max_bytes=3000000, client_id="other", correlation_id=7)
    assert changed.fetch_params.max_bytes == 3000000
    assert changed.fetch_params.client_id == "other"
    assert changed.fetch_params.correlation_id == 7
    assert changed.client_id == config.client_id
    assert config.fetch_params.max_bytes == 30000


def test_with_options_unknown_raises():
    with pytest.raises(ArgError):
        make_config().with_options(not_an_option=1)


def test_build_assignments_round_robin():
    result = build_assignments(ROUND_ROBIN_PROTOCOL, TOPICS, [b"m0", b"m1"])
    assert [member for member, _ in result] == [b"m0", b"m1"]
    first = result[0][1].partition_assignments
    second = result[1][1].partition_assignments
    assert first[0].topic_name == "t0"
    assert first[0].partitions == [0, 2]
    assert first[1].topic_name == "t1"
    assert first[1].partitions == [1]
    assert second[0].partitions == [1]
    assert second[1].partitions == [0, 2]


def test_build_assignments_accepts_bytes_protocol():
    result = build_assignments(b"roundrobin", TOPICS, [b"m0"])
    assert result[0][1].partition_assignments[0].partitions == [0, 1, 2]


def test_build_assignments_unsupported_strategy():
    with pytest.raises(AssignmentStrategyNotSupported):
        build_assignments("range", TOPICS, [b"m0"])


def test_build_assignments_bad_utf8():
    with pytest.raises(DecodingUtf8Error):
        build_assignments(b"\xff\xfe", TOPICS, [b"m0"])


def test_assignment_round_trip_covers_all_partitions():
    result = build_assignments(ROUND_ROBIN_PROTOCOL, TOPICS, [b"a", b"b", b"c"])
    combined = {topic: [] for topic in TOPICS}
    for _, assignment in result:
        for topic, partitions in topic_partitions_from_assignment(
            assignment, TOPICS
        ).items():
            combined[topic].extend(partitions)
    assert {t: sorted(p) for t, p in combined.items()} == TOPICS


def test_topic_partitions_from_none():
    assert topic_partitions_from_assignment(None, TOPICS) == {}


def test_topic_partitions_from_bytes_names():
    assignment = MemberAssignment(
        partition_assignments=[PartitionAssignment(b"t1", [2])]
    )
    assert topic_partitions_from_assignment(assignment, TOPICS) == {"t1": [2]}


def test_topic_partitions_unknown_topic():
    assignment = MemberAssignment(
        partition_assignments=[PartitionAssignment("elsewhere", [0])]
    )
    with pytest.raises(MetadataNeedsSync):
        topic_partitions_from_assignment(assignment, TOPICS)