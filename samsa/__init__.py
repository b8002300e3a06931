"""Kafka/Redpanda wire encoding, cluster metadata routing, and consumer and group logic."""

__version__ = "0.1.8"

__all__ = ["assignor", "consumer", "consumer_builder", "encode", "errors", "group", "metadata"]