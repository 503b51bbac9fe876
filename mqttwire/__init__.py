"""MQTT v5 codec: wire primitives, properties, reason codes, publish, ack and subscription packets."""

__version__ = "0.1.0"

__all__ = [
    "acks",
    "buffer",
    "packet",
    "property",
    "reason_codes",
    "rng",
    "subscriptions",
    "types",
]