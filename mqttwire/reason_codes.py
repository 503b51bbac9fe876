"""MQTT v5 reason codes and their human-readable descriptions."""

from __future__ import annotations

from enum import IntEnum


class ReasonCode(IntEnum):
    """Reason codes carried in acknowledgement and disconnect packets."""

    SUCCESS = 0x00
    GRANTED_QOS1 = 0x01
    GRANTED_QOS2 = 0x02
    DISCONNECT_WITH_WILL_MESSAGE = 0x04
    NO_MATCHING_SUBSCRIBERS = 0x10
    NO_SUBSCRIPTION_EXISTED = 0x11
    CONTINUE_AUTH = 0x18
    RE_AUTHENTICATE = 0x19
    UNSPECIFIED_ERROR = 0x80
    MALFORMED_PACKET = 0x81
    PROTOCOL_ERROR = 0x82
    IMPLEMENTATION_SPECIFIC_ERROR = 0x83
    UNSUPPORTED_PROTOCOL_VERSION = 0x84
    CLIENT_ID_NOT_VALID = 0x85
    BAD_USER_NAME_OR_PASSWORD = 0x86
    NOT_AUTHORIZED = 0x87
    SERVER_UNAVAILABLE = 0x88
    SERVER_BUSY = 0x89
    BANNED = 0x8A
    SERVER_SHUTTING_DOWN = 0x8B
    BAD_AUTH_METHOD = 0x8C
    KEEP_ALIVE_TIMEOUT = 0x8D
    SESSION_TAKE_OVER = 0x8E
    TOPIC_FILTER_INVALID = 0x8F
    TOPIC_NAME_INVALID = 0x90
    PACKET_IDENTIFIER_IN_USE = 0x91
    PACKET_IDENTIFIER_NOT_FOUND = 0x92
    RECEIVE_MAXIMUM_EXCEEDED = 0x93
    TOPIC_ALIAS_INVALID = 0x94
    PACKET_TOO_LARGE = 0x95
    MESSAGE_RATE_TOO_HIGH = 0x96
    QUOTA_EXCEEDED = 0x97
    ADMINISTRATIVE_ACTION = 0x98
    PAYLOAD_FORMAT_INVALID = 0x99
    RETAIN_NOT_SUPPORTED = 0x9A
    QOS_NOT_SUPPORTED = 0x9B
    USE_ANOTHER_SERVER = 0x9C
    SERVER_MOVED = 0x9D
    SHARED_SUBSCRIPTION_NOT_SUPPORTED = 0x9E
    CONNECTION_RATE_EXCEEDED = 0x9F
    MAXIMUM_CONNECT_TIME = 0xA0
    SUBSCRIPTION_IDENTIFIERS_NOT_SUPPORTED = 0xA1
    WILDCARD_SUBSCRIPTION_NOT_SUPPORTED = 0xA2
    TIMER_NOT_SUPPORTED = 0xFD
    BUFF_ERROR = 0xFE
    NETWORK_ERROR = 0xFF

    @classmethod
    def from_byte(cls, value: int) -> "ReasonCode":
        """Map a received byte to a reason code.

        Bytes without a known meaning, and the connection-rate code, map to
        NETWORK_ERROR.
        """
        if value == cls.CONNECTION_RATE_EXCEEDED:
            return cls.NETWORK_ERROR
        try:
            return cls(value)
        except ValueError:
            return cls.NETWORK_ERROR

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    def __str__(self) -> str:
        return _MESSAGES[self]


_R = ReasonCode

_MESSAGES: dict[ReasonCode, str] = {
    _R.SUCCESS: "Operation was successful!",
    _R.GRANTED_QOS1: "Granted QoS level 1!",
    _R.GRANTED_QOS2: "Granted QoS level 2!",
    _R.DISCONNECT_WITH_WILL_MESSAGE: "Disconnected with Will message!",
    _R.NO_MATCHING_SUBSCRIBERS: "No matching subscribers on broker!",
    _R.NO_SUBSCRIPTION_EXISTED: "Subscription not exist!",
    _R.CONTINUE_AUTH: "Broker asks for more AUTH packets!",
    _R.RE_AUTHENTICATE: "Broker requires re-authentication!",
    _R.UNSPECIFIED_ERROR: "Unspecified error!",
    _R.MALFORMED_PACKET: "Malformed packet sent!",
    _R.PROTOCOL_ERROR: "Protocol specific error!",
    _R.IMPLEMENTATION_SPECIFIC_ERROR: "Implementation specific error!",
    _R.UNSUPPORTED_PROTOCOL_VERSION: "Unsupported protocol version!",
    _R.CLIENT_ID_NOT_VALID: "Client sent not valid identification",
    _R.BAD_USER_NAME_OR_PASSWORD: "Authentication error, username of password not valid!",
    _R.NOT_AUTHORIZED: "Client not authorized!",
    _R.SERVER_UNAVAILABLE: "Server unavailable!",
    _R.SERVER_BUSY: "Server is busy!",
    _R.BANNED: "Client is banned on broker!",
    _R.SERVER_SHUTTING_DOWN: "Server is shutting down!",
    _R.BAD_AUTH_METHOD: "Provided bad authentication method!",
    _R.KEEP_ALIVE_TIMEOUT: "Client reached timeout",
    _R.SESSION_TAKE_OVER: "Took over session!",
    _R.TOPIC_FILTER_INVALID: "Topic filter is not valid!",
    _R.TOPIC_NAME_INVALID: "Topic name is not valid!",
    _R.PACKET_IDENTIFIER_IN_USE: "Packet identifier is already in use!",
    _R.PACKET_IDENTIFIER_NOT_FOUND: "Packet identifier not found!",
    _R.RECEIVE_MAXIMUM_EXCEEDED: "Maximum receive amount exceeded!",
    _R.TOPIC_ALIAS_INVALID: "Invalid topic alias!",
    _R.PACKET_TOO_LARGE: "Sent packet was too large!",
    _R.MESSAGE_RATE_TOO_HIGH: "Message rate is too high!",
    _R.QUOTA_EXCEEDED: "Quota exceeded!",
    _R.ADMINISTRATIVE_ACTION: "Administrative action!",
    _R.PAYLOAD_FORMAT_INVALID: "Invalid payload format!",
    _R.RETAIN_NOT_SUPPORTED: "Message retain not supported!",
    _R.QOS_NOT_SUPPORTED: "Used QoS is not supported!",
    _R.USE_ANOTHER_SERVER: "Use another server!",
    _R.SERVER_MOVED: "Server moved!",
    _R.SHARED_SUBSCRIPTION_NOT_SUPPORTED: "Shared subscription is not supported",
    _R.CONNECTION_RATE_EXCEEDED: "Connection rate exceeded!",
    _R.MAXIMUM_CONNECT_TIME: "Maximum connect time exceeded!",
    _R.SUBSCRIPTION_IDENTIFIERS_NOT_SUPPORTED: "Subscription identifier not supported!",
    _R.WILDCARD_SUBSCRIPTION_NOT_SUPPORTED: "Wildcard subscription not supported!",
    _R.TIMER_NOT_SUPPORTED: "Timer implementation is not provided",
    _R.BUFF_ERROR: "Error encountered during write / read from packet",
    _R.NETWORK_ERROR: "Unknown error!",
}