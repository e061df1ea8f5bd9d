"""
Error types raised by the Mercure client.

Every error carries a machine-checkable ``kind`` and, where one exists, the
underlying cause as ``inner`` (also chained as ``__cause__``).
"""

from enum import Enum
from typing import Optional


class MercureError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(
        self, kind: Enum, message: str, inner: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.inner = inner
        if inner is not None:
            self.__cause__ = inner


# Validation errors


class ParseUriTemplateErrorKind(str, Enum):
    INVALID_SYNTAX = "invalid_syntax"


class ParseUriTemplateError(MercureError, ValueError):
    """Raised when a string is not a syntactically valid URI Template."""

    def __init__(self, template: str, inner: BaseException):
        super().__init__(
            ParseUriTemplateErrorKind.INVALID_SYNTAX,
            f"failed to parse URI Template: {inner}",
            inner,
        )
        self.template = template


class InvalidHubUrlErrorKind(str, Enum):
    INVALID_URL = "invalid_url"
    NOT_WELL_KNOWN_PATH = "not_well_known_path"


class InvalidHubUrlError(MercureError, ValueError):
    """Raised when a hub URL cannot be parsed or has the wrong path."""


class MaxAgeErrorKind(str, Enum):
    # Subscriber JWT max-age must not be more than cookie.MAX_AGE_LIMIT.
    COOKIE_LIFETIME_LIMIT_EXCEEDED = "cookie_lifetime_limit_exceeded"
    NEGATIVE_DURATION = "negative_duration"


class MaxAgeError(MercureError, ValueError):
    """Raised when a duration cannot be used as a subscriber JWT max-age."""

    def __init__(self, kind: MaxAgeErrorKind):
        if kind == MaxAgeErrorKind.COOKIE_LIFETIME_LIMIT_EXCEEDED:
            message = "max age must not be more than 400 days"
        else:
            message = "max age must not be negative"
        super().__init__(kind, message)


# Signing errors


class JwtErrorKind(str, Enum):
    ENCODE_AND_SIGN = "encode_and_sign"


class PublisherJwtError(MercureError):
    """Raised when a publisher JWT cannot be encoded and signed."""

    def __init__(self, inner: BaseException):
        super().__init__(
            JwtErrorKind.ENCODE_AND_SIGN,
            f"failed to encode and sign JWT: {inner}",
            inner,
        )


class SubscriberJwtError(MercureError):
    """Raised when a subscriber JWT cannot be encoded and signed."""

    def __init__(self, inner: BaseException):
        super().__init__(
            JwtErrorKind.ENCODE_AND_SIGN,
            f"failed to encode and sign JWT: {inner}",
            inner,
        )


# Transport errors


class PublishUpdateErrorKind(str, Enum):
    # Failed to serialize parameters to application/x-www-form-urlencoded.
    SERIALIZE_PARAMETERS = "serialize_parameters"
    # Failed to send publish request to Mercure hub.
    SEND_REQUEST = "send_request"
    # Failed to read publish response from Mercure hub.
    READ_RESPONSE = "read_response"
    # Mercure hub answered with a non-success status.
    HUB_REJECTED = "hub_rejected"


_PUBLISH_UPDATE_MESSAGES = {
    PublishUpdateErrorKind.SERIALIZE_PARAMETERS: (
        "failed to serialize parameters to application/x-www-form-urlencoded"
    ),
    PublishUpdateErrorKind.SEND_REQUEST: "failed to send request to Mercure hub",
    PublishUpdateErrorKind.READ_RESPONSE: "failed to read response from Mercure hub",
    PublishUpdateErrorKind.HUB_REJECTED: "Mercure hub rejected the update",
}


class PublishUpdateError(MercureError):
    """Raised by ``Client.publish_update``."""

    def __init__(self, kind: PublishUpdateErrorKind, inner: BaseException):
        super().__init__(kind, f"{_PUBLISH_UPDATE_MESSAGES[kind]}: {inner}", inner)
