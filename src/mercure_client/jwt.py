"""
Issuing of Mercure JWT access tokens.

See The Mercure Protocol, Section 6: publishers and subscribers authorize with a
JWS carrying a ``mercure`` claim. Tokens here are always signed with HS256 and
are immutable once constructed.
"""

import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Dict, Optional, Sequence, Tuple, Union

from jose import jwt as jose_jwt
from jose.constants import ALGORITHMS
from jose.exceptions import JOSEError
from pydantic import BaseModel, ConfigDict, field_serializer

from mercure_client.config import Settings, get_settings
from mercure_client.cookie import MAX_AGE_LIMIT
from mercure_client.exceptions import (
    MaxAgeError,
    MaxAgeErrorKind,
    PublisherJwtError,
    SubscriberJwtError,
)
from mercure_client.topic_selector import TopicSelector

logger = logging.getLogger(__name__)

JWT_ALGORITHM = ALGORITHMS.HS256

# RFC 7518, Section 3.2: the key should be at least as long as the hash output
RECOMMENDED_SECRET_LENGTH = 64

SecretLike = Union[bytes, bytearray, str]


class _JwtSecret:
    """
    HMAC secret held in a mutable buffer that is zeroed when released.

    The value is never rendered by ``repr``/``str`` and cannot be pickled.
    """

    __slots__ = ("_value",)

    def __init__(self, value: SecretLike):
        if isinstance(value, str):
            value = value.encode("utf-8")
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(
                f"{type(self).__name__} expects bytes or str, got {type(value).__name__}"
            )
        buffer = bytearray(value)
        if len(buffer) < RECOMMENDED_SECRET_LENGTH:
            logger.warning(
                f"{type(self).__name__} is shorter than the recommended "
                f"{RECOMMENDED_SECRET_LENGTH} bytes"
            )
        object.__setattr__(self, "_value", buffer)

    def expose_secret(self) -> bytes:
        return bytes(self._value)

    def clear(self) -> None:
        self._value[:] = bytes(len(self._value))

    def __del__(self):
        value = getattr(self, "_value", None)
        if value is not None:
            value[:] = bytes(len(value))

    def __len__(self) -> int:
        return len(self._value)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return hmac.compare_digest(self._value, other._value)

    __hash__ = None

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        raise TypeError(f"{type(self).__name__} cannot be serialized")

    def __repr__(self) -> str:
        return f"{type(self).__name__}('**********')"

    def __str__(self) -> str:
        return "**********"


class PublisherJwtSecret(_JwtSecret):
    """Secret used to sign publisher JWTs."""

    __slots__ = ()


class SubscriberJwtSecret(_JwtSecret):
    """Secret used to sign subscriber JWTs."""

    __slots__ = ()


class MercureClaim(BaseModel):
    """
    The ``mercure`` claim.

    ``publish`` (Section 6.1) and ``subscribe`` (Section 6.2) each contain an
    array of topic selectors. A side that is ``None`` is left out of the
    serialized claim entirely.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    publish: Optional[Tuple[TopicSelector, ...]] = None
    subscribe: Optional[Tuple[TopicSelector, ...]] = None

    @field_serializer("publish", "subscribe")
    def serialize_topic_selectors(self, selectors):
        if selectors is None:
            return None
        return [str(selector) for selector in selectors]


class MercureJwtClaims(BaseModel):
    """Claims set of a Mercure JWT: the registered ``exp`` and the ``mercure`` claim."""

    model_config = ConfigDict(frozen=True)

    exp: Optional[int] = None
    mercure: MercureClaim

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def _encode_and_sign(claims: MercureJwtClaims, secret: _JwtSecret) -> str:
    encoded = jose_jwt.encode(
        claims.to_payload(), secret.expose_secret(), algorithm=JWT_ALGORITHM
    )
    assert encoded.count(".") == 2, "signer should produce a compact JWS"
    return encoded


class _MercureJwt:
    __slots__ = ("_encoded", "_claims")

    def _freeze(self, encoded: str, claims: MercureJwtClaims) -> None:
        object.__setattr__(self, "_encoded", encoded)
        object.__setattr__(self, "_claims", claims)

    @property
    def claims(self) -> MercureJwtClaims:
        return self._claims

    @property
    def expires_at(self) -> Optional[datetime]:
        if self._claims.exp is None:
            return None
        return datetime.fromtimestamp(self._claims.exp, tz=timezone.utc)

    def __str__(self) -> str:
        return self._encoded

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._encoded!r})"

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._encoded == other._encoded

    def __hash__(self) -> int:
        return hash(self._encoded)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")


class PublisherJwt(_MercureJwt):
    """A publisher JWT access token (RFC 7519), signed on construction."""

    __slots__ = ()

    def __init__(
        self,
        publisher_jwt_secret: Union[PublisherJwtSecret, SecretLike],
        topic_selectors: Sequence[TopicSelector],
    ):
        if not isinstance(publisher_jwt_secret, PublisherJwtSecret):
            publisher_jwt_secret = PublisherJwtSecret(publisher_jwt_secret)

        claims = MercureJwtClaims(
            mercure=MercureClaim(publish=tuple(topic_selectors), subscribe=None)
        )
        try:
            encoded = _encode_and_sign(claims, publisher_jwt_secret)
        except (JOSEError, TypeError, ValueError) as e:
            logger.error(f"Failed to encode and sign publisher JWT: {e}")
            raise PublisherJwtError(e) from e

        self._freeze(encoded, claims)


class SubscriberJwtMaxAge:
    """
    Lifetime of a subscriber JWT.

    Bounded by ``cookie.MAX_AGE_LIMIT`` (400 days) since browsers receive the
    token in the ``mercureAuthorization`` cookie.
    """

    __slots__ = ("_duration",)

    MAX: ClassVar["SubscriberJwtMaxAge"]

    def __init__(self, duration: timedelta):
        if duration < timedelta(0):
            raise MaxAgeError(MaxAgeErrorKind.NEGATIVE_DURATION)
        if duration > MAX_AGE_LIMIT:
            raise MaxAgeError(MaxAgeErrorKind.COOKIE_LIFETIME_LIMIT_EXCEEDED)
        object.__setattr__(self, "_duration", duration)

    @classmethod
    def from_seconds(cls, seconds: float) -> "SubscriberJwtMaxAge":
        return cls(timedelta(seconds=seconds))

    @property
    def duration(self) -> timedelta:
        return self._duration

    def total_seconds(self) -> float:
        return self._duration.total_seconds()

    def __eq__(self, other):
        if not isinstance(other, SubscriberJwtMaxAge):
            return NotImplemented
        return self._duration == other._duration

    def __hash__(self) -> int:
        return hash(self._duration)

    def __setattr__(self, name, value):
        raise AttributeError("SubscriberJwtMaxAge is immutable")

    def __repr__(self) -> str:
        return f"SubscriberJwtMaxAge({self._duration!r})"


SubscriberJwtMaxAge.MAX = SubscriberJwtMaxAge(MAX_AGE_LIMIT)


class SubscriberJwt(_MercureJwt):
    """
    A subscriber JWT access token (RFC 7519), signed on construction.

    It is recommended to provide a ``SubscriberJwtMaxAge``. The protocol says the
    JWS SHOULD be short-lived, especially if the subscriber is a web browser,
    because revoking JWSs before their expiration is often difficult.
    """

    __slots__ = ()

    def __init__(
        self,
        subscriber_jwt_secret: Union[SubscriberJwtSecret, SecretLike],
        subscriber_jwt_max_age: Optional[SubscriberJwtMaxAge],
        topic_selectors: Sequence[TopicSelector],
    ):
        if not isinstance(subscriber_jwt_secret, SubscriberJwtSecret):
            subscriber_jwt_secret = SubscriberJwtSecret(subscriber_jwt_secret)

        if subscriber_jwt_max_age is not None:
            expires_at = datetime.now(timezone.utc) + subscriber_jwt_max_age.duration
            expiry = int(expires_at.timestamp())
        else:
            logger.warning("Issuing subscriber JWT without expiry")
            expiry = None

        claims = MercureJwtClaims(
            exp=expiry,
            mercure=MercureClaim(publish=None, subscribe=tuple(topic_selectors)),
        )
        try:
            encoded = _encode_and_sign(claims, subscriber_jwt_secret)
        except (JOSEError, TypeError, ValueError) as e:
            logger.error(f"Failed to encode and sign subscriber JWT: {e}")
            raise SubscriberJwtError(e) from e

        self._freeze(encoded, claims)


def issue_publisher_token(
    secret: Union[PublisherJwtSecret, SecretLike],
    publish_selectors: Sequence[TopicSelector],
) -> PublisherJwt:
    """
    Creates a publisher JWT allowed to publish to the given topic selectors.

    Raises:
        PublisherJwtError: If the token cannot be encoded and signed
    """
    return PublisherJwt(secret, publish_selectors)


def issue_subscriber_token(
    secret: Union[SubscriberJwtSecret, SecretLike],
    max_age: Optional[SubscriberJwtMaxAge],
    subscribe_selectors: Sequence[TopicSelector],
) -> SubscriberJwt:
    """
    Creates a subscriber JWT allowed to subscribe to the given topic selectors.

    Without ``max_age`` the token never expires.

    Raises:
        SubscriberJwtError: If the token cannot be encoded and signed
    """
    return SubscriberJwt(secret, max_age, subscribe_selectors)


def issue_subscriber_token_from_settings(
    subscribe_selectors: Sequence[TopicSelector],
    settings: Optional[Settings] = None,
) -> SubscriberJwt:
    """
    Creates a subscriber JWT using the secret and max age from configuration.

    Raises:
        ValueError: If no subscriber secret is configured
        SubscriberJwtError: If the token cannot be encoded and signed
    """
    if settings is None:
        settings = get_settings()

    if settings.SUBSCRIBER_JWT_SECRET is None:
        raise ValueError("MERCURE_CLIENT_SUBSCRIBER_JWT_SECRET is not configured")

    max_age = None
    if settings.SUBSCRIBER_JWT_MAX_AGE_SECONDS is not None:
        max_age = SubscriberJwtMaxAge.from_seconds(
            settings.SUBSCRIBER_JWT_MAX_AGE_SECONDS
        )

    return issue_subscriber_token(
        SubscriberJwtSecret(settings.SUBSCRIBER_JWT_SECRET.get_secret_value()),
        max_age,
        subscribe_selectors,
    )
