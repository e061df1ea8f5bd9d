"""
Mercure hub client for publishing updates.
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple
from urllib.parse import quote_plus, urlencode

import httpx
from pydantic import AnyUrl, ValidationError

from mercure_client.config import Settings, get_settings
from mercure_client.exceptions import (
    InvalidHubUrlError,
    InvalidHubUrlErrorKind,
    PublishUpdateError,
    PublishUpdateErrorKind,
)
from mercure_client.jwt import PublisherJwt, PublisherJwtSecret
from mercure_client.topic import Topic, UrlLike, parse_url
from mercure_client.topic_selector import TopicSelector

logger = logging.getLogger(__name__)

# The Mercure Protocol, Section 2: the URL of the hub MUST be the "well-known"
# (RFC 5785) fixed path "/.well-known/mercure".
WELL_KNOWN_PATH = "/.well-known/mercure"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HubUrl:
    """URL of a Mercure hub, validated to use the well-known path."""

    __slots__ = ("_url",)

    def __init__(self, url: UrlLike):
        if not isinstance(url, AnyUrl):
            try:
                url = parse_url(url)
            except ValidationError as e:
                raise InvalidHubUrlError(
                    InvalidHubUrlErrorKind.INVALID_URL,
                    f"invalid Mercure hub URL: {url!r}",
                    e,
                ) from e
        if url.path != WELL_KNOWN_PATH:
            raise InvalidHubUrlError(
                InvalidHubUrlErrorKind.NOT_WELL_KNOWN_PATH,
                f"Mercure hub URL path must be {WELL_KNOWN_PATH}, got {url.path!r}",
            )
        object.__setattr__(self, "_url", url)

    @property
    def url(self) -> AnyUrl:
        return self._url

    def __str__(self) -> str:
        return str(self._url)

    def __repr__(self) -> str:
        return f"HubUrl({str(self._url)!r})"

    def __eq__(self, other):
        if not isinstance(other, HubUrl):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __setattr__(self, name, value):
        raise AttributeError("HubUrl is immutable")


class PublishUpdatePrivacy(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"

    def is_public(self) -> bool:
        return self == PublishUpdatePrivacy.PUBLIC

    def is_private(self) -> bool:
        return self == PublishUpdatePrivacy.PRIVATE


class RevisionId(str):
    """Opaque identifier the hub assigns to a published update."""

    def __repr__(self) -> str:
        return f"RevisionId({str.__repr__(self)})"


def _quote_form_value(value: str, safe: str = "", encoding=None, errors=None) -> str:
    # WHATWG urlencoded serializer: "*" stays as is, "~" is escaped
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace(
        "~", "%7E"
    )


class PublishUpdateParams:
    """
    Form parameters of a publish request, in wire order.

    ``data`` is only sent when given, ``private`` only for private updates
    since the hub treats the field's presence as the privacy marker.
    """

    __slots__ = ("topic", "data", "privacy")

    def __init__(
        self,
        topic: Topic,
        data: Optional[str] = None,
        privacy: PublishUpdatePrivacy = PublishUpdatePrivacy.PUBLIC,
    ):
        self.topic = topic
        self.data = data
        self.privacy = privacy

    def to_form_fields(self) -> List[Tuple[str, str]]:
        fields = self.topic.form_fields()
        if self.data is not None:
            fields.append(("data", self.data))
        if self.privacy.is_private():
            fields.append(("private", "on"))
        return fields

    def encode(self) -> str:
        """
        Serialize to application/x-www-form-urlencoded.

        Raises:
            TypeError, ValueError: If a field cannot be encoded as UTF-8
        """
        return urlencode(
            self.to_form_fields(), quote_via=_quote_form_value, errors="strict"
        )


class Client:
    """
    Client for publishing updates to a Mercure hub.

    An ``httpx.AsyncClient`` may be shared in; otherwise a short-lived one is
    opened per publish.
    """

    def __init__(
        self,
        hub_url: HubUrl,
        publisher_jwt: PublisherJwt,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize the Mercure Client.

        Args:
            hub_url: The hub's well-known URL
            publisher_jwt: Token sent as bearer credentials with every publish
            http_client: Optional HTTP client to send requests with
            timeout: Request timeout in seconds
        """
        if not isinstance(hub_url, HubUrl):
            hub_url = HubUrl(hub_url)
        self.hub_url = hub_url
        self.publisher_jwt = publisher_jwt
        self.http_client = http_client
        self.timeout = timeout
        logger.info(f"Initializing Mercure Client with hub URL: {self.hub_url}")

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "Client":
        """
        Build a client from configuration.

        Raises:
            ValueError: If no publisher secret is configured or the hub URL is invalid
            PublisherJwtError: If the publisher token cannot be signed
        """
        if settings is None:
            settings = get_settings()

        if settings.PUBLISHER_JWT_SECRET is None:
            raise ValueError("MERCURE_CLIENT_PUBLISHER_JWT_SECRET is not configured")

        publisher_jwt = PublisherJwt(
            PublisherJwtSecret(settings.PUBLISHER_JWT_SECRET.get_secret_value()),
            [TopicSelector.parse(s) for s in settings.PUBLISHER_TOPIC_SELECTORS],
        )
        return cls(
            HubUrl(settings.HUB_URL),
            publisher_jwt,
            http_client=http_client,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    def _headers(self):
        return {
            "Content-Type": FORM_CONTENT_TYPE,
            "Authorization": f"Bearer {self.publisher_jwt}",
        }

    async def publish_update(
        self,
        topic: Topic,
        data: Optional[str] = None,
        privacy: PublishUpdatePrivacy = PublishUpdatePrivacy.PUBLIC,
    ) -> RevisionId:
        """
        Publish an update to the Mercure hub (The Mercure Protocol, Section 5).

        Args:
            topic: Topic of the update, canonical URL first
            data: Optional content of the update
            privacy: Whether the update is only dispatched to authorized subscribers

        Returns:
            RevisionId: The hub's response body, verbatim

        Raises:
            PublishUpdateError: If the body cannot be encoded, the request fails,
                the hub rejects the update or the response cannot be read
        """
        params = PublishUpdateParams(topic, data, privacy)
        try:
            body = params.encode()
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to encode publish parameters: {str(e)}")
            raise PublishUpdateError(
                PublishUpdateErrorKind.SERIALIZE_PARAMETERS, e
            ) from e

        logger.info(
            f"Publishing {privacy.value} update for topic {topic.canonical_url} "
            f"to {self.hub_url}"
        )

        if self.http_client is not None:
            return await self._send(self.http_client, body)

        async with httpx.AsyncClient() as client:
            return await self._send(client, body)

    async def _send(self, client: httpx.AsyncClient, body: str) -> RevisionId:
        request = client.build_request(
            "POST",
            str(self.hub_url),
            headers=self._headers(),
            content=body.encode("utf-8"),
            timeout=self.timeout,
        )

        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error(f"Failed to send update to Mercure hub: {str(e)}")
            raise PublishUpdateError(PublishUpdateErrorKind.SEND_REQUEST, e) from e

        try:
            try:
                await response.aread()
            except httpx.HTTPError as e:
                logger.error(f"Failed to read Mercure hub response: {str(e)}")
                raise PublishUpdateError(
                    PublishUpdateErrorKind.READ_RESPONSE, e
                ) from e

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(
                    f"Mercure hub rejected update with status {response.status_code}: "
                    f"{response.text}"
                )
                raise PublishUpdateError(PublishUpdateErrorKind.HUB_REJECTED, e) from e
        finally:
            await response.aclose()

        revision_id = RevisionId(response.text)
        logger.debug(f"Mercure hub accepted update as {revision_id}")
        return revision_id
