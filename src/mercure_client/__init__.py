"""
A client implementation of the Mercure protocol.

Publishes updates to a Mercure hub and issues publisher/subscriber JWT access
tokens scoped by topic selectors.
"""

from mercure_client.client import (
    Client,
    HubUrl,
    PublishUpdateParams,
    PublishUpdatePrivacy,
    RevisionId,
)
from mercure_client.cookie import (
    MAX_AGE_LIMIT,
    MERCURE_AUTHORIZATION_COOKIE_NAME,
    build_authorization_cookie,
)
from mercure_client.exceptions import (
    InvalidHubUrlError,
    MaxAgeError,
    MercureError,
    ParseUriTemplateError,
    PublisherJwtError,
    PublishUpdateError,
    SubscriberJwtError,
)
from mercure_client.jwt import (
    PublisherJwt,
    PublisherJwtSecret,
    SubscriberJwt,
    SubscriberJwtMaxAge,
    SubscriberJwtSecret,
    issue_publisher_token,
    issue_subscriber_token,
    issue_subscriber_token_from_settings,
)
from mercure_client.topic import Topic
from mercure_client.topic_selector import TopicSelector, UriTemplate

__all__ = [
    "Client",
    "HubUrl",
    "PublishUpdateParams",
    "PublishUpdatePrivacy",
    "RevisionId",
    "MAX_AGE_LIMIT",
    "MERCURE_AUTHORIZATION_COOKIE_NAME",
    "build_authorization_cookie",
    "InvalidHubUrlError",
    "MaxAgeError",
    "MercureError",
    "ParseUriTemplateError",
    "PublisherJwtError",
    "PublishUpdateError",
    "SubscriberJwtError",
    "PublisherJwt",
    "PublisherJwtSecret",
    "SubscriberJwt",
    "SubscriberJwtMaxAge",
    "SubscriberJwtSecret",
    "issue_publisher_token",
    "issue_subscriber_token",
    "issue_subscriber_token_from_settings",
    "Topic",
    "TopicSelector",
    "UriTemplate",
]
