"""
Shared constants and helper fixtures for tests.
"""
import pytest

from mercure_client.client import HubUrl
from mercure_client.jwt import PublisherJwt, PublisherJwtSecret, SubscriberJwtSecret
from mercure_client.topic_selector import TopicSelector

# The demo secret shipped with the Mercure hub
TEST_JWT_SECRET = b"!ChangeThisMercureHubJWTSecretKey!"

TEST_HUB_URL = "https://localhost/.well-known/mercure"

# Golden tokens signed with TEST_JWT_SECRET
PUBLISHER_JWT_WILDCARD = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJtZXJjdXJlIjp7InB1Ymxpc2giOlsiKiJdfX0."
    "a8cjcSRUAcHdnGNMKifA4BK5epRXxQI0UBp2XpNrBdw"
)
PUBLISHER_JWT_URI_TEMPLATE = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJtZXJjdXJlIjp7InB1Ymxpc2giOlsiaHR0cHM6Ly9leGFtcGxlLmNvbS9ib29rcy97Ym9va19pZH0iXX19."
    "eyl-c2BUWrnx6VZNBfKWnTI2t28yO5NcHUgn83womNE"
)
SUBSCRIBER_JWT_WILDCARD = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJtZXJjdXJlIjp7InN1YnNjcmliZSI6WyIqIl19fQ."
    "TMzyyYqIldgBLhqpiOR9a_HBk7iiP60Pb4X65ICaouA"
)
SUBSCRIBER_JWT_URI_TEMPLATE = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJtZXJjdXJlIjp7InN1YnNjcmliZSI6WyJodHRwczovL2V4YW1wbGUuY29tL3VzZXJzL3t1c2VyX2lkfS9ib29rcy97Ym9va19pZH0iXX19."
    "U0qs1ggrkGDfMDJ9LzuY_9BEExNUU5KSu71B4-eQcko"
)


@pytest.fixture
def publisher_jwt_secret():
    return PublisherJwtSecret(TEST_JWT_SECRET)


@pytest.fixture
def subscriber_jwt_secret():
    return SubscriberJwtSecret(TEST_JWT_SECRET)


@pytest.fixture
def publisher_jwt(publisher_jwt_secret):
    return PublisherJwt(publisher_jwt_secret, [TopicSelector.WILDCARD])


@pytest.fixture
def hub_url():
    return HubUrl(TEST_HUB_URL)
