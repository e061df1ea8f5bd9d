"""
Cookie transport of subscriber JWTs for web browsers.

The Mercure Protocol, Section 6: if the publisher or the subscriber is a web
browser, it SHOULD send a cookie called "mercureAuthorization" containing the
JWS when connecting to the hub.
"""

from datetime import timedelta
from http.cookies import SimpleCookie
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mercure_client.jwt import SubscriberJwt, SubscriberJwtMaxAge

MERCURE_AUTHORIZATION_COOKIE_NAME = "mercureAuthorization"

# RFC 6265bis, Section 5.5
MAX_AGE_LIMIT_SECONDS = 34_560_000
MAX_AGE_LIMIT = timedelta(seconds=MAX_AGE_LIMIT_SECONDS)

HUB_COOKIE_PATH = "/.well-known/mercure"


def build_authorization_cookie(
    subscriber_jwt: "SubscriberJwt",
    max_age: Optional["SubscriberJwtMaxAge"] = None,
    path: str = HUB_COOKIE_PATH,
    domain: Optional[str] = None,
    secure: bool = True,
    samesite: str = "Strict",
) -> str:
    """
    Render a ``Set-Cookie`` header value carrying a subscriber JWT.

    The cookie is always ``HttpOnly``. Without ``max_age`` a session cookie is
    produced.

    Args:
        subscriber_jwt: The token to hand to the browser
        max_age: Cookie lifetime, normally the one the token was issued with
        path: Cookie path, defaults to the hub's well-known path
        domain: Optional cookie domain, shared by the hub and the application
        secure: Whether to restrict the cookie to HTTPS
        samesite: SameSite attribute value

    Returns:
        str: The header value, without the ``Set-Cookie:`` prefix
    """
    cookie = SimpleCookie()
    cookie[MERCURE_AUTHORIZATION_COOKIE_NAME] = str(subscriber_jwt)
    morsel = cookie[MERCURE_AUTHORIZATION_COOKIE_NAME]
    morsel["path"] = path
    morsel["httponly"] = True
    morsel["samesite"] = samesite
    if secure:
        morsel["secure"] = True
    if domain:
        morsel["domain"] = domain
    if max_age is not None:
        morsel["max-age"] = int(max_age.total_seconds())
    return morsel.OutputString()
