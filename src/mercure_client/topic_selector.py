"""
Topic selectors used to scope publish and subscribe rights in Mercure JWTs.

See The Mercure Protocol, Section 3: a topic selector is an expression intended
to be matched by one or several topics.
"""

from functools import total_ordering
from typing import ClassVar, Tuple, Union

from mercure_client.exceptions import ParseUriTemplateError
from mercure_client.utils.uri_template_syntax import (
    UriTemplateSyntaxError,
    check_uri_template_syntax,
)

WILDCARD_SELECTOR = "*"


@total_ordering
class UriTemplate:
    """
    A URI Template (RFC 6570).

    You should use a URI Template in absolute form, which expands to a valid URL.
    This cannot be checked due to the flexibility of URI Templates, but is
    important for interoperability.
    """

    __slots__ = ("_template",)

    def __init__(self, template: str):
        try:
            check_uri_template_syntax(template)
        except UriTemplateSyntaxError as e:
            raise ParseUriTemplateError(template, e) from e
        object.__setattr__(self, "_template", template)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __str__(self) -> str:
        return self._template

    def __repr__(self) -> str:
        return f"UriTemplate({self._template!r})"

    def __eq__(self, other):
        if not isinstance(other, UriTemplate):
            return NotImplemented
        return self._template == other._template

    def __lt__(self, other):
        if not isinstance(other, UriTemplate):
            return NotImplemented
        return self._template < other._template

    def __hash__(self) -> int:
        return hash(self._template)


@total_ordering
class TopicSelector:
    """
    Base class of the two topic selector variants.

    Use ``TopicSelector.WILDCARD`` or ``TopicSelector.uri_template(...)``.
    The wildcard sorts before every URI Template selector; URI Template
    selectors sort by their template string.
    """

    __slots__ = ()

    WILDCARD: ClassVar["WildcardSelector"]
    _rank: ClassVar[int]

    @staticmethod
    def uri_template(template: Union[str, UriTemplate]) -> "UriTemplateSelector":
        if not isinstance(template, UriTemplate):
            template = UriTemplate(template)
        return UriTemplateSelector(template)

    @classmethod
    def parse(cls, value: str) -> "TopicSelector":
        """Parse the wire form of a selector: ``"*"`` or a URI Template."""
        if value == WILDCARD_SELECTOR:
            return cls.WILDCARD
        return cls.uri_template(value)

    def is_wildcard(self) -> bool:
        return False

    def _sort_key(self) -> Tuple[int, str]:
        return (self._rank, str(self))

    def __eq__(self, other):
        if not isinstance(other, TopicSelector):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other):
        if not isinstance(other, TopicSelector):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")


class WildcardSelector(TopicSelector):
    """A topic selector which matches all topics."""

    __slots__ = ()
    _rank = 0

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def is_wildcard(self) -> bool:
        return True

    def __str__(self) -> str:
        return WILDCARD_SELECTOR

    def __repr__(self) -> str:
        return "TopicSelector.WILDCARD"


class UriTemplateSelector(TopicSelector):
    """A topic selector which matches by a URI Template."""

    __slots__ = ("_template",)
    _rank = 1

    def __init__(self, template: UriTemplate):
        if not isinstance(template, UriTemplate):
            raise TypeError(
                f"expected UriTemplate, got {type(template).__name__}"
            )
        object.__setattr__(self, "_template", template)

    @property
    def template(self) -> UriTemplate:
        return self._template

    def __str__(self) -> str:
        return str(self._template)

    def __repr__(self) -> str:
        return f"TopicSelector.uri_template({str(self._template)!r})"


TopicSelector.WILDCARD = WildcardSelector()
