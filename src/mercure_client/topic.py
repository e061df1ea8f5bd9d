"""
The topic of a Mercure update.

See The Mercure Protocol, Section 5: if the ``topic`` parameter is present
several times, the first occurrence is considered to be the canonical IRI of the
topic, and other ones are considered to be alternate IRIs. The hub MUST dispatch
the update to subscribers that are subscribed to both canonical or alternate
IRIs.
"""

from functools import total_ordering
from itertools import chain
from typing import Iterable, Iterator, List, Tuple, Union

from pydantic import AnyUrl, TypeAdapter

_url_adapter = TypeAdapter(AnyUrl)

UrlLike = Union[AnyUrl, str]


def parse_url(url: UrlLike) -> AnyUrl:
    if isinstance(url, AnyUrl):
        return url
    return _url_adapter.validate_python(url)


@total_ordering
class Topic:
    """
    Canonical URL of an updated resource plus its alternate URLs.

    Iterating yields the canonical URL first, then the alternates in insertion
    order. Duplicates are kept as given.
    """

    __slots__ = ("_canonical_url", "_alternate_urls")

    def __init__(
        self, canonical_url: UrlLike, alternate_urls: Iterable[UrlLike] = ()
    ):
        object.__setattr__(self, "_canonical_url", parse_url(canonical_url))
        object.__setattr__(
            self, "_alternate_urls", tuple(parse_url(url) for url in alternate_urls)
        )

    @classmethod
    def from_url(cls, canonical_url: UrlLike) -> "Topic":
        return cls(canonical_url)

    @property
    def canonical_url(self) -> AnyUrl:
        return self._canonical_url

    @property
    def alternate_urls(self) -> Tuple[AnyUrl, ...]:
        return self._alternate_urls

    def __iter__(self) -> Iterator[AnyUrl]:
        return chain((self._canonical_url,), self._alternate_urls)

    def __reversed__(self) -> Iterator[AnyUrl]:
        return chain(reversed(self._alternate_urls), (self._canonical_url,))

    def __len__(self) -> int:
        return 1 + len(self._alternate_urls)

    def form_fields(self) -> List[Tuple[str, str]]:
        """Render the topic as repeated ``topic`` form fields, canonical first."""
        return [("topic", str(url)) for url in self]

    def _key(self) -> Tuple[str, ...]:
        return tuple(str(url) for url in self)

    def __eq__(self, other):
        if not isinstance(other, Topic):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, Topic):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __setattr__(self, name, value):
        raise AttributeError("Topic is immutable")

    def __repr__(self) -> str:
        alternates = [str(url) for url in self._alternate_urls]
        return f"Topic({str(self._canonical_url)!r}, {alternates!r})"
