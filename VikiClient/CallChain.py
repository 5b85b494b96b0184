"""
Call chain accumulation and URL composition for the Viki v3 API
"""
from dataclasses import dataclass, field
from enum import Enum
from collections.abc import Mapping
from typing import Optional, Union

from .errors import UnsupportedOperation

Scalar = Union[str, int]


class Namespace(str, Enum):
    """Top-level resource categories the API answers to."""

    MOVIES = "movies"
    SERIES = "series"
    EPISODES = "episodes"
    MUSIC_VIDEOS = "music_videos"
    NEWSCASTS = "newscasts"
    NEWSCLIPS = "newsclips"
    ARTISTS = "artists"
    FEATURED = "featured"
    COMING_SOON = "coming_soon"
    SUBTITLES = "subtitles"
    HARDSUBS = "hardsubs"
    GENRES = "genres"
    COUNTRIES = "countries"
    SEARCH = "search"
    LANGUAGES = "languages"

    @classmethod
    def resolve(cls, name) -> "Namespace":
        """Map a namespace name (or member) onto the enum, or raise UnsupportedOperation."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedOperation(str(name)) from None


@dataclass(frozen=True)
class CallSegment:
    namespace: Namespace
    resource: Optional[Scalar] = None
    params: Optional[Mapping[str, Scalar]] = field(default=None)

    def __post_init__(self):
        # Keep our own copy so later edits to the caller's dict don't leak in
        if self.params is not None:
            object.__setattr__(self, 'params', dict(self.params))


class CallChain:
    """Ordered segments built up by fluent namespace calls."""

    def __init__(self):
        self._segments = []

    def __len__(self):
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    @property
    def segments(self) -> tuple:
        return tuple(self._segments)

    def append(self, namespace, *args) -> "CallChain":
        """
        Validate and append one segment.

        Args:
            namespace: Namespace member or its name (e.g. 'movies')
            *args: nothing, a params mapping, a resource id, or (resource, params)

        Returns:
            CallChain: self, for chaining
        """
        namespace = Namespace.resolve(namespace)

        if len(args) == 0:
            segment = CallSegment(namespace)
        elif len(args) == 1:
            arg = args[0]
            if isinstance(arg, Mapping):
                segment = CallSegment(namespace, params=arg)
            else:
                segment = CallSegment(namespace, resource=arg)
        elif len(args) == 2:
            segment = CallSegment(namespace, resource=args[0], params=args[1])
        else:
            raise TypeError(f"{namespace.value}() takes at most 2 arguments ({len(args)} given)")

        self._segments.append(segment)
        return self

    def compose(self, access_token: str) -> tuple[str, dict]:
        """
        Turn the chain into a request path and query params.

        The access token is seeded first, so a segment that passes its own
        access_token wins. Later segments override earlier ones on key clashes.

        Returns:
            tuple: (path, params), e.g. ('movies/21713/subtitles/en.json', {...})
        """
        if not self._segments:
            raise ValueError("Cannot compose an empty call chain")

        path = ""
        params = {'access_token': access_token}

        for segment in self._segments:
            path += f"{segment.namespace.value}/"
            if segment.resource is not None:
                path += f"{segment.resource}/"
            if segment.params:
                params.update(segment.params)

        return path[:-1] + ".json", params
