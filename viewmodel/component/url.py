"""URL helper with optional route prefix."""

from typing import Optional, Union


class Url:
    """A URL plus a prefix that is only applied when printed for the frontend."""

    def __init__(self, url: str, prefix: str = ""):
        self.url = url
        self.prefix = prefix

    def print(self) -> str:
        return self.url

    def print_prefix(self) -> str:
        return self.prefix + self.url

    def add(self, segment: str) -> "Url":
        """Append a path segment: Url('/a').add('b') -> '/a/b'."""
        self.url += "/" + segment
        return self

    def add_prefix(self, prefix: str) -> "Url":
        self.prefix = prefix + "/" + self.prefix
        return self

    def __repr__(self) -> str:
        return f"Url({self.url!r}, prefix={self.prefix!r})"


def as_url(value: Union[Url, str, None]) -> Optional[Url]:
    """Accept either a Url or a plain string."""
    if value is None or isinstance(value, Url):
        return value
    return Url(value)
