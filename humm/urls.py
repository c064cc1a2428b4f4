"""URL values and relative-link resolution.

:class:`AbsoluteURL` is an immutable, component-wise view of a URL.  Values are
never mutated in place; credential attachment and path filling always build a
new value, so one instance can be shared freely between worker threads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from urllib.parse import quote, unquote, urlsplit

from humm.errors import LinkParseError


@dataclass(frozen=True)
class AbsoluteURL:
    scheme: str = ""
    host: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""
    username: str | None = None
    password: str | None = None

    def __str__(self) -> str:
        out = f"{self.scheme}:" if self.scheme else ""
        if self.host or self.has_credentials:
            out += "//"
            if self.has_credentials:
                out += quote(self.username or "", safe="")
                if self.password is not None:
                    out += ":" + quote(self.password, safe="")
                out += "@"
            out += self.host
        path = self.path
        if path and self.host and not path.startswith("/"):
            path = "/" + path
        out += path
        if self.query:
            out += "?" + self.query
        if self.fragment:
            out += "#" + self.fragment
        return out

    @property
    def has_credentials(self) -> bool:
        return self.username is not None

    def with_credentials(self, username: str | None, password: str | None) -> AbsoluteURL:
        return replace(self, username=username, password=password)

    def without_credentials(self) -> AbsoluteURL:
        if self.username is None and self.password is None:
            return self
        return replace(self, username=None, password=None)


def parse_url(raw: str) -> AbsoluteURL:
    """Split *raw* into an :class:`AbsoluteURL` without resolving it.

    Raises:
        LinkParseError: If the URL parser rejects *raw* (bad IPv6 literal,
            non-numeric port, ...).
    """
    text = raw.strip()
    try:
        parts = urlsplit(text)
        # Port validation is lazy in urlsplit.
        parts.port
    except ValueError as exc:
        raise LinkParseError(raw, str(exc)) from exc

    userinfo, at, host = parts.netloc.rpartition("@")
    username: str | None = None
    password: str | None = None
    if at:
        user, colon, secret = userinfo.partition(":")
        username = unquote(user)
        password = unquote(secret) if colon else None

    return AbsoluteURL(
        scheme=parts.scheme,
        host=host,
        path=parts.path,
        query=parts.query,
        fragment=parts.fragment,
        username=username,
        password=password,
    )


def make_absolute(candidate: AbsoluteURL, base: AbsoluteURL) -> AbsoluteURL:
    """Fill the scheme, host and path of *candidate* from *base* where empty.

    Each component is handled independently; query, fragment and credentials
    always stay the candidate's own.  A path without a leading slash gets one
    once a host is present, so ``about`` and ``/about`` resolve alike.  Never
    fails.
    """
    host = candidate.host or base.host
    path = candidate.path or base.path
    if host and path and not path.startswith("/"):
        path = "/" + path
    return replace(
        candidate,
        scheme=candidate.scheme or base.scheme,
        host=host,
        path=path,
    )
