"""Basic-auth credential handling.

Credentials are only ever sent to hosts in :data:`ALLOWED_HOSTS`, and only to
links on the starting host.  Everything that is displayed or logged goes
through :func:`detach_credentials` first.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from humm.errors import HostNotAllowed
from humm.links import is_internal
from humm.urls import AbsoluteURL

_REDACTED = "xxxxx"

# Not configurable from flags or the environment.
ALLOWED_HOSTS: frozenset[str] = frozenset(
    {
        "mystic.com",
        "staging.mystic.com",
    }
)


def require_allowed_host(host: str) -> None:
    """Raise :class:`HostNotAllowed` unless *host* is in the allow-list."""
    if host not in ALLOWED_HOSTS:
        raise HostNotAllowed(host, ALLOWED_HOSTS)


def authorize_base(base: AbsoluteURL, username: str, password: str) -> AbsoluteURL:
    """Return *base* carrying the credential pair, after the allow-list check.

    Raises:
        HostNotAllowed: If ``base.host`` is not allow-listed.  Raised before
            any request is made.
    """
    require_allowed_host(base.host)
    return base.with_credentials(username, password)


def should_attach(link: AbsoluteURL, base: AbsoluteURL) -> bool:
    return base.has_credentials and base.host in ALLOWED_HOSTS and is_internal(link, base)


def attach_credentials(link: AbsoluteURL, base: AbsoluteURL) -> AbsoluteURL:
    """Return a copy of *link* carrying *base*'s credential pair."""
    return link.with_credentials(base.username, base.password)


def detach_credentials(link: AbsoluteURL) -> AbsoluteURL:
    """Return a copy of *link* without any credential pair."""
    return link.without_credentials()


def scrub(message: str, link: AbsoluteURL) -> str:
    """Remove *link*'s credentials from *message*.

    Renderings of the full URL are replaced by the credential-free form and
    any leftover occurrence of the username or password is redacted.
    """
    if not link.has_credentials:
        return message
    message = message.replace(str(link), str(detach_credentials(link)))
    if link.password:
        for secret in {link.password, quote(link.password, safe="")}:
            message = message.replace(secret, _REDACTED)
    if link.username:
        for name in {link.username, quote(link.username, safe="")}:
            # whole words only, a short username must not eat host names
            message = re.sub(rf"(?<![\w.-]){re.escape(name)}(?![\w-]|\.\w)", _REDACTED, message)
    return message
