from typing import NamedTuple
from urllib.parse import unquote


class UrlParts(NamedTuple):
    scheme: str
    username: str
    password: str
    host: str
    path: str


def split_url(url: str) -> UrlParts:
    """
    Split a connection URL into scheme, credentials, host list and path.

    Base64 keys (Event Hubs SAS keys) are often pasted unencoded and may contain ``/``,
    so the userinfo is cut at the last ``@`` before the path is looked for.
    Credentials are returned percent-decoded.
    """
    scheme, rest = url.split("://", 1) if "://" in url else ("", url)
    rest = rest.split("?", 1)[0]
    userinfo, _, hostpart = rest.rpartition("@")
    host, _, path = hostpart.partition("/")
    username, _, password = userinfo.partition(":")
    return UrlParts(scheme, unquote(username), unquote(password), host, path)


def endpoint_host(endpoint: str) -> str:
    """
    Reduce a connection string to its host part.

    ``mongodb://user:pw@a:27017,b:27017/db?ssl=true`` -> ``a:27017,b:27017``
    ``self-managed.local:5672`` -> ``self-managed.local:5672``
    """
    if not endpoint:
        return ""
    return split_url(endpoint).host.lower()


def redact_credentials(url: str) -> str:
    """Mask the password part of a connection URL so it can be logged."""
    if not url or "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    query_start = rest.find("?")
    at = rest.rfind("@", 0, query_start if query_start >= 0 else len(rest))
    if at < 0:
        return url
    user = rest[:at].split(":", 1)[0]
    return f"{scheme}://{user}:***@{rest[at + 1:]}"
