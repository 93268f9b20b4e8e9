"""
URL composition for fetch_builder.

Merges a builder's base URL with the route (and optional query) selected by
the last get/post/put/delete/patch call.

Paths are joined by plain concatenation:

    http://api.example.com/        + /users        -> /users
    http://api.example.com/api/v1  + /items        -> /api/v1/items
    http://api.example.com/api/v1  + items         -> /api/v1items
    http://api.example.com/v1/     + /items?sort=a -> /v1/items?sort=a

The only slash ever dropped is the one where a base path ending in "/" meets
a route starting with "/". Callers rely on the exact strings produced, so
nothing else is normalized.
"""
from typing import Optional, Tuple
from urllib.parse import SplitResult, quote, urlsplit

# Characters left as-is in a path: everything printable except
# space " # < > ? ` { }
_PATH_SAFE = "!$%&'()*+,-./:;=@[\\]^_|~"
# Same for a query, which also escapes ' but keeps ? ` { }
_QUERY_SAFE = "!$%&()*+,-./:;=?@[\\]^_`{|}~"


def split_path_and_query(path: str) -> Tuple[str, Optional[str]]:
    """Split on the first literal '?' into (route, query)."""
    route, sep, query = path.partition("?")
    if not sep:
        return path, None
    return route, query


def parse_base_url(url: str) -> SplitResult:
    """Parse an absolute URL, raising ValueError if it has no scheme or host."""
    if not isinstance(url, str):
        raise ValueError("URL must be a string")
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise ValueError("not an absolute URL")
    if not parts.hostname:
        raise ValueError("URL has no host")
    # Accessing .port validates it
    parts.port
    return parts


def join_paths(base_path: str, route: str) -> str:
    """Join a base path and a route without normalizing slashes."""
    if base_path == "/":
        path = route
    elif base_path.endswith("/") and route.startswith("/"):
        path = base_path + route[1:]
    else:
        path = base_path + route

    if not path.startswith("/"):
        path = "/" + path
    return path


def compose_url(base_url: str, path: str) -> str:
    """
    Build the final absolute URL for a request.

    Args:
        base_url: Absolute URL the builder was created with
        path: Route selected on the builder, optionally followed by ?query

    Returns:
        The composed absolute URL

    Raises:
        ValueError: If base_url cannot be parsed as an absolute URL
    """
    parts = parse_base_url(base_url)
    route, query = split_path_and_query(path)

    base_path = parts.path or "/"
    final_path = quote(join_paths(base_path, route), safe=_PATH_SAFE)

    url = f"{parts.scheme}://{parts.netloc}{final_path}"
    if query is not None:
        url += "?" + quote(query, safe=_QUERY_SAFE)
    elif parts.query:
        url += "?" + parts.query
    if parts.fragment:
        url += "#" + parts.fragment
    return url
