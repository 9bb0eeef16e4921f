"""
Image Proxy
===========

Fetches image bytes from the upstream file host so the browser never talks to it
directly. Two upstream subpaths are tried in order: /uploads/<path>, then
/images/<path>.
"""

import requests

from ...core.logging_service import LoggingService

UPSTREAM_SUBPATHS = ('uploads', 'images')
DEFAULT_CONTENT_TYPE = 'image/jpeg'


class InvalidImagePath(ValueError):
    """Requested path is empty or tries to leave the upstream directory."""


class ImageNotFound(Exception):
    """Every upstream subpath answered with a non-2xx status."""

    def __init__(self, path, attempted):
        super().__init__(f"Image not found: {path}")
        self.path = path
        self.attempted = attempted


class UpstreamTransportError(Exception):
    """The HTTP request itself failed (DNS, connection refused, timeout...)."""

    def __init__(self, message, url):
        super().__init__(message)
        self.message = message
        self.url = url


class UpstreamImage:
    """Bytes fetched from the upstream together with their content type."""

    def __init__(self, body, content_type, url):
        self.body = body
        self.content_type = content_type
        self.url = url


def sanitize_path(path):
    """Normalise a slash-joined path and reject traversal attempts.

    Returns the cleaned path; raises InvalidImagePath for empty paths, empty
    segments, '.' or '..' segments, backslashes and NUL bytes.
    """
    if not path or '\x00' in path or '\\' in path:
        raise InvalidImagePath(f"Invalid image path: {path!r}")

    segments = path.strip('/').split('/')
    for segment in segments:
        if segment in ('', '.', '..'):
            raise InvalidImagePath(f"Invalid image path: {path!r}")

    return '/'.join(segments)


def upstream_urls(upstream_base, path):
    """Candidate upstream URLs for *path*, in the order they are tried"""
    base = upstream_base.rstrip('/')
    return [f"{base}/{subpath}/{path}" for subpath in UPSTREAM_SUBPATHS]


def fetch_image(path, upstream_base, timeout=15, fallback_on_transport_error=True):
    """Fetch *path* from the upstream, falling back from /uploads to /images.

    Args:
        path: slash-joined relative path, as taken from the route.
        upstream_base: upstream origin, e.g. "http://files.example.com:8000".
        timeout: seconds allowed per upstream request.
        fallback_on_transport_error: when False, a transport error on the first
            URL aborts immediately instead of trying the second one.

    Returns:
        UpstreamImage for the first 2xx response.

    Raises:
        InvalidImagePath: path failed sanitisation, nothing was requested.
        UpstreamTransportError: a request raised and no later URL succeeded.
        ImageNotFound: every URL answered with a non-2xx status.
    """
    clean_path = sanitize_path(path)
    urls = upstream_urls(upstream_base, clean_path)
    transport_error = None

    for url in urls:
        try:
            response = requests.get(url, timeout=timeout)
        except requests.RequestException as e:
            LoggingService.warning('images', f"Transport error fetching {url}", {'error': str(e)})
            transport_error = UpstreamTransportError(str(e), url)
            if not fallback_on_transport_error:
                raise transport_error
            continue

        if 200 <= response.status_code < 300:
            content_type = response.headers.get('content-type') or DEFAULT_CONTENT_TYPE
            LoggingService.debug('images', f"Fetched {url}", {
                'status': response.status_code,
                'content_type': content_type,
            })
            return UpstreamImage(response.content, content_type, url)

        LoggingService.debug('images', f"Upstream returned {response.status_code} for {url}")

    if transport_error is not None:
        raise transport_error
    raise ImageNotFound(clean_path, urls)
