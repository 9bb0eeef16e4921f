"""
Images Routes
=============

- GET  /api/images/<path>  - proxy an image from the upstream file host
- GET  /api/<path>         - same proxy, catch-all variant

The resolution cache lives for one page: the server starts every render with an
empty ResolutionCache in ``g``, and project-image.js keeps the winners it sees
while that page is open.
"""

from flask import Response, g, jsonify

from . import images_bp, images_catchall_bp
from .proxy import (
    fetch_image, InvalidImagePath, ImageNotFound, UpstreamTransportError,
)
from .resolver import ResolutionCache, ResolutionState, image_references
from ...core.config import get_config_value
from ...core.logging_service import LoggingService

CACHE_CONTROL = 'public, max-age=31536000, immutable'


def get_resolution_cache():
    """ResolutionCache shared by every image on the page being rendered"""
    if 'image_resolution_cache' not in g:
        g.image_resolution_cache = ResolutionCache()
    return g.image_resolution_cache


@images_bp.app_template_global('resolve_image')
def resolve_image(ref):
    """Template helper: ResolutionState for *ref*, starting at the page's cached winner."""
    remote_base = get_config_value('IMAGE_REMOTE_URL')
    placeholder = get_config_value('IMAGE_PLACEHOLDER')
    if not ref:
        ref = placeholder
    return ResolutionState(ref, get_resolution_cache(),
                           remote_base=remote_base, placeholder=placeholder)


def proxy_image(path):
    """Shared handler for both proxy route variants"""
    upstream = get_config_value('IMAGE_UPSTREAM_URL')
    timeout = get_config_value('IMAGE_PROXY_TIMEOUT', 15)
    fallback = get_config_value('IMAGE_PROXY_FALLBACK_ON_TRANSPORT_ERROR', True)

    try:
        image = fetch_image(path, upstream, timeout=timeout,
                            fallback_on_transport_error=fallback)
    except InvalidImagePath as e:
        LoggingService.log_security_event('Rejected image path', {'path': path, 'error': str(e)})
        return Response('Invalid image path', status=400, mimetype='text/plain')
    except ImageNotFound as e:
        LoggingService.info('images', f"Image not found upstream: {e.path}", {'attempted': e.attempted})
        return Response('Image not found', status=404, mimetype='text/plain')
    except UpstreamTransportError as e:
        LoggingService.error('images', f"Error fetching image: {e.message}", {'url': e.url})
        return jsonify({
            'error': 'Error fetching image',
            'message': e.message,
            'url': e.url,
        }), 500

    response = Response(image.body, status=200, content_type=image.content_type)
    response.headers['Cache-Control'] = CACHE_CONTROL
    response.headers['Access-Control-Allow-Origin'] = '*'
    return response


@images_bp.route('/api/images/<path:path>', methods=['GET'])
def proxy_images_route(path):
    return proxy_image(path)


@images_catchall_bp.route('/api/<path:path>', methods=['GET'])
def proxy_catchall_route(path):
    return proxy_image(path)


images_bp.add_app_template_global(image_references, 'project_images')
