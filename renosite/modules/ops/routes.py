"""
Ops Routes
==========

Health check covering process uptime and backend reachability, plus the
admin log feeds.
"""

import time

import requests
from flask import jsonify, request

from . import ops_health_bp, ops_admin_bp
from ..auth.utils import api_admin_required
from ...core.config import get_config_value
from ...core.logging_service import LoggingService

_STARTED_AT = time.time()


def _check_backend():
    """HEAD the backend root; any HTTP answer counts as reachable."""
    url = get_config_value('BACKEND_API_URL')
    try:
        res = requests.head(url, timeout=3)
        return {'status': 'ok', 'url': url, 'http_status': res.status_code}
    except requests.RequestException as e:
        return {'status': 'warning', 'url': url, 'error': str(e)}


def _check_uptime():
    seconds = int(time.time() - _STARTED_AT)
    return {'status': 'ok', 'seconds': seconds}


@ops_health_bp.route('', methods=['GET'])
def health():
    """Overall status is the worst individual check"""
    checks = {
        'backend': _check_backend(),
        'uptime': _check_uptime(),
    }
    status = 'warning' if any(c['status'] == 'warning' for c in checks.values()) else 'ok'
    return jsonify({'status': status, 'checks': checks}), 200


@ops_admin_bp.route('/api/logs')
@api_admin_required
def api_logs():
    """Recent app_logs entries, filterable by ?level= and ?source="""
    limit = request.args.get('limit', 50, type=int)
    logs = LoggingService.recent_logs(limit=max(1, min(limit, 200)),
                                      level=request.args.get('level'),
                                      source=request.args.get('source'))
    return jsonify({'logs': logs, 'count': len(logs)})


@ops_admin_bp.route('/api/errors')
@api_admin_required
def api_errors():
    """Recent errors from app_logs for the error feed"""
    limit = request.args.get('limit', 50, type=int)
    errors = LoggingService.recent_logs(limit=max(1, min(limit, 200)), level='ERROR')
    return jsonify({'errors': errors, 'count': len(errors)})
