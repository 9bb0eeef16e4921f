"""
Centralized logging service for the renosite application.
Writes structured entries to the app_logs table, falling back to the console.
"""

import json
import traceback
from datetime import datetime, timedelta
from flask import request, has_request_context
from .database import Database
from .config import get_config_value


def _log_db():
    return get_config_value('LOG_DB')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        try:
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()

            user_agent = request.headers.get('User-Agent', '')
            request_path = request.path

            return ip_address, user_agent, request_path
        except Exception:
            return None, None, None

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (images, projects, auth, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        if isinstance(details, (dict, list)):
            details = json.dumps(details, indent=2, default=str)

        try:
            db_path = _log_db()
            Database.ensure_logs_table(db_path)

            ip_address, user_agent, request_path = LoggingService._get_request_context()
            timestamp = datetime.now().isoformat()

            with Database.connect(db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    timestamp, level.upper(), source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
                conn.commit()

        except Exception as e:
            # Fallback to console logging if database fails
            print(f"[{datetime.now().isoformat()}] [{level.upper()}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            print(f"Logging service error: {e}")

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log user actions (login, logout, project edits, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log outbound API calls"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None, ip_address=None):
        """Log security-related events"""
        if ip_address:
            details = details or {}
            details['provided_ip'] = ip_address

        LoggingService.warning('security', message, details)

    @staticmethod
    def recent_logs(limit=100, level=None, source=None):
        """Return the newest log entries as dicts, optionally filtered"""
        try:
            conditions = []
            params = []
            if level:
                conditions.append('level = ?')
                params.append(level.upper())
            if source:
                conditions.append('source = ?')
                params.append(source)
            where = f' WHERE {" AND ".join(conditions)}' if conditions else ''

            db_path = _log_db()
            Database.ensure_logs_table(db_path)
            with Database.connect(db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(f"""
                    SELECT timestamp, level, source, message, details, request_path
                    FROM app_logs{where}
                    ORDER BY id DESC
                    LIMIT ?
                """, params + [limit])
                return [
                    {
                        'timestamp': row[0], 'level': row[1], 'source': row[2],
                        'message': row[3], 'details': row[4], 'request_path': row[5],
                    }
                    for row in cursor.fetchall()
                ]
        except Exception as e:
            print(f"Failed to read logs: {e}")
            return []

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        try:
            cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()

            db_path = _log_db()
            Database.ensure_logs_table(db_path)
            with Database.connect(db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    DELETE FROM app_logs
                    WHERE timestamp < ?
                """, (cutoff_iso,))

                deleted_count = cursor.rowcount
                conn.commit()

            LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
            return deleted_count

        except Exception as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0

