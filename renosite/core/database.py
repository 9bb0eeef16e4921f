import os
import sqlite3
import threading


class Database:
    # Serialises schema creation across request threads
    _lock = threading.Lock()

    @staticmethod
    def connect(path):
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return sqlite3.connect(path)

    @classmethod
    def ensure_logs_table(cls, path):
        """Create the app_logs table and its indexes if missing."""
        with cls._lock:
            with cls.connect(path) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS app_logs (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        timestamp TEXT NOT NULL,
                        level TEXT NOT NULL,
                        source TEXT NOT NULL,
                        message TEXT NOT NULL,
                        details TEXT,
                        ip_address TEXT,
                        user_agent TEXT,
                        request_path TEXT,
                        user_id TEXT
                    )
                """)
                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                    ON app_logs(timestamp DESC)
                """)
                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_logs_level
                    ON app_logs(level)
                """)
                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_logs_source
                    ON app_logs(source)
                """)
                conn.commit()
