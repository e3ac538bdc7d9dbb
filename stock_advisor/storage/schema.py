"""Database schema definitions for recommendation storage."""

import sqlite3


def create_schema(conn: sqlite3.Connection) -> None:
    """Create all database tables.

    Args:
        conn: SQLite database connection
    """
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS recommendations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            batch_id TEXT NOT NULL,
            symbol TEXT NOT NULL,
            company_name TEXT NOT NULL,
            current_price REAL NOT NULL,
            previous_close REAL NOT NULL,
            recommendation TEXT NOT NULL,  -- STRONG_BUY, BUY, HOLD, SELL, STRONG_SELL
            reasoning TEXT,
            target_price REAL,
            stop_loss REAL,
            risk_level REAL,  -- 1-10 scale
            key_keywords TEXT,  -- JSON array
            news_sources TEXT,  -- JSON array
            generated_at TEXT NOT NULL,
            analysis_date TEXT NOT NULL
        )
    """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_recommendations_symbol ON recommendations(symbol, generated_at)")
    conn.execute("CREATE INDEX IF NOT EXISTS idx_recommendations_batch ON recommendations(batch_id)")
