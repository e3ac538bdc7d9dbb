"""SQLite implementation of recommendation storage."""

import json
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from stock_advisor.exceptions import PersistenceError
from stock_advisor.models.recommendation import Recommendation, RecommendationType, StoredRecommendation
from stock_advisor.storage.base_store import BaseRecommendationStore
from stock_advisor.storage.schema import create_schema

logger = logging.getLogger(__name__)


class SQLiteRecommendationStore(BaseRecommendationStore):
    """SQLite implementation for recommendation storage."""

    def __init__(self, db_path: str = "recommendations.db"):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file (":memory:" for an in-memory store).
        """
        self.db_path = db_path if db_path == ":memory:" else Path(db_path)
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.db_path))
            self._connection.row_factory = sqlite3.Row
        return self._connection

    @contextmanager
    def transaction(self):
        """Context manager for database transactions."""
        try:
            yield self.connection
            self.connection.commit()
        except Exception:
            self.connection.rollback()
            raise

    def initialize(self) -> None:
        """Initialize database with schema."""
        with self.transaction() as conn:
            create_schema(conn)
        logger.info(f"Initialized recommendation database at {self.db_path}")

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def save_all(self, recommendations: Sequence[Recommendation]) -> List[int]:
        """Append a batch; every row in one call shares a batch id."""
        if not recommendations:
            return []

        batch_id = uuid.uuid4().hex
        sql = """
            INSERT INTO recommendations (
                batch_id, symbol, company_name, current_price, previous_close,
                recommendation, reasoning, target_price, stop_loss, risk_level,
                key_keywords, news_sources, generated_at, analysis_date
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """

        ids: List[int] = []
        try:
            with self.transaction() as conn:
                for rec in recommendations:
                    cursor = conn.execute(
                        sql,
                        (
                            batch_id,
                            rec.symbol,
                            rec.company_name,
                            rec.current_price,
                            rec.previous_close,
                            rec.recommendation.value,
                            rec.reasoning,
                            rec.target_price,
                            rec.stop_loss,
                            rec.risk_level,
                            json.dumps(list(rec.key_keywords)),
                            json.dumps(list(rec.news_sources)),
                            rec.generated_at.isoformat(),
                            rec.analysis_date.isoformat(),
                        ),
                    )
                    ids.append(cursor.lastrowid)
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to save {len(recommendations)} recommendations: {e}", target=str(self.db_path)) from e

        logger.debug(f"Saved batch {batch_id} with {len(ids)} recommendations")
        return ids

    def get_latest_batch(self) -> List[StoredRecommendation]:
        sql = """
            SELECT * FROM recommendations
            WHERE batch_id = (SELECT batch_id FROM recommendations ORDER BY id DESC LIMIT 1)
            ORDER BY id
        """
        cursor = self.connection.execute(sql)
        return [self._row_to_recommendation(row) for row in cursor.fetchall()]

    def get_latest(self, limit: int = 10) -> List[StoredRecommendation]:
        sql = "SELECT * FROM recommendations ORDER BY generated_at DESC, id DESC LIMIT ?"
        cursor = self.connection.execute(sql, (limit,))
        return [self._row_to_recommendation(row) for row in cursor.fetchall()]

    def get_by_symbol(self, symbol: str) -> List[StoredRecommendation]:
        sql = "SELECT * FROM recommendations WHERE symbol = ? ORDER BY generated_at DESC, id DESC"
        cursor = self.connection.execute(sql, (symbol.upper(),))
        return [self._row_to_recommendation(row) for row in cursor.fetchall()]

    def get_by_type(self, recommendation: RecommendationType) -> List[StoredRecommendation]:
        sql = "SELECT * FROM recommendations WHERE recommendation = ? ORDER BY generated_at DESC, id DESC"
        cursor = self.connection.execute(sql, (recommendation.value,))
        return [self._row_to_recommendation(row) for row in cursor.fetchall()]

    def _row_to_recommendation(self, row: sqlite3.Row) -> StoredRecommendation:
        """Convert database row to StoredRecommendation."""
        return StoredRecommendation(
            id=row["id"],
            recommendation=Recommendation(
                symbol=row["symbol"],
                company_name=row["company_name"],
                current_price=row["current_price"],
                previous_close=row["previous_close"],
                target_price=row["target_price"],
                stop_loss=row["stop_loss"],
                recommendation=RecommendationType(row["recommendation"]),
                reasoning=row["reasoning"] or "",
                risk_level=row["risk_level"],
                key_keywords=tuple(json.loads(row["key_keywords"])) if row["key_keywords"] else (),
                news_sources=tuple(json.loads(row["news_sources"])) if row["news_sources"] else (),
                generated_at=datetime.fromisoformat(row["generated_at"]),
                analysis_date=datetime.fromisoformat(row["analysis_date"]),
            ),
        )
