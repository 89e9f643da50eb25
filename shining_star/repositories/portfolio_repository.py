"""
Repository for before/after portfolio gallery entries.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
import logging

from shining_star.db_manager import query_db, execute_db
from shining_star.repositories import _json_columns

logger = logging.getLogger(__name__)


def _row_to_record(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'id': row['id'],
        'title': _json_columns.load(row['title'], {}),
        'description': _json_columns.load(row['description'], {}),
        'category': row['category'],
        'beforeImage': row['before_image'],
        'afterImage': row['after_image'],
        'featured': bool(row['featured']),
        'createdAt': row['created_at'],
    }


class PortfolioRepository:
    """Data access layer for portfolio items"""

    @staticmethod
    def get_all() -> List[Dict[str, Any]]:
        """Newest first."""
        rows = query_db('SELECT * FROM portfolio ORDER BY created_at DESC, rowid DESC')
        return [_row_to_record(row) for row in rows]

    @staticmethod
    def get_by_id(item_id: str) -> Optional[Dict[str, Any]]:
        row = query_db('SELECT * FROM portfolio WHERE id = ?', [item_id], one=True)
        return _row_to_record(row) if row else None

    @staticmethod
    def get_ids() -> List[str]:
        return [row['id'] for row in query_db('SELECT id FROM portfolio')]

    @staticmethod
    def create(record: Dict[str, Any]) -> None:
        logger.info(f"Creating portfolio item: {record['id']}")
        execute_db(
            '''
            INSERT INTO portfolio (
                id, title, description, category, before_image, after_image,
                featured, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ''',
            [
                record['id'],
                _json_columns.dump(record['title']),
                _json_columns.dump(record['description']),
                record.get('category'),
                record.get('beforeImage'),
                record.get('afterImage'),
                1 if record.get('featured') else 0,
                datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S'),
            ]
        )

    @staticmethod
    def delete(item_id: str) -> bool:
        logger.info(f"Deleting portfolio item: {item_id}")
        return execute_db('DELETE FROM portfolio WHERE id = ?', [item_id]) > 0

    @staticmethod
    def count() -> int:
        row = query_db('SELECT COUNT(*) as cnt FROM portfolio', one=True)
        return row['cnt'] if row else 0
