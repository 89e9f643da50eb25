"""
Repository for service catalog data access.

Centralizes all service-related database queries.
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
        'name': _json_columns.load(row['name'], {}),
        'description': _json_columns.load(row['description'], {}),
        'price': row['price'],
        'duration': row['duration'],
        'category': row['category'],
        'available': bool(row['available']),
        'calculationType': row['calculation_type'],
        'unit': row['unit'],
        'maxQuantity': row['max_quantity'],
        'minArea': row['min_area'],
        'maxArea': row['max_area'],
    }


def _record_params(record: Dict[str, Any]) -> List[Any]:
    return [
        _json_columns.dump(record['name']),
        _json_columns.dump(record['description']),
        record['price'],
        record['duration'],
        record.get('category'),
        1 if record.get('available', True) else 0,
        record.get('calculationType', 'fixed'),
        record.get('unit'),
        record.get('maxQuantity'),
        record.get('minArea'),
        record.get('maxArea'),
    ]


class ServiceRepository:
    """Data access layer for services"""

    @staticmethod
    def get_all() -> List[Dict[str, Any]]:
        """
        Get all services.

        Returns:
            List of service records, in creation order
        """
        logger.debug("Fetching all services")
        rows = query_db('SELECT * FROM services ORDER BY created_at, rowid')
        return [_row_to_record(row) for row in rows]

    @staticmethod
    def get_by_id(service_id: str) -> Optional[Dict[str, Any]]:
        """
        Get service by ID.

        Args:
            service_id: Service ID

        Returns:
            Service record or None if not found
        """
        logger.debug(f"Fetching service by ID: {service_id}")
        row = query_db('SELECT * FROM services WHERE id = ?', [service_id], one=True)
        return _row_to_record(row) if row else None

    @staticmethod
    def get_ids() -> List[str]:
        """Ids of every service."""
        return [row['id'] for row in query_db('SELECT id FROM services')]

    @staticmethod
    def create(record: Dict[str, Any]) -> None:
        """Insert a new service record."""
        logger.info(f"Creating service: {record['id']}")
        now = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S')
        execute_db(
            '''
            INSERT INTO services (
                id, name, description, price, duration, category, available,
                calculation_type, unit, max_quantity, min_area, max_area,
                created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''',
            [record['id']] + _record_params(record) + [now, now]
        )

    @staticmethod
    def update(record: Dict[str, Any]) -> bool:
        """
        Replace an existing service record.

        Returns:
            True if a row was updated
        """
        logger.info(f"Updating service: {record['id']}")
        now = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S')
        rowcount = execute_db(
            '''
            UPDATE services SET
                name = ?, description = ?, price = ?, duration = ?, category = ?,
                available = ?, calculation_type = ?, unit = ?, max_quantity = ?,
                min_area = ?, max_area = ?, updated_at = ?
            WHERE id = ?
            ''',
            _record_params(record) + [now, record['id']]
        )
        return rowcount > 0

    @staticmethod
    def delete(service_id: str) -> bool:
        """
        Delete a service.

        Returns:
            True if a row was deleted
        """
        logger.info(f"Deleting service: {service_id}")
        return execute_db('DELETE FROM services WHERE id = ?', [service_id]) > 0

    @staticmethod
    def count() -> int:
        row = query_db('SELECT COUNT(*) as cnt FROM services', one=True)
        return row['cnt'] if row else 0
