"""
Repository for package data access.

Packages store the ids of their services as a JSON list.
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
        'services': _json_columns.load(row['services'], []),
        'price': row['price'],
        'discount': row['discount'],
        'duration': row['duration'],
        'available': bool(row['available']),
    }


class PackageRepository:
    """Data access layer for packages"""

    @staticmethod
    def get_all() -> List[Dict[str, Any]]:
        logger.debug("Fetching all packages")
        rows = query_db('SELECT * FROM packages ORDER BY created_at, rowid')
        return [_row_to_record(row) for row in rows]

    @staticmethod
    def get_by_id(package_id: str) -> Optional[Dict[str, Any]]:
        logger.debug(f"Fetching package by ID: {package_id}")
        row = query_db('SELECT * FROM packages WHERE id = ?', [package_id], one=True)
        return _row_to_record(row) if row else None

    @staticmethod
    def get_ids() -> List[str]:
        return [row['id'] for row in query_db('SELECT id FROM packages')]

    @staticmethod
    def get_referencing(service_id: str) -> List[Dict[str, Any]]:
        """
        Packages whose services list contains service_id.

        Args:
            service_id: Service ID to look for

        Returns:
            List of package records
        """
        rows = query_db(
            '''
            SELECT * FROM packages
            WHERE EXISTS (SELECT 1 FROM json_each(packages.services) WHERE value = ?)
            ORDER BY created_at, rowid
            ''',
            [service_id]
        )
        return [_row_to_record(row) for row in rows]

    @staticmethod
    def create(record: Dict[str, Any]) -> None:
        logger.info(f"Creating package: {record['id']}")
        now = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S')
        execute_db(
            '''
            INSERT INTO packages (
                id, name, description, services, price, discount, duration,
                available, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''',
            [
                record['id'],
                _json_columns.dump(record['name']),
                _json_columns.dump(record['description']),
                _json_columns.dump(record['services']),
                record['price'],
                record['discount'],
                record['duration'],
                1 if record.get('available', True) else 0,
                now,
                now,
            ]
        )

    @staticmethod
    def update(record: Dict[str, Any]) -> bool:
        logger.info(f"Updating package: {record['id']}")
        now = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S')
        rowcount = execute_db(
            '''
            UPDATE packages SET
                name = ?, description = ?, services = ?, price = ?, discount = ?,
                duration = ?, available = ?, updated_at = ?
            WHERE id = ?
            ''',
            [
                _json_columns.dump(record['name']),
                _json_columns.dump(record['description']),
                _json_columns.dump(record['services']),
                record['price'],
                record['discount'],
                record['duration'],
                1 if record.get('available', True) else 0,
                now,
                record['id'],
            ]
        )
        return rowcount > 0

    @staticmethod
    def update_services(package_id: str, service_ids: List[str]) -> bool:
        """Replace only the services list of a package."""
        now = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S')
        rowcount = execute_db(
            'UPDATE packages SET services = ?, updated_at = ? WHERE id = ?',
            [_json_columns.dump(service_ids), now, package_id]
        )
        return rowcount > 0

    @staticmethod
    def delete(package_id: str) -> bool:
        logger.info(f"Deleting package: {package_id}")
        return execute_db('DELETE FROM packages WHERE id = ?', [package_id]) > 0

    @staticmethod
    def count() -> int:
        row = query_db('SELECT COUNT(*) as cnt FROM packages', one=True)
        return row['cnt'] if row else 0
