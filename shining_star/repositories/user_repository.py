"""
Repository for user account data access.
"""

from typing import Optional, Dict, Any
import logging

from shining_star.db_manager import query_db

logger = logging.getLogger(__name__)


class UserRepository:
    """Data access layer for user accounts"""

    @staticmethod
    def get_by_username(username: str) -> Optional[Dict[str, Any]]:
        """
        Get user by username.

        Args:
            username: Account username

        Returns:
            User dict (including password_hash) or None if not found
        """
        logger.debug(f"Fetching user by username: {username}")
        return query_db('SELECT * FROM users WHERE username = ?', [username], one=True)
