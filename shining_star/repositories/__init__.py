"""
Repository layer for data access.

Repositories handle all database operations and translate between
sqlite rows and the camelCase records the rest of the app works with.
"""

from shining_star.repositories.service_repository import ServiceRepository
from shining_star.repositories.package_repository import PackageRepository
from shining_star.repositories.portfolio_repository import PortfolioRepository
from shining_star.repositories.user_repository import UserRepository

__all__ = [
    'ServiceRepository',
    'PackageRepository',
    'PortfolioRepository',
    'UserRepository'
]
