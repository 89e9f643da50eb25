"""Cached catalog listings shared by the page and API routes."""

from shining_star.cache import get_catalog
from shining_star.repositories import (
    ServiceRepository, PackageRepository, PortfolioRepository
)


def list_services():
    return get_catalog('catalog:services', ServiceRepository.get_all)


def list_packages():
    return get_catalog('catalog:packages', PackageRepository.get_all)


def list_portfolio():
    return get_catalog('catalog:portfolio', PortfolioRepository.get_all)
