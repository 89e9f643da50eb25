"""
Address-to-distance resolution.

The quote engine never looks up distances itself; routes resolve the
customer's distance through one of these strategies first.
"""

from typing import Dict, Mapping, Optional
import logging

import requests

from shining_star.exceptions import DistanceUnavailable

logger = logging.getLogger(__name__)

METERS_PER_MILE = 1609.344


class DistanceResolver:
    """Strategy interface: one-way driving distance in miles between two addresses."""

    def resolve(self, origin: str, destination: str) -> float:
        raise NotImplementedError


class FixedDistanceResolver(DistanceResolver):
    """
    Lookup-table resolver for tests and offline deployments.

    Addresses are matched case-insensitively after trimming whitespace.
    """

    def __init__(self, table: Optional[Mapping[str, float]] = None, default: Optional[float] = None):
        self.table: Dict[str, float] = {
            self._key(address): float(miles) for address, miles in (table or {}).items()
        }
        self.default = default

    @staticmethod
    def _key(address: str) -> str:
        return ' '.join(address.split()).lower()

    def resolve(self, origin: str, destination: str) -> float:
        miles = self.table.get(self._key(destination))
        if miles is not None:
            return miles
        if self.default is not None:
            return float(self.default)
        raise DistanceUnavailable(f"No distance known for address: {destination}")


class GoogleDistanceResolver(DistanceResolver):
    """Resolver backed by the Google Distance Matrix API."""

    API_URL = 'https://maps.googleapis.com/maps/api/distancematrix/json'

    def __init__(self, api_key: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        if not api_key:
            raise ValueError("GOOGLE_MAPS_API_KEY is required for the google distance resolver")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def resolve(self, origin: str, destination: str) -> float:
        params = {
            'origins': origin,
            'destinations': destination,
            'units': 'imperial',
            'key': self.api_key,
        }
        try:
            response = self.session.get(self.API_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Distance lookup request failed: {e}")
            raise DistanceUnavailable(f"Distance lookup failed: {e}") from e
        except ValueError as e:
            logger.error(f"Distance lookup returned invalid JSON: {e}")
            raise DistanceUnavailable("Distance lookup returned an invalid response") from e

        if payload.get('status') != 'OK':
            logger.warning(f"Distance lookup status: {payload.get('status')}")
            raise DistanceUnavailable(f"Distance lookup status: {payload.get('status')}")

        try:
            element = payload['rows'][0]['elements'][0]
            if element.get('status') != 'OK':
                raise DistanceUnavailable(f"No route to address: {destination}")
            meters = float(element['distance']['value'])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Unexpected distance lookup payload: {e}")
            raise DistanceUnavailable("Distance lookup returned an unexpected payload") from e

        miles = meters / METERS_PER_MILE
        logger.debug(f"Resolved distance to {destination}: {miles:.2f} miles")
        return miles


def build_resolver(config: Mapping) -> DistanceResolver:
    """Pick the resolver strategy named by DISTANCE_RESOLVER."""
    kind = config.get('DISTANCE_RESOLVER', 'fixed')
    if kind == 'google':
        return GoogleDistanceResolver(
            config.get('GOOGLE_MAPS_API_KEY'),
            timeout=config.get('DISTANCE_TIMEOUT_SECONDS', 5.0),
        )
    if kind == 'fixed':
        return FixedDistanceResolver(
            config.get('DISTANCE_TABLE') or {},
            default=config.get('DISTANCE_DEFAULT_MILES'),
        )
    raise ValueError(f"Unknown DISTANCE_RESOLVER: {kind}")
