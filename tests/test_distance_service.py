"""
Tests for distance resolvers.

The Google resolver is exercised against a mocked requests session.
"""

import pytest
import requests
from unittest.mock import Mock

from shining_star.exceptions import DistanceUnavailable
from shining_star.services.distance_service import (
    FixedDistanceResolver, GoogleDistanceResolver, build_resolver, METERS_PER_MILE
)

ORIGIN = '123 Main St, Philadelphia, PA'


def mock_session(payload=None, status_error=None, exc=None):
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.side_effect = status_error
    session = Mock()
    if exc is not None:
        session.get.side_effect = exc
    else:
        session.get.return_value = response
    return session


def matrix_payload(meters, element_status='OK'):
    return {
        'status': 'OK',
        'rows': [{'elements': [{'status': element_status, 'distance': {'value': meters}}]}],
    }


class TestFixedDistanceResolver:
    def test_known_address(self):
        resolver = FixedDistanceResolver({'200 Far Ave': 15})
        assert resolver.resolve(ORIGIN, '200 Far Ave') == 15.0

    def test_lookup_ignores_case_and_spacing(self):
        resolver = FixedDistanceResolver({'200 Far Ave': 15})
        assert resolver.resolve(ORIGIN, '  200  far ave ') == 15.0

    def test_unknown_address_without_default(self):
        with pytest.raises(DistanceUnavailable):
            FixedDistanceResolver({}).resolve(ORIGIN, 'Nowhere')

    def test_unknown_address_uses_default(self):
        assert FixedDistanceResolver({}, default=0).resolve(ORIGIN, 'Nowhere') == 0.0


class TestGoogleDistanceResolver:
    def test_meters_converted_to_miles(self):
        session = mock_session(matrix_payload(METERS_PER_MILE * 12))
        resolver = GoogleDistanceResolver('key', timeout=2, session=session)

        assert resolver.resolve(ORIGIN, '200 Far Ave') == pytest.approx(12.0)

        _, kwargs = session.get.call_args
        assert kwargs['params']['origins'] == ORIGIN
        assert kwargs['params']['destinations'] == '200 Far Ave'
        assert kwargs['timeout'] == 2

    def test_network_failure(self):
        session = mock_session(exc=requests.ConnectionError('boom'))
        with pytest.raises(DistanceUnavailable):
            GoogleDistanceResolver('key', session=session).resolve(ORIGIN, 'x')

    def test_http_error(self):
        session = mock_session(status_error=requests.HTTPError('500'))
        with pytest.raises(DistanceUnavailable):
            GoogleDistanceResolver('key', session=session).resolve(ORIGIN, 'x')

    def test_bad_api_status(self):
        session = mock_session({'status': 'REQUEST_DENIED'})
        with pytest.raises(DistanceUnavailable):
            GoogleDistanceResolver('key', session=session).resolve(ORIGIN, 'x')

    def test_no_route(self):
        session = mock_session(matrix_payload(0, element_status='ZERO_RESULTS'))
        with pytest.raises(DistanceUnavailable):
            GoogleDistanceResolver('key', session=session).resolve(ORIGIN, 'x')

    def test_malformed_payload(self):
        session = mock_session({'status': 'OK', 'rows': []})
        with pytest.raises(DistanceUnavailable):
            GoogleDistanceResolver('key', session=session).resolve(ORIGIN, 'x')

    def test_api_key_required(self):
        with pytest.raises(ValueError):
            GoogleDistanceResolver('')


class TestBuildResolver:
    def test_fixed(self):
        resolver = build_resolver({'DISTANCE_RESOLVER': 'fixed', 'DISTANCE_TABLE': {'a': 1}})
        assert isinstance(resolver, FixedDistanceResolver)
        assert resolver.resolve(ORIGIN, 'A') == 1.0

    def test_google(self):
        resolver = build_resolver({'DISTANCE_RESOLVER': 'google', 'GOOGLE_MAPS_API_KEY': 'k'})
        assert isinstance(resolver, GoogleDistanceResolver)

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            build_resolver({'DISTANCE_RESOLVER': 'carrier-pigeon'})
