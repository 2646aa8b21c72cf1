import asyncio
from types import SimpleNamespace

from geopy.exc import GeocoderServiceError, GeocoderTimedOut

from mtc_checkin.geocoding.opencage_geocoder import OpenCageFallbackGeocoder
from mtc_checkin.location.model import Coordinate


class StubGeocoder:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.queries = []

    async def geocode(self, query, exactly_one=True):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


def test_missing_api_key_means_fallback_unavailable():
    stub = StubGeocoder(SimpleNamespace(latitude=19.07, longitude=72.88))
    geocoder = OpenCageFallbackGeocoder(None, geocoder=stub)

    assert geocoder.enabled is False
    assert asyncio.run(geocoder.locate("Kurla, Mumbai")) is None
    assert stub.queries == []


def test_empty_query_is_not_sent():
    stub = StubGeocoder()
    geocoder = OpenCageFallbackGeocoder("key", geocoder=stub)

    assert asyncio.run(geocoder.locate("   ")) is None
    assert stub.queries == []


def test_best_match_is_returned_as_coordinate():
    stub = StubGeocoder(SimpleNamespace(latitude=19.0728, longitude=72.8826))
    geocoder = OpenCageFallbackGeocoder("key", geocoder=stub)

    assert asyncio.run(geocoder.locate(" Kurla Center, Mumbai ")) == Coordinate(19.0728, 72.8826)
    assert stub.queries == ["Kurla Center, Mumbai"]


def test_no_result_returns_none():
    geocoder = OpenCageFallbackGeocoder("key", geocoder=StubGeocoder(None))
    assert asyncio.run(geocoder.locate("Atlantis")) is None


def test_timeout_and_service_errors_return_none():
    for error in (GeocoderTimedOut("timed out"), GeocoderServiceError("503")):
        geocoder = OpenCageFallbackGeocoder("key", geocoder=StubGeocoder(error=error))
        assert asyncio.run(geocoder.locate("Kurla")) is None
