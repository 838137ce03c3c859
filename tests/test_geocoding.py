import requests

import geocoding
from conftest import FakeResponse


def _patch_get(monkeypatch, response=None, exc=None):
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        if exc is not None:
            raise exc
        return response

    monkeypatch.setattr(geocoding.requests, "get", fake_get)
    return calls


def test_nominatim_result_is_lon_lat(monkeypatch):
    calls = _patch_get(monkeypatch, FakeResponse(payload=[{"lat": "40.66", "lon": "-73.97"}]))

    assert geocoding.search_place("Prospect Park") == (-73.97, 40.66)
    url, kwargs = calls[0]
    assert url.endswith("/search")
    assert kwargs["headers"]["User-Agent"]


def test_mapbox_used_when_token_given(monkeypatch):
    payload = {"features": [{"geometry": {"coordinates": [-73.97, 40.66]}}]}
    calls = _patch_get(monkeypatch, FakeResponse(payload=payload))

    assert geocoding.search_place("Prospect Park", mapbox_token="tok") == (-73.97, 40.66)
    assert calls[0][1]["params"]["access_token"] == "tok"


def test_no_hits_and_errors_return_none(monkeypatch):
    _patch_get(monkeypatch, FakeResponse(payload=[]))
    assert geocoding.search_place("nowhere") is None

    _patch_get(monkeypatch, FakeResponse(status_code=503, payload=[]))
    assert geocoding.search_place("nowhere") is None

    _patch_get(monkeypatch, exc=requests.Timeout("slow"))
    assert geocoding.search_place("nowhere") is None


def test_blank_query_skips_request(monkeypatch):
    calls = _patch_get(monkeypatch, FakeResponse(payload=[]))
    assert geocoding.search_place("   ") is None
    assert calls == []
