"""
Shared fixtures for integration tests.

Provides:
- Isolated settings (no env vars, no config file in the working dir)
- A frame snapshot and a JSON entry export on disk
"""

import json
from pathlib import Path

import pytest

from resourcetiming_compression.config import clear_settings_cache

# =============================================================================
# SAMPLE DATA
# =============================================================================

PAGE_ENTRIES = [
    {
        "name": "https://shop.example.com/static/js/vendor.js",
        "initiatorType": "script",
        "startTime": 120.4,
        "fetchStart": 120.4,
        "domainLookupStart": 120.4,
        "domainLookupEnd": 120.4,
        "connectStart": 120.4,
        "connectEnd": 120.4,
        "requestStart": 122.9,
        "responseStart": 180.2,
        "responseEnd": 241.7,
    },
    {
        "name": "https://shop.example.com/static/js/app.js",
        "initiatorType": "script",
        "startTime": 121.0,
        "requestStart": 123.5,
        "responseStart": 190.0,
        "responseEnd": 230.5,
    },
    {
        "name": "https://shop.example.com/static/css/site.css",
        "initiatorType": "link",
        "startTime": 118.6,
        "responseEnd": 160.1,
    },
    {
        "name": "https://img.example-cdn.net/products/1.jpg",
        "initiatorType": "img",
        "startTime": 300.0,
        "domainLookupStart": 300.5,
        "domainLookupEnd": 320.5,
        "connectStart": 320.5,
        "secureConnectionStart": 330.0,
        "connectEnd": 360.2,
        "requestStart": 361.0,
        "responseStart": 400.0,
        "responseEnd": 470.0,
    },
    {
        "name": "https://img.example-cdn.net/products/2.jpg",
        "initiatorType": "img",
        "startTime": 301.0,
        "responseEnd": 480.0,
    },
    {
        "name": "https://shop.example.com/api/cart",
        "initiatorType": "xmlhttprequest",
        "startTime": 520.0,
        "responseEnd": 560.0,
    },
    {
        "name": "https://shop.example.com/api/cart",
        "initiatorType": "xmlhttprequest",
        "startTime": 900.0,
        "responseEnd": 935.0,
    },
    {"name": "about:blank", "initiatorType": "other", "startTime": 5.0},
]

FRAME_SNAPSHOT = {
    "url": "https://shop.example.com/",
    "timing": {"navigationStart": 1700000000000},
    "navigation": [
        {
            "fetchStart": 1.5,
            "domainLookupStart": 3.0,
            "domainLookupEnd": 15.0,
            "connectStart": 15.0,
            "connectEnd": 40.0,
            "requestStart": 41.0,
            "responseStart": 95.0,
            "responseEnd": 110.0,
        }
    ],
    "resources": PAGE_ENTRIES[:3],
    "frames": [
        {
            "url": "https://ads.example.net/slot.html",
            "timing": {"navigationStart": 1700000000250},
            "resources": [
                {
                    "name": "https://ads.example.net/creative.png",
                    "initiatorType": "img",
                    "startTime": 20.0,
                    "responseEnd": 45.0,
                }
            ],
        },
        {"url": "https://other.example.org/", "accessible": False},
    ],
}


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test from an empty directory with no RT_* variables."""
    for name in ["RT_DEFAULT_PROVIDER", "RT_LOG_LEVEL", "RT_SKIPPED_SCHEMES", "RT_STRICT_URLS"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def page_entries() -> list[dict]:
    return json.loads(json.dumps(PAGE_ENTRIES))


@pytest.fixture
def entries_file(tmp_path: Path, page_entries) -> Path:
    path = tmp_path / "timings.json"
    path.write_text(json.dumps(page_entries))
    return path


@pytest.fixture
def frame_snapshot() -> dict:
    return json.loads(json.dumps(FRAME_SNAPSHOT))


@pytest.fixture
def snapshot_file(tmp_path: Path, frame_snapshot) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(frame_snapshot))
    return path
