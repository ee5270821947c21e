"""
Pytest configuration and shared fixtures for unit tests.
"""

import pytest

from resourcetiming_compression.config import CompressionSettings, clear_settings_cache
from resourcetiming_compression.ingestion import TimingRecord


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test load settings from scratch."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def compression_settings() -> CompressionSettings:
    """Default compression settings, independent of env and config files."""
    return CompressionSettings()


@pytest.fixture
def script_record() -> TimingRecord:
    """A script fetched at time 0 that finished at 120ms."""
    return TimingRecord(
        url="http://example.com/app.js",
        initiator_type="script",
        start_time=0,
        response_end=120,
    )


@pytest.fixture
def page_records() -> list[TimingRecord]:
    """A small page load: navigation plus a handful of resources."""
    return [
        TimingRecord(
            url="https://example.com/",
            start_time=0,
            fetch_start=2.1,
            domain_lookup_start=3.4,
            domain_lookup_end=18.9,
            connect_start=18.9,
            secure_connection_start=25.2,
            connect_end=61.7,
            request_start=62.0,
            response_start=140.3,
            response_end=188.6,
        ),
        TimingRecord(
            url="https://example.com/static/app.js",
            initiator_type="script",
            start_time=201.4,
            fetch_start=201.4,
            request_start=203.0,
            response_start=250.5,
            response_end=312.2,
        ),
        TimingRecord(
            url="https://example.com/static/app.css",
            initiator_type="link",
            start_time=201.9,
            fetch_start=201.9,
            request_start=204.0,
            response_start=240.0,
            response_end=260.0,
        ),
        TimingRecord(
            url="https://cdn.example.net/logo.png",
            initiator_type="img",
            start_time=330.0,
            fetch_start=330.0,
            domain_lookup_start=331.0,
            domain_lookup_end=350.0,
            connect_start=350.0,
            connect_end=380.0,
            request_start=381.0,
            response_start=420.0,
            response_end=455.0,
        ),
        TimingRecord(
            url="https://example.com/api/items",
            initiator_type="xmlhttprequest",
            start_time=500.0,
            request_start=501.0,
            response_start=560.0,
            response_end=575.0,
        ),
        TimingRecord(url="about:blank", start_time=10.0, response_end=11.0),
        TimingRecord(url="javascript:void(0)", start_time=12.0, response_end=13.0),
    ]
