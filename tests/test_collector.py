"""Tests for client metadata extraction."""

from datetime import datetime

from clientmeta.collector import extract
from clientmeta.geoip import CountryResolver
from clientmeta.models import Info
from tests.fakes import FakeReader

FIXED_NOW = datetime(2025, 10, 12, 13, 45, 7)


def test_extract_full_scenario() -> None:
    """Given a typical Cloudflare-fronted Chrome request, then every field is filled."""
    headers = {
        "User-Agent": "Mozilla/5.0 (Windows NT 10.0) Chrome/120.0",
        "Accept-Language": "en-US,en;q=0.9",
        "CF-IPCountry": "US",
        "X-Client-UTC-Offset": " -360 ",
    }

    info = extract(headers, "203.0.113.7:54321", now=FIXED_NOW)

    assert info == Info(
        ip="203.0.113.7",
        platform="Windows",
        browser="Chrome",
        country_code="US",
        gmt_time="-360",
        lang="en-US",
        user_agent="Mozilla/5.0 (Windows NT 10.0) Chrome/120.0",
        request_time="2025-10-12 13:45:07",
    )


def test_extract_with_nothing_usable() -> None:
    """Given no headers, no resolver and an unparseable peer, then sentinels are used."""
    info = extract({}, "not-an-address", now=FIXED_NOW)

    assert info.ip == ""
    assert info.country_code == "Unknown"
    assert info.browser == "Unknown"
    assert info.platform == "Unknown"
    assert info.lang == ""
    assert info.gmt_time == ""
    assert info.user_agent == ""
    assert info.request_time == "2025-10-12 13:45:07"


def test_extract_header_lookup_is_case_insensitive() -> None:
    headers = {"user-agent": "Firefox/121.0", "x-forwarded-for": "198.51.100.3", "cf-ipcountry": "DE"}

    info = extract(headers, "10.0.0.1:80")

    assert info.browser == "Firefox"
    assert info.ip == "198.51.100.3"
    assert info.country_code == "DE"


def test_cdn_header_wins_over_resolver() -> None:
    """Given a CDN country and a resolver that disagrees, then the header is used verbatim."""
    reader = FakeReader({"81.2.69.142": "GB"})
    resolver = CountryResolver(reader)

    info = extract({"CF-IPCountry": "  xx "}, "81.2.69.142:1000", resolver)

    assert info.country_code == "xx"
    assert reader.lookups == []


def test_resolver_used_when_cdn_header_blank() -> None:
    resolver = CountryResolver(FakeReader({"81.2.69.142": "GB"}))

    info = extract({"CF-IPCountry": "   ", "X-Forwarded-For": "81.2.69.142"}, "10.0.0.1:80", resolver)

    assert info.country_code == "GB"


def test_resolver_miss_falls_back_to_unknown() -> None:
    resolver = CountryResolver(FakeReader({}))

    info = extract({}, "192.0.2.1:80", resolver)

    assert info.country_code == "Unknown"


def test_resolver_not_called_without_ip() -> None:
    reader = FakeReader({"": "GB"})

    info = extract({}, "garbage", CountryResolver(reader))

    assert info.country_code == "Unknown"
    assert reader.lookups == []


def test_disabled_resolver_behaves_like_none() -> None:
    info = extract({}, "192.0.2.1:80", CountryResolver.disabled())

    assert info.ip == "192.0.2.1"
    assert info.country_code == "Unknown"


def test_untrusted_country_header_is_ignored() -> None:
    resolver = CountryResolver(FakeReader({"192.0.2.1": "NL"}))

    info = extract({"CF-IPCountry": "US"}, "192.0.2.1:80", resolver, trust_country_header=False)

    assert info.country_code == "NL"


def test_forwarded_for_beats_peer_address() -> None:
    info = extract({"X-Forwarded-For": "bogus, 2001:db8::9, 198.51.100.1"}, "10.0.0.5:443")

    assert info.ip == "2001:db8::9"


def test_request_time_uses_wall_clock_format() -> None:
    info = extract({}, "")

    datetime.strptime(info.request_time, "%Y-%m-%d %H:%M:%S")


def test_info_serialization() -> None:
    info = Info(ip="192.0.2.1", country_code="CR", lang="es-CR", request_time="2025-01-01 00:00:00")

    assert list(info.to_dict()) == [
        "ip",
        "platform",
        "browser",
        "country_code",
        "gmt_time",
        "lang",
        "user_agent",
        "request_time",
    ]
    assert info.to_json().startswith('{\n  "ip": "192.0.2.1",\n  "platform": "Unknown"')
