"""Tests for user agent classification."""

import pytest

from clientmeta.useragent import classify_browser, classify_platform, parse_user_agent

EDGE_WIN = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.2210.91"
)
CHROME_MAC = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
FIREFOX_LINUX = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
CHROME_ANDROID = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.6099.43 Mobile Safari/537.36"
)


@pytest.mark.parametrize(
    ("ua", "browser", "platform"),
    [
        (EDGE_WIN, "Edge", "Windows"),
        (CHROME_MAC, "Chrome", "macOS"),
        (FIREFOX_LINUX, "Firefox", "Linux"),
        (CHROME_ANDROID, "Chrome", "Android"),
        ("curl/8.4.0", "Unknown", "Unknown"),
        ("", "Unknown", "Unknown"),
    ],
)
def test_parse_user_agent(ua: str, browser: str, platform: str) -> None:
    assert parse_user_agent(ua) == (browser, platform)


def test_edge_wins_over_chrome_in_any_case() -> None:
    """Given both Edg/ and Chrome/ tokens, then the browser is Edge."""
    assert classify_browser("chrome/1 EDG/2") == "Edge"
    assert classify_browser("CHROME/120 edg/120") == "Edge"


def test_chrome_wins_over_safari() -> None:
    assert classify_browser("AppleWebKit Chrome/1 Safari/1") == "Chrome"


def test_iphone_matches_macos_first_via_like_mac_os_x() -> None:
    """'like Mac OS X' on iPhones matches macOS first, as documented order dictates."""
    assert classify_platform(SAFARI_IPHONE) == "macOS"
    assert classify_browser(SAFARI_IPHONE) == "Safari"


def test_ipad_without_mac_token_is_ios() -> None:
    assert classify_platform("Mozilla/5.0 (iPad; CPU OS 17_1) Safari/604.1") == "iOS"


def test_android_wins_over_linux() -> None:
    assert classify_platform("Linux; Android 14") == "Android"


def test_none_user_agent_is_unknown() -> None:
    assert classify_browser(None) == "Unknown"
    assert classify_platform(None) == "Unknown"
