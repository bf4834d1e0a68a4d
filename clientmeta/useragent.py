"""
Best-effort browser / platform guesses from a User-Agent string.

This is a heuristic, not a real UA parser: no versions, no device models.
Rules are checked top to bottom and the first match wins. Order matters:
Edge user agents also contain "Chrome/" and "Safari/", and Chrome ones
contain "Safari/", so the more specific token has to come first.
"""
from .models import UNKNOWN


def _contains(*tokens):
    # Builds a predicate: True if any token appears in the (lowercased) UA.
    return lambda ua: any(t in ua for t in tokens)


# Edge first: its UA also says Chrome/ and Safari/.
BROWSER_RULES = (
    (_contains("edg/"), "Edge"),
    (_contains("chrome/"), "Chrome"),
    (_contains("firefox/"), "Firefox"),
    (_contains("safari/"), "Safari"),
)

# macOS before iOS: iPhones send "like Mac OS X". Android before Linux:
# Android UAs also say "Linux".
PLATFORM_RULES = (
    (_contains("windows"), "Windows"),
    (_contains("macintosh", "mac os"), "macOS"),
    (_contains("android"), "Android"),
    (_contains("iphone", "ipad", "ios"), "iOS"),
    (_contains("linux"), "Linux"),
)


def _first_match(rules, user_agent):
    # Matching is case-insensitive.
    ua = (user_agent or "").lower()
    for matches, label in rules:
        if matches(ua):
            return label
    return UNKNOWN


def classify_browser(user_agent):
    return _first_match(BROWSER_RULES, user_agent)


def classify_platform(user_agent):
    return _first_match(PLATFORM_RULES, user_agent)


def parse_user_agent(user_agent):
    """Returns (browser, platform)."""
    return classify_browser(user_agent), classify_platform(user_agent)
