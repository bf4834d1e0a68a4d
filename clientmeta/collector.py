"""
Collects client metadata (IP, browser, platform, country, language, UTC
offset) from an incoming request.

Country resolution order:
  1. If the CDN sets CF-IPCountry, use that.
  2. Else if a GeoIP resolver is available, map IP -> ISO country code.
  3. Else "Unknown".
"""
from datetime import datetime

from .helpers import client_ip, first_lang, is_trusted_edge
from .models import UNKNOWN, Info
from .useragent import parse_user_agent

USER_AGENT_HEADER = "User-Agent"
ACCEPT_LANGUAGE_HEADER = "Accept-Language"
FORWARDED_FOR_HEADER = "X-Forwarded-For"
CDN_COUNTRY_HEADER = "CF-IPCountry"
# The browser should send this itself:
#   X-Client-UTC-Offset: String(-new Date().getTimezoneOffset())
UTC_OFFSET_HEADER = "X-Client-UTC-Offset"

REQUEST_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _lower_headers(headers):
    if not headers:
        return {}
    return {str(k).lower(): v for k, v in headers.items()}


def extract(headers, peer_address, resolver=None, *, trust_country_header=True, now=None):
    """
    Build an Info record for one request.

    Args:
        headers: Mapping of request headers (any case).
        peer_address: The connection's peer, "host:port" or a bare IP.
        resolver: Optional CountryResolver used when no CDN country is given.
        trust_country_header: When False, CF-IPCountry is ignored.
        now: Optional datetime for request_time; defaults to the local clock.

    Never raises; anything it cannot determine becomes "Unknown" or "".
    """
    # Header names are case-insensitive, so look them up lowercased.
    hdr = _lower_headers(headers).get

    # Full UA is kept for debugging; browser/platform are only guesses.
    ua = hdr(USER_AGENT_HEADER.lower(), "") or ""
    browser, platform = parse_user_agent(ua)
    ip = client_ip(hdr(FORWARDED_FOR_HEADER.lower()), peer_address)
    lang = first_lang(hdr(ACCEPT_LANGUAGE_HEADER.lower()))

    # 1) Prefer the CDN header if present (e.g. Cloudflare). The edge has
    #    already geolocated the visitor, and the value is used as-is.
    country = ""
    if trust_country_header:
        country = (hdr(CDN_COUNTRY_HEADER.lower()) or "").strip()

    # 2) GeoIP fallback: only when a database is loaded and we found an IP.
    if not country and resolver is not None and ip:
        country = resolver.resolve(ip)

    # 3) Nothing worked.
    if not country:
        country = UNKNOWN

    # Client UTC offset in minutes, passed through as the browser sent it.
    gmt = (hdr(UTC_OFFSET_HEADER.lower()) or "").strip()

    return Info(
        ip=ip,
        platform=platform,
        browser=browser,
        country_code=country,
        gmt_time=gmt,
        lang=lang,
        user_agent=ua,
        request_time=(now or datetime.now()).strftime(REQUEST_TIME_FORMAT),
    )


def extract_from_request(request, resolver=None, trusted_networks=None):
    """
    Extract Info from a Flask/werkzeug request.

    If `trusted_networks` is non-empty, CF-IPCountry is only honoured when
    the request came in from one of those networks (the CDN edge).
    """
    peer = request.environ.get("REMOTE_ADDR") or request.remote_addr or ""
    trusted = is_trusted_edge(client_ip(None, peer), trusted_networks)
    return extract(request.headers, peer, resolver, trust_country_header=trusted)
