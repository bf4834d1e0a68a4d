"""
Offline IP -> country lookup backed by a MaxMind GeoIP2 / GeoLite2 database.

The reader is opened once at startup and shared by every request. The geoip2
reader is thread-safe and designed for reuse, so no locking is needed.

Usage:
    resolver = CountryResolver.open("./GeoLite2-Country.mmdb")
    resolver.resolve("81.2.69.142")   # -> "GB"
    resolver.close()
"""
import logging

import geoip2.database
import geoip2.errors
import maxminddb

from .errors import ResourceUnavailable


def _lookup_method(reader):
    """
    Pick the reader call that matches the database edition.

    Returns None for editions without country data (ASN, ISP, Domain,
    Anonymous-IP, Connection-Type).
    """
    database_type = reader.metadata().database_type or ""
    if "Enterprise" in database_type:
        return reader.enterprise
    if "City" in database_type:
        return reader.city
    if "Country" in database_type:
        return reader.country
    return None


class CountryResolver:
    """Resolves IP addresses to ISO 3166-1 alpha-2 country codes.

    A resolver built with no reader is "disabled": every lookup returns ""
    and close() does nothing.
    """

    def __init__(self, reader=None, path=None):
        self.path = path
        self._reader = reader
        self._lookup = _lookup_method(reader) if reader is not None else None

    @classmethod
    def open(cls, path):
        """
        Open the database file at `path`.

        Raises:
            ResourceUnavailable: the file is missing, unreadable, not a
                valid MaxMind DB, or an edition without country data.
                Callers decide whether that stops startup.
        """
        if not path:
            raise ResourceUnavailable(path)
        try:
            reader = geoip2.database.Reader(str(path))
        except (OSError, ValueError, maxminddb.InvalidDatabaseError) as exc:
            raise ResourceUnavailable(path, exc) from exc

        database_type = reader.metadata().database_type
        if _lookup_method(reader) is None:
            # A valid MaxMind file, but no country data to look up.
            reader.close()
            raise ResourceUnavailable(
                path, ValueError(f"{database_type} database has no country data")
            )

        logging.info("GeoIP DB loaded: %s (%s)", path, database_type)
        return cls(reader, path)

    @classmethod
    def disabled(cls):
        return cls()

    @property
    def enabled(self):
        return self._lookup is not None

    def resolve(self, ip):
        """
        Look up the country for `ip`.

        Never raises. Returns "" when the resolver is disabled, the IP is
        invalid, the address is not in the database, or the record has no
        ISO code.
        """
        if self._lookup is None or not ip:
            return ""
        try:
            record = self._lookup(ip)
            return record.country.iso_code or ""
        except geoip2.errors.AddressNotFoundError:
            logging.debug("GeoIP: no record for %s", ip)
        except Exception:
            # Invalid IP strings land here too (ValueError from the reader).
            logging.debug("GeoIP lookup failed for %s", ip, exc_info=True)
        return ""

    def close(self):
        """Release the database handle. Safe to call more than once."""
        reader, self._reader = self._reader, None
        self._lookup = None
        if reader is not None:
            reader.close()
            logging.info("GeoIP DB closed: %s", self.path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
