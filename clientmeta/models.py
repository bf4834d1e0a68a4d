# This file defines the data shapes used by the collector and the tracking table.

import json
from dataclasses import asdict, dataclass

from database import db  # shared SQLAlchemy db instance

UNKNOWN = "Unknown"

# The login tracking table already exists in the external database; this
# declaration only describes the twelve columns we write to. Column names and
# order are part of that schema and must not change without a migration.
logintracking = db.Table(
    "logintracking",
    db.Column("userid", db.Text),
    db.Column("email", db.Text),
    db.Column("datelocalacces", db.Text),
    db.Column("ip", db.Text),
    db.Column("platform", db.Text),
    db.Column("macaddress", db.Text),
    db.Column("browser", db.Text),
    db.Column("countrycode", db.Text),
    db.Column("gmttime", db.Text),
    db.Column("lang", db.Text),
    db.Column("action", db.Text),
    db.Column("jsonstring", db.Text),
)


@dataclass(frozen=True)
class Info:
    """Client metadata for one request.

    Every field always holds a value: "Unknown" for platform, browser and
    country when nothing matched, "" for ip, lang and gmt_time when absent.
    """

    ip: str = ""
    platform: str = UNKNOWN
    browser: str = UNKNOWN
    country_code: str = UNKNOWN
    gmt_time: str = ""  # client UTC offset in minutes, e.g. "-360", as sent
    lang: str = ""  # first entry of Accept-Language, e.g. "es-CR"
    user_agent: str = ""
    request_time: str = ""  # server time, YYYY-MM-DD HH:MM:SS

    def to_dict(self):
        return asdict(self)

    def to_json(self):
        """Pretty-printed JSON, suitable for logs and response bodies."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True)
class LoginTracking:
    """One row of the logintracking table."""

    user_id: str = ""
    email: str = ""
    date_local_access: str = ""
    ip: str = ""
    platform: str = ""
    mac_address: str = ""
    browser: str = ""
    country_code: str = ""
    gmt_time: str = ""
    lang: str = ""
    action: str = ""
    json_string: str = ""

    @classmethod
    def from_info(cls, info, user_id, action, email="", mac_address=""):
        """Build a tracking row from extracted metadata plus caller fields."""
        return cls(
            user_id=user_id,
            email=email,
            date_local_access=info.request_time,
            ip=info.ip,
            platform=info.platform,
            mac_address=mac_address,
            browser=info.browser,
            country_code=info.country_code,
            gmt_time=info.gmt_time,
            lang=info.lang,
            action=action,
            json_string=info.to_json(),
        )

    def as_row(self):
        """Column name -> value mapping, in table column order."""
        return {
            "userid": self.user_id,
            "email": self.email,
            "datelocalacces": self.date_local_access,
            "ip": self.ip,
            "platform": self.platform,
            "macaddress": self.mac_address,
            "browser": self.browser,
            "countrycode": self.country_code,
            "gmttime": self.gmt_time,
            "lang": self.lang,
            "action": self.action,
            "jsonstring": self.json_string,
        }
