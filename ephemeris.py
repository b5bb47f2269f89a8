# ephemeris.py
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from config import config, SECONDS_PER_DAY, UNIX_EPOCH_JD

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)

def _as_aware_utc(moment: datetime) -> datetime:
    # Naive datetimes are taken to already be in UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)

class EphemerisClock:
    """Converts wall-clock instants into days since a fixed reference epoch.

    The day count is the only time input to the orbital mechanics: every
    position is a pure function of (orbital elements, days since epoch).
    Instants before the epoch produce negative day counts.

    Attributes:
        reference_epoch_jd (float): Julian Date of the reference epoch
            (J2000.0 by default, from `config.Ephemeris.REFERENCE_EPOCH_JD`).
        time_source (Callable[[], datetime]): Returns the current instant. Injected
            so callers (and tests) can freeze or accelerate "now".
    """
    def __init__(self, reference_epoch_jd: Optional[float] = None,
                 time_source: Optional[Callable[[], datetime]] = None):
        self.reference_epoch_jd = (config.Ephemeris.REFERENCE_EPOCH_JD
                                   if reference_epoch_jd is None else float(reference_epoch_jd))
        self.time_source = time_source or _utc_now

    def now(self) -> datetime:
        return _as_aware_utc(self.time_source())

    def julian_date(self, moment: Optional[datetime] = None) -> float:
        """Julian Date of `moment` (or of "now" when omitted)."""
        moment = self.now() if moment is None else _as_aware_utc(moment)
        unix_seconds = (moment - _UNIX_EPOCH).total_seconds()
        return unix_seconds / SECONDS_PER_DAY + UNIX_EPOCH_JD

    def days_since_epoch(self, moment: Optional[datetime] = None) -> float:
        """Signed, real-valued days elapsed between the reference epoch and `moment`."""
        return self.julian_date(moment) - self.reference_epoch_jd

    def datetime_from_days(self, days: float) -> datetime:
        """Inverse of `days_since_epoch`; returns an aware UTC datetime."""
        unix_days = days + self.reference_epoch_jd - UNIX_EPOCH_JD
        return _UNIX_EPOCH + timedelta(days=unix_days)


_default_clock = EphemerisClock()

def julian_date(moment: Optional[datetime] = None) -> float:
    return _default_clock.julian_date(moment)

def days_since_j2000(moment: Optional[datetime] = None) -> float:
    return _default_clock.days_since_epoch(moment)
