"""EOP lookup and interpolation functions.

Every query is a projection of :func:`get_eop`, which returns the full
``(ut1_utc, xp, yp)`` triple either for the day containing *mjd* or linearly
interpolated between that day and the next.  Interpolation never
extrapolates: both bracketing days must be present.
"""

from __future__ import annotations

import math

from earthref.eop._types import EOPEntry, EOPTable


def _interpolate(eop: EOPTable, mjd: float) -> EOPEntry:
    """Linearly interpolate all EOP fields between ``floor(mjd)`` and the next day.

    Raises:
        MissingEpochError: If either bracketing day is missing.
    """
    x1 = math.floor(mjd)
    x2 = x1 + 1
    y1, y2 = eop.bracket(mjd)
    return tuple(
        (v2 - v1) / (x2 - x1) * (mjd - x1) + v1 for v1, v2 in zip(y1, y2)
    )


def get_eop(eop: EOPTable, mjd: float, interpolate: bool = False) -> EOPEntry:
    """Query all EOP values at the given MJD.

    Args:
        eop: EOP table.
        mjd: Modified Julian Date (UTC) to query.
        interpolate: Whether to linearly interpolate to *mjd*.  When
            ``False`` the values for day ``floor(mjd)`` are returned.

    Returns:
        Tuple of (ut1_utc [s], xp [rad], yp [rad]).

    Raises:
        MissingEpochError: If a required day is not in the table.

    Examples:
        ```python
        from earthref.eop import EOPTable, get_eop
        eop = EOPTable({59000: (0.1, 0.0, 0.0), 59001: (0.2, 0.0, 0.0)})
        ut1_utc, xp, yp = get_eop(eop, 59000.5, interpolate=True)
        ```
    """
    if interpolate:
        return _interpolate(eop, mjd)
    return eop.entry(mjd)


def get_ut1_utc(eop: EOPTable, mjd: float, interpolate: bool = False) -> float:
    """Query the UT1-UTC offset at the given MJD.

    Args:
        eop: EOP table.
        mjd: Modified Julian Date (UTC) to query.
        interpolate: Whether to linearly interpolate to *mjd*.

    Returns:
        UT1-UTC offset [seconds].
    """
    return get_eop(eop, mjd, interpolate)[0]


def get_pole_locator(
    eop: EOPTable, mjd: float, interpolate: bool = False
) -> tuple[float, float]:
    """Query the pole location at the given MJD.

    Args:
        eop: EOP table.
        mjd: Modified Julian Date (UTC) to query.
        interpolate: Whether to linearly interpolate to *mjd*.

    Returns:
        Tuple of (xp, yp) polar motion components [rad].
    """
    _, xp, yp = get_eop(eop, mjd, interpolate)
    return xp, yp


def get_xp(eop: EOPTable, mjd: float, interpolate: bool = False) -> float:
    """Query the x-component of the pole locator [rad] at the given MJD."""
    return get_eop(eop, mjd, interpolate)[1]


def get_yp(eop: EOPTable, mjd: float, interpolate: bool = False) -> float:
    """Query the y-component of the pole locator [rad] at the given MJD."""
    return get_eop(eop, mjd, interpolate)[2]


def set_eop_entry(
    eop: EOPTable, mjd: float, ut1_utc: float, xp: float, yp: float
) -> None:
    """Overwrite the EOP values for day ``floor(mjd)``.

    Args:
        eop: EOP table to modify in place.
        mjd: Modified Julian Date (UTC) of the day to set.
        ut1_utc: UT1-UTC offset [s].
        xp: x-component of the pole locator [arcsec].
        yp: y-component of the pole locator [arcsec].

    Examples:
        ```python
        from earthref.eop import EOPTable, set_eop_entry, get_xp
        eop = EOPTable()
        set_eop_entry(eop, 59000, 0.1, 0.2, 0.3)
        get_xp(eop, 59000)  # 0.2 arcsec in radians
        ```
    """
    eop.set_entry(mjd, ut1_utc, xp, yp)
