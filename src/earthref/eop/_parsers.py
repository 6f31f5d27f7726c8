"""Parsers for IERS Earth Orientation Parameter data files.

Supports two layouts:

- Bulletin A ``finals.all`` (IAU 2000), a fixed-column format.  Only records
  whose polar motion flag (column 17) is ``I`` (IERS) or ``P`` (prediction)
  are read; unflagged placeholder lines are skipped.
- EOP C04 series (IAU 2000A and IAU 1980 variants), a whitespace-delimited
  format preceded by a 14-line header.

Polar motion is converted from arcseconds to radians at parse time.  Any
malformed record aborts the whole parse with :class:`EOPParseError`.
"""

from __future__ import annotations

from earthref.constants import AS2RAD
from earthref.eop._types import EOPEntry, EOPProduct
from earthref.exceptions import EOPParseError, UnknownProductError

# Column ranges for the finals.all format (0-indexed Python slices)
_FINALS_FLAG_COLUMN = 16
_FINALS_MJD_RANGE = slice(7, 12)
_FINALS_PM_X_RANGE = slice(18, 27)
_FINALS_PM_Y_RANGE = slice(37, 46)
_FINALS_UT1_UTC_RANGE = slice(58, 68)
_FINALS_ACCEPTED_FLAGS = frozenset("IP")

_C04_HEADER_LINES = 14


def parse_finals_line(line: str, lineno: int = 0) -> tuple[int, EOPEntry] | None:
    """Parse a single line from a ``finals.all`` (IAU 2000) file.

    Args:
        line: A single line of the file, without its newline.
        lineno: 1-based line number, used in error messages.

    Returns:
        ``(mjd, (ut1_utc [s], xp [rad], yp [rad]))``, or ``None`` if the
        line is not flagged ``I`` or ``P``.

    Raises:
        EOPParseError: If a flagged line has a missing or unparseable field.
    """
    if len(line) <= _FINALS_FLAG_COLUMN:
        return None
    if line[_FINALS_FLAG_COLUMN] not in _FINALS_ACCEPTED_FLAGS:
        return None

    try:
        mjd = int(line[_FINALS_MJD_RANGE])
        pm_x = float(line[_FINALS_PM_X_RANGE]) * AS2RAD
        pm_y = float(line[_FINALS_PM_Y_RANGE]) * AS2RAD
        ut1_utc = float(line[_FINALS_UT1_UTC_RANGE])
    except ValueError as err:
        raise EOPParseError(f"Malformed finals record on line {lineno}: {err}") from err

    return mjd, (ut1_utc, pm_x, pm_y)


def parse_c04_line(line: str, lineno: int = 0) -> tuple[int, EOPEntry] | None:
    """Parse a single data line from an EOP C04 file.

    Fields (1-based, whitespace separated): 4 MJD, 5 xp ["], 6 yp ["],
    7 UT1-UTC [s].

    Returns:
        ``(mjd, (ut1_utc, xp, yp))``, or ``None`` for a blank line.

    Raises:
        EOPParseError: If the line has too few fields or a bad number.
    """
    fields = line.split()
    if not fields:
        return None
    if len(fields) < 7:
        raise EOPParseError(
            f"Malformed C04 record on line {lineno}: expected at least 7 fields, "
            f"found {len(fields)}"
        )

    try:
        mjd = int(fields[3])
        pm_x = float(fields[4]) * AS2RAD
        pm_y = float(fields[5]) * AS2RAD
        ut1_utc = float(fields[6])
    except ValueError as err:
        raise EOPParseError(f"Malformed C04 record on line {lineno}: {err}") from err

    return mjd, (ut1_utc, pm_x, pm_y)


def parse_eop_text(product: EOPProduct | str, text: str) -> dict[int, EOPEntry]:
    """Parse the full text of an IERS product file.

    Args:
        product: Product whose layout *text* follows.
        text: Complete file contents.

    Returns:
        Mapping of MJD to ``(ut1_utc, xp, yp)``.  Later records for the same
        day overwrite earlier ones.

    Raises:
        UnknownProductError: If *product* is not a supported product.
        EOPParseError: If any accepted record is malformed.
    """
    product = EOPProduct.from_name(product)
    lines = text.splitlines()

    if product is EOPProduct.FINALS_2000:
        parse_line = parse_finals_line
        first = 0
    elif product in (EOPProduct.C04_14, EOPProduct.C04_80):
        parse_line = parse_c04_line
        first = _C04_HEADER_LINES
    else:
        raise UnknownProductError(f"Unknown EOP product: {product!r}")

    data: dict[int, EOPEntry] = {}
    for lineno, line in enumerate(lines[first:], start=first + 1):
        result = parse_line(line, lineno)
        if result is not None:
            mjd, entry = result
            data[mjd] = entry

    return data
