"""Exceptions raised while loading and querying reference data.

Every error derives from :class:`EarthRefError`, and additionally from the
builtin exception a caller would naturally expect (``ValueError`` for bad
input text or identifiers, ``IndexError`` for table bounds, ``LookupError``
for absent epochs), so generic handlers keep working.
"""

from __future__ import annotations


class EarthRefError(Exception):
    """Base class for all earthref errors."""


class UnknownProductError(EarthRefError, ValueError):
    """Identifier does not name a supported EOP or gravity product."""


class ParseError(EarthRefError, ValueError):
    """A source file could not be parsed. No partial table is returned."""


class EOPParseError(ParseError):
    """Malformed line in an IERS EOP file."""


class GravityParseError(ParseError):
    """Malformed line in an ICGEM gravity field file."""


class MalformedHeaderError(GravityParseError):
    """Required gravity file header (``max_degree``) missing before it is needed."""


class CoefficientOutOfRangeError(GravityParseError):
    """A ``gfc`` record references a degree or order outside the allocated table."""


class IndexOutOfRangeError(EarthRefError, IndexError):
    """Coefficient index requested outside ``[0, n_max]``."""


class MissingEpochError(EarthRefError, LookupError):
    """EOP lookup for a day that is not in the table.

    Args:
        mjd: Integer MJD that was required but absent.
    """

    def __init__(self, mjd: int):
        self.mjd = mjd
        super().__init__(f"No Earth orientation data for MJD {mjd}")


class RefreshFailedError(EarthRefError, RuntimeError):
    """Downloading or writing an updated product file failed.

    Args:
        product: Name of the product being refreshed.
        message: Description of the failure.
    """

    def __init__(self, product: str, message: str):
        self.product = product
        super().__init__(f"Failed to refresh {product}: {message}")
