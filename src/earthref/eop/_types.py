"""Type definitions for Earth Orientation Parameters (EOP).

Provides the core data types for EOP storage and lookup:

- :class:`EOPProduct`: The closed set of supported IERS products.
- :class:`EOPTable`: Mapping from integer MJD (UTC) to the daily
  ``(ut1_utc, xp, yp)`` triple.
"""

from __future__ import annotations

import enum
import math
import threading
from collections.abc import Mapping

import jax.numpy as jnp
from jax import Array

from earthref.config import get_dtype
from earthref.constants import AS2RAD
from earthref.exceptions import MissingEpochError, UnknownProductError

EOPEntry = tuple[float, float, float]
"""Daily EOP values: (UT1-UTC [s], xp [rad], yp [rad])."""


class EOPProduct(enum.Enum):
    """Supported IERS Earth orientation products.

    Attributes:
        C04_14: IERS EOP 14 C04 series (IAU 2000A).
        C04_80: IERS EOP 14 C04 series (IAU 1980).
        FINALS_2000: IERS Bulletin A ``finals.all`` (IAU 2000).
    """

    C04_14 = "C04_14"
    C04_80 = "C04_80"
    FINALS_2000 = "FINALS_2000"

    @classmethod
    def from_name(cls, product: EOPProduct | str) -> EOPProduct:
        """Resolve *product* to a member, accepting members or their names.

        Raises:
            UnknownProductError: If *product* is not a supported product.
        """
        if isinstance(product, cls):
            return product
        try:
            return cls(product)
        except ValueError:
            raise UnknownProductError(
                f"Unknown EOP product: {product!r}. "
                f"Available: {[p.value for p in cls]}"
            ) from None


class EOPTable:
    """Earth orientation data keyed by integer MJD (UTC).

    Each entry holds ``(ut1_utc, xp, yp)`` with UT1-UTC in seconds and the
    polar motion components in radians.  Days need not be contiguous.

    The table structure is fixed after loading; individual days may be
    overwritten with :meth:`set_entry`.  Reads and writes are serialized by
    an internal lock so a shared table can be overridden while other threads
    query it.

    Args:
        data: Initial mapping of MJD to ``(ut1_utc, xp, yp)`` in seconds and
            radians.  The mapping is copied.
        product: Product the data was parsed from, if any.

    Examples:
        ```python
        from earthref.eop import EOPTable, get_ut1_utc
        eop = EOPTable({59000: (-0.2, 1e-6, 2e-6)})
        get_ut1_utc(eop, 59000.3)
        ```
    """

    def __init__(
        self,
        data: Mapping[int, EOPEntry] | None = None,
        product: EOPProduct | None = None,
    ):
        self._data: dict[int, EOPEntry] = {}
        if data is not None:
            for mjd, (ut1_utc, xp, yp) in data.items():
                self._data[int(mjd)] = (float(ut1_utc), float(xp), float(yp))
        self.product = product
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, mjd: object) -> bool:
        if not isinstance(mjd, (int, float)):
            return False
        with self._lock:
            return math.floor(mjd) in self._data

    @property
    def mjd_min(self) -> int:
        """First MJD in the table."""
        with self._lock:
            return min(self._data)

    @property
    def mjd_max(self) -> int:
        """Last MJD in the table."""
        with self._lock:
            return max(self._data)

    def mjds(self) -> list[int]:
        """Return the table's MJDs in ascending order."""
        with self._lock:
            return sorted(self._data)

    def entry(self, mjd: float) -> EOPEntry:
        """Return the stored triple for day ``floor(mjd)``.

        Raises:
            MissingEpochError: If the day is not in the table.
        """
        key = math.floor(mjd)
        with self._lock:
            try:
                return self._data[key]
            except KeyError:
                raise MissingEpochError(key) from None

    def bracket(self, mjd: float) -> tuple[EOPEntry, EOPEntry]:
        """Return the triples for days ``floor(mjd)`` and ``floor(mjd) + 1``.

        Both entries are read under a single lock acquisition.

        Raises:
            MissingEpochError: If either day is not in the table.
        """
        with self._lock:
            d0 = math.floor(mjd)
            return self.entry(d0), self.entry(d0 + 1)

    def set_entry(self, mjd: float, ut1_utc: float, xp: float, yp: float) -> None:
        """Overwrite or insert the entry for day ``floor(mjd)``.

        Args:
            mjd: Modified Julian Date (UTC) of the day to set.
            ut1_utc: UT1-UTC offset [s].
            xp: x-component of the pole locator [arcsec].
            yp: y-component of the pole locator [arcsec].
        """
        with self._lock:
            self._data[math.floor(mjd)] = (ut1_utc, xp * AS2RAD, yp * AS2RAD)

    def to_arrays(self) -> tuple[Array, Array, Array, Array]:
        """Export the table as sorted JAX arrays in the configured dtype.

        Returns:
            Tuple of ``(mjd, ut1_utc, xp, yp)`` arrays, each shape ``(N,)``,
            ordered by MJD.
        """
        with self._lock:
            keys = sorted(self._data)
            rows = [self._data[k] for k in keys]
        dtype = get_dtype()
        return (
            jnp.array(keys, dtype=dtype),
            jnp.array([r[0] for r in rows], dtype=dtype),
            jnp.array([r[1] for r in rows], dtype=dtype),
            jnp.array([r[2] for r in rows], dtype=dtype),
        )

    def __repr__(self) -> str:
        product = self.product.value if self.product is not None else None
        with self._lock:
            if not self._data:
                return f"EOPTable(product={product!r}, entries=0)"
            return (
                f"EOPTable(product={product!r}, entries={len(self._data)}, "
                f"mjd_min={min(self._data)}, mjd_max={max(self._data)})"
            )
