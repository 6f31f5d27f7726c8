"""Earth Orientation Parameters (EOP) with daily and interpolated lookups.

Parses IERS ``finals.all`` (IAU 2000) and EOP C04 files into an
:class:`EOPTable` keyed by integer MJD (UTC), holding UT1-UTC [s] and the
polar motion components xp, yp [rad].

Typical usage::

    from earthref.eop import load_cached_eop, get_ut1_utc
    eop = load_cached_eop("FINALS_2000")
    ut1_utc = get_ut1_utc(eop, 59569.5, interpolate=True)
"""

from earthref.eop._download import (
    EOP_PRODUCT_FILENAMES,
    EOP_PRODUCT_URLS,
    eop_product_path,
    refresh_eop_product,
)
from earthref.eop._lookup import (
    get_eop,
    get_pole_locator,
    get_ut1_utc,
    get_xp,
    get_yp,
    set_eop_entry,
)
from earthref.eop._providers import (
    load_bundled_eop,
    load_cached_eop,
    load_eop,
    load_eop_from_file,
    load_eop_product,
)
from earthref.eop._types import EOPEntry, EOPProduct, EOPTable

__all__ = [
    "EOPEntry",
    "EOPProduct",
    "EOPTable",
    "EOP_PRODUCT_FILENAMES",
    "EOP_PRODUCT_URLS",
    "eop_product_path",
    "get_eop",
    "get_pole_locator",
    "get_ut1_utc",
    "get_xp",
    "get_yp",
    "load_bundled_eop",
    "load_cached_eop",
    "load_eop",
    "load_eop_from_file",
    "load_eop_product",
    "refresh_eop_product",
    "set_eop_entry",
]
