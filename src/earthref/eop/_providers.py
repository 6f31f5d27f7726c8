"""Factory functions for creating EOPTable instances.

- :func:`load_eop`: Parse the text of an IERS product file.
- :func:`load_eop_from_file`: Parse an IERS product file on disk.
- :func:`load_eop_product`: Parse a product from the local cache.
- :func:`load_cached_eop`: Parse a product from the local cache,
  refreshing it from IERS first when it is missing or stale.
- :func:`load_bundled_eop`: Parse the seed ``FINALS_2000`` file bundled with
  the package.
"""

from __future__ import annotations

import importlib.resources
import logging
from pathlib import Path

from earthref.eop._download import (
    EOP_PRODUCT_FILENAMES,
    eop_product_path,
    refresh_eop_product,
)
from earthref.eop._parsers import parse_eop_text
from earthref.eop._types import EOPProduct, EOPTable
from earthref.exceptions import RefreshFailedError
from earthref.utils.caching import is_file_stale

logger = logging.getLogger(__name__)

_DEFAULT_MAX_AGE_DAYS: float = 7.0
"""Default maximum age for cached EOP data in days."""


def load_eop(product: EOPProduct | str, text: str) -> EOPTable:
    """Build an EOPTable from the text of an IERS product file.

    Args:
        product: Layout of *text*: ``C04_14``, ``C04_80`` or ``FINALS_2000``.
        text: Complete file contents.

    Returns:
        EOPTable holding every record of the file.

    Raises:
        UnknownProductError: If *product* is not a supported product.
        EOPParseError: If any record is malformed.

    Examples:
        ```python
        from earthref.eop import load_eop, get_ut1_utc
        eop = load_eop("FINALS_2000", text)
        val = get_ut1_utc(eop, 59569.0)
        ```
    """
    product = EOPProduct.from_name(product)
    data = parse_eop_text(product, text)
    logger.debug("Parsed %d %s EOP records", len(data), product.value)
    return EOPTable(data, product=product)


def load_eop_from_file(product: EOPProduct | str, filepath: str | Path) -> EOPTable:
    """Load an EOPTable from an IERS product file.

    Args:
        product: Layout of the file.
        filepath: Path to the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnknownProductError: If *product* is not a supported product.
        EOPParseError: If any record is malformed.
    """
    product = EOPProduct.from_name(product)
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"EOP file not found: {filepath}")

    logger.info("Loading %s EOP data from %s", product.value, filepath)
    return load_eop(product, filepath.read_text(encoding="utf-8"))


def load_eop_product(
    product: EOPProduct | str, filepath: str | Path | None = None
) -> EOPTable:
    """Load *product* from its local cache file.

    The cache is populated by :func:`refresh_eop_product`.

    Args:
        product: IERS product to load.
        filepath: Cache file to read.  Defaults to :func:`eop_product_path`.

    Raises:
        FileNotFoundError: If the product has not been downloaded.
        UnknownProductError: If *product* is not a supported product.
        EOPParseError: If any record is malformed.
    """
    product = EOPProduct.from_name(product)
    if filepath is None:
        filepath = eop_product_path(product)
    return load_eop_from_file(product, filepath)


def load_cached_eop(
    product: EOPProduct | str = EOPProduct.FINALS_2000,
    filepath: str | Path | None = None,
    *,
    max_age_days: float = _DEFAULT_MAX_AGE_DAYS,
) -> EOPTable:
    """Load *product* from the local cache, refreshing it when stale.

    If the cache file is missing or older than *max_age_days*, a fresh copy
    is downloaded first.  When the download fails but an older copy exists,
    the older copy is used and a warning is logged.

    Args:
        product: IERS product to load.  Defaults to ``FINALS_2000``.
        filepath: Cache file.  Defaults to :func:`eop_product_path`.
        max_age_days: Maximum acceptable age of the cache file in days.

    Returns:
        EOPTable loaded from the cache file.

    Raises:
        RefreshFailedError: If the download fails and no cached copy exists.
        EOPParseError: If the cached file is malformed.

    Examples:
        ```python
        from earthref.eop import load_cached_eop, get_pole_locator
        eop = load_cached_eop("C04_14", max_age_days=1.0)
        xp, yp = get_pole_locator(eop, 59569.25, interpolate=True)
        ```
    """
    product = EOPProduct.from_name(product)
    if filepath is None:
        filepath = eop_product_path(product)
    else:
        filepath = Path(filepath)

    if is_file_stale(filepath, max_age_days * 86400.0):
        try:
            refresh_eop_product(product, filepath)
        except RefreshFailedError:
            if not filepath.exists():
                raise
            logger.warning(
                "Failed to refresh %s; using cached copy at %s.",
                product.value,
                filepath,
                exc_info=True,
            )

    return load_eop_from_file(product, filepath)


def load_bundled_eop() -> EOPTable:
    """Load the seed ``FINALS_2000`` file bundled with the package.

    The bundled file covers only a few days; it lets the default table load
    without network access.  Use :func:`load_cached_eop` for current data.

    Returns:
        EOPTable loaded from the bundled file.
    """
    product = EOPProduct.FINALS_2000
    data_pkg = importlib.resources.files("earthref.data.eop")
    resource = data_pkg.joinpath(EOP_PRODUCT_FILENAMES[product])
    with importlib.resources.as_file(resource) as path:
        return load_eop_from_file(product, path)
