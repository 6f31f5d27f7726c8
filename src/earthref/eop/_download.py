"""Download IERS Earth Orientation Parameter files.

Each :class:`EOPProduct` has a fixed IERS data centre URL and a canonical
filename in the local EOP cache.  :func:`refresh_eop_product` fetches the
latest file and overwrites the cached copy; it never touches an
:class:`EOPTable` already in memory.  Network and filesystem errors are
reported as :class:`RefreshFailedError` and are not retried.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import httpx

from earthref.eop._types import EOPProduct
from earthref.exceptions import RefreshFailedError
from earthref.utils.caching import get_eop_cache_dir

logger = logging.getLogger(__name__)

EOP_PRODUCT_URLS: dict[EOPProduct, str] = {
    EOPProduct.C04_14: (
        "https://datacenter.iers.org/data/latestVersion/"
        "224_EOP_C04_14.62-NOW.IAU2000A224.txt"
    ),
    EOPProduct.C04_80: (
        "https://datacenter.iers.org/data/latestVersion/"
        "223_EOP_C04_14.62-NOW.IAU1980223.txt"
    ),
    EOPProduct.FINALS_2000: (
        "https://datacenter.iers.org/data/latestVersion/"
        "9_FINALS.ALL_IAU2000_V2013_019.txt"
    ),
}
"""IERS data centre URL of each product."""

EOP_PRODUCT_FILENAMES: dict[EOPProduct, str] = {
    EOPProduct.C04_14: "EOP_C04_14.62-NOW.IAU2000A.txt",
    EOPProduct.C04_80: "EOP_C04_14.62-NOW.IAU1980.txt",
    EOPProduct.FINALS_2000: "FINALS.ALL_IAU2000.txt",
}
"""Canonical filename of each product in the EOP cache directory."""

_DEFAULT_TIMEOUT: float = 120.0
"""Default HTTP timeout in seconds."""


def eop_product_path(product: EOPProduct | str) -> Path:
    """Return the local cache location of *product*.

    Raises:
        UnknownProductError: If *product* is not a supported product.
    """
    product = EOPProduct.from_name(product)
    return get_eop_cache_dir() / EOP_PRODUCT_FILENAMES[product]


def _write_atomic(filepath: Path, text: str) -> None:
    """Write *text* to *filepath* without exposing a partially written file.

    The data goes to a temporary file in the same directory, which then
    replaces *filepath*.  On failure the previous contents are untouched.
    """
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=filepath.parent,
        prefix=f".{filepath.name}.",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
    try:
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, filepath)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def refresh_eop_product(
    product: EOPProduct | str,
    filepath: str | Path | None = None,
    *,
    timeout: float = _DEFAULT_TIMEOUT,
) -> Path:
    """Download the latest version of *product* to the local cache.

    Creates parent directories if they do not exist.  Tables loaded earlier
    are not updated; reload the product to pick up the new data.

    Args:
        product: IERS product to fetch.
        filepath: Destination path.  Defaults to :func:`eop_product_path`.
        timeout: HTTP timeout in seconds.  Defaults to 120.

    Returns:
        Resolved :class:`~pathlib.Path` to the written file.

    Raises:
        UnknownProductError: If *product* is not a supported product.
        RefreshFailedError: On any HTTP, network, or file write failure.
    """
    product = EOPProduct.from_name(product)
    url = EOP_PRODUCT_URLS[product]
    filepath = Path(filepath) if filepath is not None else eop_product_path(product)

    logger.debug("IERS product server URL: %s", url)
    logger.debug("Local IERS file location: %s", filepath)

    logger.info("Downloading %s EOP data from %s", product.value, url)
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as err:
        raise RefreshFailedError(product.value, str(err)) from err

    try:
        _write_atomic(filepath, response.text)
    except OSError as err:
        raise RefreshFailedError(product.value, str(err)) from err

    logger.info("%s EOP data written to %s", product.value, filepath)
    return filepath.resolve()
