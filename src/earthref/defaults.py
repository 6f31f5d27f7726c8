"""Process-wide default EOP table and gravity model.

Most code should construct an :class:`~earthref.eop.EOPTable` or
:class:`~earthref.gravity.GravityModel` and pass it explicitly.  For callers
that want a shared instance, this module holds one of each behind a
:class:`DefaultHandle`.  A handle builds its value lazily on first access and
can be replaced wholesale; every access goes through the handle's lock.

- The default EOP table is the cached ``FINALS_2000`` product, or the seed
  copy bundled with the package when nothing has been downloaded yet.
- The default gravity model is the ``EGM2008_90`` product.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Generic, TypeVar

from earthref.eop import (
    EOPProduct,
    EOPTable,
    eop_product_path,
    load_bundled_eop,
    load_eop_product,
)
from earthref.gravity import GravityModel, GravityProduct

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DefaultHandle(Generic[T]):
    """Lock-guarded holder of a lazily constructed default value.

    Thread-safe via internal lock.

    Args:
        factory: Zero-argument callable building the value on first use.
        name: Label used in log messages.
    """

    def __init__(self, factory: Callable[[], T], name: str = "default") -> None:
        self._factory = factory
        self._name = name
        self._value: T | None = None
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        """Whether a value has been built or assigned."""
        with self._lock:
            return self._value is not None

    def get(self) -> T:
        """Return the current value, building it with the factory if unset."""
        with self._lock:
            if self._value is None:
                logger.info("Constructing %s", self._name)
                self._value = self._factory()
            return self._value

    def replace(self, value: T) -> T:
        """Replace the current value and return it."""
        with self._lock:
            self._value = value
            return value

    def reset(self) -> None:
        """Discard the current value; the next :meth:`get` rebuilds it."""
        with self._lock:
            self._value = None

    def __repr__(self) -> str:
        return f"DefaultHandle(name={self._name!r}, is_set={self.is_set})"


def _build_default_eop() -> EOPTable:
    product = EOPProduct.FINALS_2000
    if eop_product_path(product).exists():
        return load_eop_product(product)
    logger.warning(
        "No cached %s data; using the bundled seed file. "
        "Call refresh_eop_product() for current data.",
        product.value,
    )
    return load_bundled_eop()


DEFAULT_EOP: DefaultHandle[EOPTable] = DefaultHandle(
    _build_default_eop, name="default EOP table"
)
"""Handle for the process-wide default EOP table."""

DEFAULT_GRAVITY_MODEL: DefaultHandle[GravityModel] = DefaultHandle(
    lambda: GravityModel.from_product(GravityProduct.EGM2008_90),
    name="default gravity model",
)
"""Handle for the process-wide default gravity model."""


# ---------------------------------------------------------------------------
# Earth orientation
# ---------------------------------------------------------------------------


def get_default_eop() -> EOPTable:
    """Return the default EOP table, loading ``FINALS_2000`` if unset.

    The cached product is used when present, otherwise the bundled seed file.
    """
    return DEFAULT_EOP.get()


def set_default_eop(eop: EOPTable) -> EOPTable:
    """Replace the default EOP table."""
    return DEFAULT_EOP.replace(eop)


def load_default_eop(product: EOPProduct | str) -> EOPTable:
    """Load *product* from the local cache and make it the default EOP table."""
    return DEFAULT_EOP.replace(load_eop_product(product))


def set_default_eop_entry(mjd: float, ut1_utc: float, xp: float, yp: float) -> None:
    """Overwrite one day of the default EOP table.

    Args:
        mjd: Modified Julian Date (UTC) of the day to set.
        ut1_utc: UT1-UTC offset [s].
        xp: x-component of the pole locator [arcsec].
        yp: y-component of the pole locator [arcsec].
    """
    get_default_eop().set_entry(mjd, ut1_utc, xp, yp)


# ---------------------------------------------------------------------------
# Gravity
# ---------------------------------------------------------------------------


def get_default_gravity_model() -> GravityModel:
    """Return the default gravity model, loading ``EGM2008_90`` if unset."""
    return DEFAULT_GRAVITY_MODEL.get()


def set_default_gravity_model(model: GravityModel) -> GravityModel:
    """Replace the default gravity model."""
    return DEFAULT_GRAVITY_MODEL.replace(model)


def _looks_like_path(source: str) -> bool:
    return (
        os.sep in source
        or (os.altsep is not None and os.altsep in source)
        or source.lower().endswith(".gfc")
    )


def load_default_gravity_model(source: GravityProduct | str | Path) -> GravityModel:
    """Load a gravity model and make it the default.

    Args:
        source: A :class:`GravityProduct`, a product name, or the path of a
            GFC file.  A string is a path only if it contains a path
            separator or ends in ``.gfc``; any other string must be a
            product name.

    Raises:
        UnknownProductError: If *source* is neither a product name nor a path.
        FileNotFoundError: If *source* is a path to a missing file.
    """
    if isinstance(source, GravityProduct) or (
        isinstance(source, str) and not _looks_like_path(source)
    ):
        model = GravityModel.from_product(source)
    else:
        model = GravityModel.from_file(source)
    return DEFAULT_GRAVITY_MODEL.replace(model)


def grav_coef(i: int, j: int) -> float:
    """Return the default gravity model's raw coefficient at (*i*, *j*)."""
    return get_default_gravity_model().coefficient(i, j)
