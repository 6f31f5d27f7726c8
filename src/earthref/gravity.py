"""Spherical harmonic gravity field models.

Parses ICGEM GFC format files into a dense coefficient table.  The table
layout follows the Montenbruck & Gill convention:

- ``data[n, m]`` stores the C coefficient for degree *n*, order *m*
- ``data[m-1, n]`` stores the S coefficient for *m* > 0

S coefficients of order zero are never stored.  Coefficients missing from
the file stay zero.

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, p. 56-68.
    2. F. Barthelmes and W. Koehler, *ICGEM: The International Centre for
       Global Earth Models*, ICGEM format description.
"""

from __future__ import annotations

import enum
import importlib.resources
import logging
import re
from collections.abc import Iterable
from pathlib import Path

import jax.numpy as jnp
import numpy as np
from jax import Array

from earthref.config import get_dtype
from earthref.exceptions import (
    CoefficientOutOfRangeError,
    GravityParseError,
    IndexOutOfRangeError,
    MalformedHeaderError,
    UnknownProductError,
)
from earthref.utils.caching import get_gravity_cache_dir

logger = logging.getLogger(__name__)

# Fortran-style exponent marker directly after a mantissa digit or point
_EXPONENT_RE = re.compile(r"(?<=[0-9.])[Dd](?=[+-])")


def normalize_exponents(line: str) -> str:
    """Rewrite Fortran ``D+``/``D-`` exponents as ``e+``/``e-``.

    Only markers that follow a digit or decimal point are rewritten, so
    words in header values are left alone.

    Examples:
        ```python
        normalize_exponents("gfc 2 0 -0.48D-03 0.0D+00")
        # 'gfc 2 0 -0.48e-03 0.0e+00'
        ```
    """
    return _EXPONENT_RE.sub("e", line)


class GravityProduct(enum.Enum):
    """Named gravity field products and their GFC filenames."""

    EGM2008_20 = "EGM2008_20.gfc"
    EGM2008_90 = "EGM2008_90.gfc"
    GGM01S = "GGM01S.gfc"
    GGM05S = "GGM05S.gfc"

    @classmethod
    def from_name(cls, product: GravityProduct | str) -> GravityProduct:
        """Resolve *product* to a member, accepting members or their names.

        Raises:
            UnknownProductError: If *product* is not a known product.
        """
        if isinstance(product, cls):
            return product
        try:
            return cls[product]
        except KeyError:
            raise UnknownProductError(
                f"Unknown gravity model product: {product!r}. "
                f"Available: {[p.name for p in cls]}"
            ) from None


def _parse_int(value: str, lineno: int) -> int:
    try:
        return int(value)
    except ValueError as err:
        raise GravityParseError(f"Invalid integer on line {lineno}: {value!r}") from err


def _parse_float(value: str, lineno: int) -> float:
    try:
        return float(value)
    except ValueError as err:
        raise GravityParseError(f"Invalid number on line {lineno}: {value!r}") from err


class GravityModel:
    """Spherical harmonic gravity field model.

    Stores Stokes coefficients (C_nm, S_nm) parsed from ICGEM GFC format
    files in a single ``(n_max+1, n_max+1)`` matrix; see the module
    docstring for the layout.  Instances are immutable: the coefficient
    matrix is read-only.

    Args:
        name: Human-readable name of the gravity model.
        normalized: Whether the coefficients are fully normalized.
        radius: Reference radius [m].
        gm: Gravitational parameter [m^3/s^2].
        n_max: Maximum degree of the model.
        m_max: Maximum order of the model.
        data: Coefficient matrix, shape ``(n_max+1, m_max+1)``.
        tide_system: Tide system convention (e.g. ``"tide_free"``).

    Examples:
        ```python
        from earthref.gravity import GravityModel
        model = GravityModel.from_product("EGM2008_20")
        c20, s20 = model.get(2, 0)
        s21 = model.coefficient(0, 2)
        ```
    """

    def __init__(
        self,
        name: str,
        normalized: bool,
        radius: float,
        gm: float,
        n_max: int,
        m_max: int,
        data: np.ndarray,
        tide_system: str = "unknown",
    ):
        self.name = name
        self.normalized = normalized
        self.radius = radius
        self.gm = gm
        self.n_max = n_max
        self.m_max = m_max
        self.data = data
        self.data.setflags(write=False)
        self.tide_system = tide_system

    # ------------------------------------------------------------------
    # Factory methods
    # ------------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str) -> GravityModel:
        """Parse a gravity model from the contents of a GFC file.

        Raises:
            MalformedHeaderError: If ``max_degree`` is missing or follows
                coefficient records.
            CoefficientOutOfRangeError: If a record exceeds ``max_degree``.
            GravityParseError: If a header value or record is malformed.
        """
        return cls._parse_gfc(text.splitlines())

    @classmethod
    def from_file(cls, filepath: str | Path) -> GravityModel:
        """Load a gravity model from a GFC format file.

        Args:
            filepath: Path to the ``.gfc`` file.

        Raises:
            FileNotFoundError: If the file does not exist.
            GravityParseError: If the file is malformed.
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Gravity model file not found: {filepath}")
        logger.info("Loading gravity model from %s", filepath)
        with open(filepath, encoding="utf-8") as f:
            return cls._parse_gfc(f)

    @classmethod
    def from_product(
        cls,
        product: GravityProduct | str,
        data_dir: str | Path | None = None,
    ) -> GravityModel:
        """Load a named gravity model product.

        Available products: ``EGM2008_20``, ``EGM2008_90``, ``GGM01S`` and
        ``GGM05S``.  Each resolves to ``<name>.gfc``.  With *data_dir* the
        file is read from that directory.  Otherwise a copy in
        ``<cache>/gravity_models`` takes precedence over the file bundled
        with the package.

        Args:
            product: Product identifier.
            data_dir: Directory holding the GFC files.

        Raises:
            UnknownProductError: If *product* is not a known product.
            FileNotFoundError: If *data_dir* does not hold the product file.
        """
        product = GravityProduct.from_name(product)
        if data_dir is not None:
            return cls.from_file(Path(data_dir) / product.value)

        cached = get_gravity_cache_dir() / product.value
        if cached.exists():
            return cls.from_file(cached)

        data_pkg = importlib.resources.files("earthref.data.gravity_models")
        resource = data_pkg.joinpath(product.value)
        with importlib.resources.as_file(resource) as path:
            return cls.from_file(path)

    # ------------------------------------------------------------------
    # Coefficient access
    # ------------------------------------------------------------------

    def _check_index(self, i: int, j: int) -> None:
        if not (0 <= i <= self.n_max and 0 <= j <= self.m_max):
            raise IndexOutOfRangeError(
                f"Requested (i={i}, j={j}) exceeds model bounds "
                f"(n_max={self.n_max}, m_max={self.m_max})."
            )

    def coefficient(self, i: int, j: int) -> float:
        """Return the raw stored value at table position (*i*, *j*).

        C(n, m) lives at ``(n, m)`` and S(n, m) at ``(m-1, n)``.

        Raises:
            IndexOutOfRangeError: If either index is outside ``[0, n_max]``.
        """
        self._check_index(i, j)
        return float(self.data[i, j])

    def get(self, n: int, m: int) -> tuple[float, float]:
        """Retrieve the (C_nm, S_nm) coefficients for degree *n*, order *m*.

        Returns:
            tuple[float, float]: (C_nm, S_nm); S is 0.0 for order zero.

        Raises:
            IndexOutOfRangeError: If (n, m) exceeds the model bounds.
        """
        self._check_index(n, m)
        if m == 0:
            return float(self.data[n, m]), 0.0
        return float(self.data[n, m]), float(self.data[m - 1, n])

    def as_array(self) -> Array:
        """Return the coefficient matrix as a JAX array in the configured dtype."""
        return jnp.asarray(self.data, dtype=get_dtype())

    # ------------------------------------------------------------------
    # GFC parser
    # ------------------------------------------------------------------

    @classmethod
    def _parse_gfc(cls, lines: Iterable[str]) -> GravityModel:
        """Parse the lines of an ICGEM GFC format file.

        Args:
            lines: Iterable of file lines.

        Returns:
            GravityModel: Parsed gravity model.
        """
        model_name = "Unknown"
        normalized = False
        gm = 0.0
        radius = 0.0
        n_max = 0
        tide_system = "unknown"
        data = None

        for lineno, line in enumerate(lines, start=1):
            parts = normalize_exponents(line).split()
            if len(parts) < 2:
                continue

            key = parts[0]
            value = parts[1]

            if key == "modelname":
                model_name = value
            elif key == "max_degree":
                if data is not None:
                    logger.warning(
                        "Repeated max_degree on line %d; discarding earlier coefficients.",
                        lineno,
                    )
                n_max = _parse_int(value, lineno)
                if n_max < 0:
                    raise GravityParseError(
                        f"Negative max_degree on line {lineno}: {n_max}"
                    )
                data = np.zeros((n_max + 1, n_max + 1), dtype=np.float64)
            elif key == "earth_gravity_constant":
                gm = _parse_float(value, lineno)
            elif key == "radius":
                radius = _parse_float(value, lineno)
            elif key == "norm":
                normalized = value == "fully_normalized"
            elif key == "tide_system":
                tide_system = value
            elif key == "gfc":
                if data is None:
                    raise MalformedHeaderError(
                        f"Coefficient record on line {lineno} precedes max_degree."
                    )
                if len(parts) < 5:
                    raise GravityParseError(
                        f"Coefficient record on line {lineno} has {len(parts)} "
                        f"fields; expected at least 5."
                    )

                # gfc  n  m  C  S  [sig_C  sig_S]
                n = _parse_int(parts[1], lineno)
                m = _parse_int(parts[2], lineno)
                c = _parse_float(parts[3], lineno)
                s = _parse_float(parts[4], lineno)

                if not (0 <= n <= n_max and 0 <= m <= n_max):
                    raise CoefficientOutOfRangeError(
                        f"Coefficient (n={n}, m={m}) on line {lineno} exceeds "
                        f"max_degree {n_max}."
                    )

                data[n, m] = c
                if m != 0:
                    data[m - 1, n] = s

        if data is None:
            raise MalformedHeaderError("GFC file missing 'max_degree'.")

        return cls(
            name=model_name,
            normalized=normalized,
            radius=radius,
            gm=gm,
            n_max=n_max,
            m_max=n_max,
            data=data,
            tide_system=tide_system,
        )

    def __repr__(self) -> str:
        return (
            f"GravityModel(name={self.name!r}, "
            f"n_max={self.n_max}, m_max={self.m_max}, "
            f"gm={self.gm:.6e}, radius={self.radius:.1f})"
        )


def load_gravity_model(text: str) -> GravityModel:
    """Parse a gravity model from the contents of a GFC file.

    Equivalent to :meth:`GravityModel.from_text`.
    """
    return GravityModel.from_text(text)
