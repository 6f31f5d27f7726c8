"""
earthref provides Earth orientation parameters and spherical harmonic gravity
field models for satellite dynamics calculations.
"""

from .constants import AS2RAD

from .config import set_dtype, get_dtype

from .exceptions import (
    EarthRefError,
    UnknownProductError,
    ParseError,
    EOPParseError,
    GravityParseError,
    MalformedHeaderError,
    CoefficientOutOfRangeError,
    IndexOutOfRangeError,
    MissingEpochError,
    RefreshFailedError,
)

from .eop import (
    EOPProduct,
    EOPTable,
    load_eop,
    load_eop_from_file,
    load_eop_product,
    load_bundled_eop,
    load_cached_eop,
    refresh_eop_product,
    get_eop,
    get_ut1_utc,
    get_pole_locator,
    get_xp,
    get_yp,
    set_eop_entry,
)

from .gravity import (
    GravityProduct,
    GravityModel,
    load_gravity_model,
    normalize_exponents,
)

from .defaults import (
    DefaultHandle,
    get_default_eop,
    set_default_eop,
    load_default_eop,
    set_default_eop_entry,
    get_default_gravity_model,
    set_default_gravity_model,
    load_default_gravity_model,
    grav_coef,
)

__all__ = [
    # Constants
    "AS2RAD",
    # Config
    "set_dtype",
    "get_dtype",
    # Exceptions
    "EarthRefError",
    "UnknownProductError",
    "ParseError",
    "EOPParseError",
    "GravityParseError",
    "MalformedHeaderError",
    "CoefficientOutOfRangeError",
    "IndexOutOfRangeError",
    "MissingEpochError",
    "RefreshFailedError",
    # Earth Orientation
    "EOPProduct",
    "EOPTable",
    "load_eop",
    "load_eop_from_file",
    "load_eop_product",
    "load_bundled_eop",
    "load_cached_eop",
    "refresh_eop_product",
    "get_eop",
    "get_ut1_utc",
    "get_pole_locator",
    "get_xp",
    "get_yp",
    "set_eop_entry",
    # Gravity
    "GravityProduct",
    "GravityModel",
    "load_gravity_model",
    "normalize_exponents",
    # Defaults
    "DefaultHandle",
    "get_default_eop",
    "set_default_eop",
    "load_default_eop",
    "set_default_eop_entry",
    "get_default_gravity_model",
    "set_default_gravity_model",
    "load_default_gravity_model",
    "grav_coef",
]
