"""
The `constants` module defines the angular conversion factor used when
reading IERS products.
"""

from jax.numpy import pi as PI

"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * PI / 360.0 / 3600.0
