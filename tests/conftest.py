import jax.numpy as jnp
import pytest

from earthref.config import set_dtype
from earthref.defaults import DEFAULT_EOP, DEFAULT_GRAVITY_MODEL

# finals.all (IAU 2000) excerpt: four flagged days and one unflagged placeholder
FINALS_SAMPLE = """\
22 1 1 59580.00 I  0.055400 0.000029  0.272420 0.000030  I-0.1104645 0.0000069  0.0891 0.0051  I     0.267    0.160     0.017    0.160
22 1 2 59581.00 I  0.056100 0.000029  0.271900 0.000030  I-0.1105983 0.0000071  0.1420 0.0053  I     0.245    0.160     0.021    0.160
22 1 3 59582.00 I  0.056800 0.000028  0.271300 0.000030  I-0.1107154 0.0000072  0.1062 0.0052  I     0.221    0.160     0.034    0.160
22 1 4 59583.00 P  0.057400 0.000026  0.270700 0.000029  P-0.1108211 0.0000072
22 1 5 59584.00
"""

C04_HEADER = "\n".join(f"# EOP 14 C04 header line {i}" for i in range(1, 15))

# EOP C04 excerpt: year month day MJD x y UT1-UTC LOD dX dY and errors
C04_SAMPLE = C04_HEADER + """
2022   1   1  59580   0.055392   0.272436  -0.1104617   0.0000892   0.000166  -0.000104   0.000035   0.000037  0.0000094  0.0000118   0.000047   0.000046
2022   1   2  59581   0.056112   0.271893  -0.1105954   0.0001417   0.000184  -0.000115   0.000035   0.000036  0.0000094  0.0000114   0.000048   0.000046
2022   1   3  59582   0.056788   0.271302  -0.1107131   0.0001055   0.000195  -0.000121   0.000034   0.000036  0.0000093  0.0000110   0.000048   0.000047
"""

# Truncated degree/order 3 gravity field in ICGEM GFC format
GFC_SAMPLE = """\
product_type               gravity_field
modelname                  TEST_D3
earth_gravity_constant     0.3986004415D+15
radius                     0.6378136300D+07
max_degree                 3
errors                     calibrated
norm                       fully_normalized
tide_system                tide_free

key   L    M         C                  S              sigma C      sigma S
end_of_head ====================================================================
gfc    0    0  1.000000000000D+00  0.000000000000D+00  0.0000D+00  0.0000D+00
gfc    2    0 -0.484165143790815D-03  0.000000000000D+00  0.7481D-11  0.0000D+00
gfc    2    1 -0.206615509074176D-09  0.138441389137979D-08  0.7114D-11  0.7122D-11
gfc    2    2  0.243938357328313D-05 -0.140027370385934D-05  0.7209D-11  0.7233D-11
gfc    3    0  0.957161207093473D-06  0.000000000000D+00  0.5696D-11  0.0000D+00
gfc    3    1  0.203046201047864D-05  0.248200415856872D-06  0.5840D-11  0.5850D-11
gfc    3    2  0.904787894809528D-06 -0.619005475177618D-06  0.6117D-11  0.6139D-11
gfc    3    3  0.721321757121568D-06  0.141434926192941D-05  0.6034D-11  0.6038D-11
"""


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    test_config.py overrides this with its own autouse fixture that resets
    to float32.
    """
    set_dtype(jnp.float64)


@pytest.fixture(autouse=True)
def _isolated_cache(monkeypatch, tmp_path):
    """Point the cache at a per-test directory and clear default handles."""
    monkeypatch.setenv("EARTHREF_CACHE", str(tmp_path / "cache"))
    DEFAULT_EOP.reset()
    DEFAULT_GRAVITY_MODEL.reset()
    yield
    DEFAULT_EOP.reset()
    DEFAULT_GRAVITY_MODEL.reset()


@pytest.fixture()
def finals_text() -> str:
    return FINALS_SAMPLE


@pytest.fixture()
def c04_text() -> str:
    return C04_SAMPLE


@pytest.fixture()
def gfc_text() -> str:
    return GFC_SAMPLE
