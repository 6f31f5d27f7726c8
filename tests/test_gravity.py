"""Tests for spherical harmonic gravity field models."""

from __future__ import annotations

from pathlib import Path

import jax.numpy as jnp
import numpy as np
import pytest

from earthref.exceptions import (
    CoefficientOutOfRangeError,
    GravityParseError,
    IndexOutOfRangeError,
    MalformedHeaderError,
    UnknownProductError,
)
from earthref.gravity import (
    GravityModel,
    GravityProduct,
    load_gravity_model,
    normalize_exponents,
)

_MINIMAL_HEADER = """\
modelname MINI
max_degree 2
"""


# ---------------------------------------------------------------------------
# Exponent normalization
# ---------------------------------------------------------------------------


class TestNormalizeExponents:
    def test_negative_exponent(self):
        assert float(normalize_exponents("1.0D-03")) == 0.001

    def test_positive_exponent(self):
        assert normalize_exponents("0.3986004415D+15") == "0.3986004415e+15"

    def test_lowercase_marker(self):
        assert normalize_exponents("2.5d-01") == "2.5e-01"

    def test_whole_record(self):
        line = "gfc    2    0 -0.484165143790815D-03  0.000000000000D+00"
        assert normalize_exponents(line).split()[3:] == [
            "-0.484165143790815e-03",
            "0.000000000000e+00",
        ]

    def test_words_untouched(self):
        assert normalize_exponents("modelname EGM-D-2008") == "modelname EGM-D-2008"
        assert normalize_exponents("tide_system tide_free") == "tide_system tide_free"

    def test_standard_notation_untouched(self):
        assert normalize_exponents("1.5e-07 3E+02") == "1.5e-07 3E+02"


# ---------------------------------------------------------------------------
# Header parsing
# ---------------------------------------------------------------------------


class TestGFCHeader:
    def test_metadata(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        assert model.name == "TEST_D3"
        assert model.gm == pytest.approx(3.986004415e14)
        assert model.radius == pytest.approx(6378136.3)
        assert model.n_max == 3
        assert model.m_max == 3
        assert model.normalized is True
        assert model.tide_system == "tide_free"

    def test_table_shape(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        assert model.data.shape == (4, 4)
        assert model.data.dtype == np.float64

    def test_unnormalized(self):
        model = GravityModel.from_text(_MINIMAL_HEADER + "norm unnormalized\n")
        assert model.normalized is False

    def test_unrecognized_norm_value(self):
        model = GravityModel.from_text(_MINIMAL_HEADER + "norm normalized\n")
        assert model.normalized is False

    def test_defaults_without_optional_fields(self):
        model = GravityModel.from_text("max_degree 1\n")
        assert model.name == "Unknown"
        assert model.normalized is False
        assert model.gm == 0.0
        assert model.radius == 0.0
        assert model.tide_system == "unknown"
        assert np.all(model.data == 0.0)

    def test_unrecognized_lines_ignored(self):
        text = _MINIMAL_HEADER + "product_type gravity_field\nerrors formal\nend_of_head\n"
        model = GravityModel.from_text(text)
        assert model.n_max == 2

    def test_missing_max_degree(self):
        with pytest.raises(MalformedHeaderError, match="max_degree"):
            GravityModel.from_text("modelname NONE\nradius 6378136.3\n")

    def test_bad_header_number(self):
        with pytest.raises(GravityParseError, match="line 2"):
            GravityModel.from_text("max_degree 2\nradius six_thousand\n")

    def test_bad_max_degree(self):
        with pytest.raises(GravityParseError):
            GravityModel.from_text("max_degree two\n")

    def test_negative_max_degree(self):
        with pytest.raises(GravityParseError):
            GravityModel.from_text("max_degree -1\n")

    def test_repeated_max_degree_reallocates(self, caplog):
        text = "max_degree 2\ngfc 2 0 1.0 0.0\nmax_degree 3\n"
        model = GravityModel.from_text(text)
        assert model.n_max == 3
        assert model.coefficient(2, 0) == 0.0
        assert "Repeated max_degree" in caplog.text


# ---------------------------------------------------------------------------
# Coefficient packing
# ---------------------------------------------------------------------------


class TestGFCCoefficients:
    def test_zonal_coefficient(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        assert model.coefficient(2, 0) == pytest.approx(-0.484165143790815e-03, rel=1e-14)
        assert model.coefficient(0, 0) == 1.0

    def test_c_at_n_m(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        assert model.coefficient(2, 2) == pytest.approx(0.243938357328313e-05, rel=1e-14)
        assert model.coefficient(3, 1) == pytest.approx(0.203046201047864e-05, rel=1e-14)

    def test_s_at_m_minus_one_n(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        assert model.coefficient(0, 2) == pytest.approx(0.138441389137979e-08, rel=1e-14)
        assert model.coefficient(1, 2) == pytest.approx(-0.140027370385934e-05, rel=1e-14)
        assert model.coefficient(2, 3) == pytest.approx(0.141434926192941e-05, rel=1e-14)

    def test_order_zero_s_not_stored(self):
        text = "max_degree 2\ngfc 2 0 0.5 9.9\n"
        model = GravityModel.from_text(text)
        assert np.count_nonzero(model.data) == 1
        assert model.coefficient(2, 0) == 0.5

    def test_missing_coefficients_are_zero(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        assert model.coefficient(1, 0) == 0.0
        assert model.coefficient(1, 1) == 0.0

    def test_get_pairs(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        assert model.get(2, 0) == (model.coefficient(2, 0), 0.0)
        c32, s32 = model.get(3, 2)
        assert c32 == model.coefficient(3, 2)
        assert s32 == model.coefficient(1, 3)

    def test_vendor_float_notation(self):
        model = GravityModel.from_text("max_degree 1\ngfc 1 1 1.0D-03 -2.0D+00\n")
        assert model.coefficient(1, 1) == 0.001
        assert model.coefficient(0, 1) == -2.0

    def test_standard_float_notation(self):
        model = GravityModel.from_text("max_degree 1\ngfc 1 0 1.0e-03 0.0\n")
        assert model.coefficient(1, 0) == 0.001

    def test_gfc_before_max_degree(self):
        with pytest.raises(MalformedHeaderError, match="line 1"):
            GravityModel.from_text("gfc 2 0 1.0 0.0\nmax_degree 2\n")

    def test_degree_out_of_range(self):
        with pytest.raises(CoefficientOutOfRangeError):
            GravityModel.from_text("max_degree 2\ngfc 3 0 1.0 0.0\n")

    def test_order_out_of_range(self):
        with pytest.raises(CoefficientOutOfRangeError):
            GravityModel.from_text("max_degree 2\ngfc 2 3 1.0 0.0\n")

    def test_negative_index(self):
        with pytest.raises(CoefficientOutOfRangeError):
            GravityModel.from_text("max_degree 2\ngfc -1 0 1.0 0.0\n")

    def test_truncated_record(self):
        with pytest.raises(GravityParseError, match="expected at least 5"):
            GravityModel.from_text("max_degree 2\ngfc 2 0 1.0\n")

    def test_bad_coefficient(self):
        with pytest.raises(GravityParseError, match="line 2"):
            GravityModel.from_text("max_degree 2\ngfc 2 0 1.0Q-03 0.0\n")


# ---------------------------------------------------------------------------
# Coefficient access
# ---------------------------------------------------------------------------


class TestCoefficientAccess:
    def test_index_past_max_degree(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        with pytest.raises(IndexOutOfRangeError):
            model.coefficient(4, 0)

    def test_negative_index(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        with pytest.raises(IndexOutOfRangeError):
            model.coefficient(-1, 0)
        with pytest.raises(IndexError):
            model.coefficient(0, -1)

    def test_get_out_of_range(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        with pytest.raises(IndexOutOfRangeError):
            model.get(3, 4)

    def test_table_is_read_only(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        with pytest.raises(ValueError):
            model.data[2, 0] = 1.0

    def test_as_array(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        arr = model.as_array()
        assert arr.dtype == jnp.float64
        assert arr.shape == (4, 4)
        assert float(arr[2, 0]) == model.coefficient(2, 0)

    def test_repr(self, gfc_text):
        model = GravityModel.from_text(gfc_text)
        assert repr(model).startswith("GravityModel(name='TEST_D3', n_max=3, m_max=3")


# ---------------------------------------------------------------------------
# Loading from files and products
# ---------------------------------------------------------------------------


class TestLoading:
    def test_load_gravity_model(self, gfc_text):
        model = load_gravity_model(gfc_text)
        assert model.name == "TEST_D3"

    def test_from_file(self, tmp_path: Path, gfc_text):
        path = tmp_path / "test.gfc"
        path.write_text(gfc_text, encoding="utf-8")
        model = GravityModel.from_file(path)
        assert model.coefficient(3, 3) == pytest.approx(0.721321757121568e-06)

    def test_from_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            GravityModel.from_file(tmp_path / "none.gfc")

    @pytest.mark.parametrize("product", list(GravityProduct))
    def test_from_product_data_dir(self, tmp_path: Path, gfc_text, product):
        (tmp_path / f"{product.name}.gfc").write_text(gfc_text, encoding="utf-8")
        model = GravityModel.from_product(product.name, data_dir=tmp_path)
        assert model.n_max == 3

    @pytest.mark.parametrize(
        ("product", "degree"),
        [
            (GravityProduct.EGM2008_20, 20),
            (GravityProduct.EGM2008_90, 90),
            (GravityProduct.GGM01S, 120),
            (GravityProduct.GGM05S, 180),
        ],
    )
    def test_from_product_bundled(self, product, degree):
        from earthref.utils.caching import get_gravity_cache_dir

        assert not (get_gravity_cache_dir() / product.value).exists()
        model = GravityModel.from_product(product)
        assert model.n_max == degree
        assert model.normalized
        assert model.gm == pytest.approx(3.986004415e14)
        assert model.radius == pytest.approx(6378136.3)
        assert model.coefficient(0, 0) == pytest.approx(1.0)
        assert model.coefficient(2, 0) == pytest.approx(-0.484165143790815e-03)
        assert model.get(2, 2) == pytest.approx(
            (0.243938357328313e-05, -0.140027370385934e-05)
        )

    def test_from_product_cache_overrides_bundled(self, gfc_text):
        from earthref.utils.caching import get_gravity_cache_dir

        (get_gravity_cache_dir() / "GGM05S.gfc").write_text(gfc_text, encoding="utf-8")
        model = GravityModel.from_product(GravityProduct.GGM05S)
        assert model.name == "TEST_D3"

    def test_from_product_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="EGM2008_20.gfc"):
            GravityModel.from_product("EGM2008_20", data_dir=tmp_path)

    def test_unknown_product(self):
        with pytest.raises(UnknownProductError):
            GravityModel.from_product("JGM3")

    def test_product_filenames(self):
        assert [p.value for p in GravityProduct] == [
            "EGM2008_20.gfc",
            "EGM2008_90.gfc",
            "GGM01S.gfc",
            "GGM05S.gfc",
        ]
