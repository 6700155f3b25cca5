"""
ValueFormatter 單元測試：dimension、literal、參照與錯誤收集。
"""
import pytest

from recursica_forge.errors import ErrorCollector
from recursica_forge.formatter import ValueFormatter, format_number
from recursica_forge.names import path_to_var_name
from recursica_forge.resolver import ReferenceResolver
from recursica_forge.values import Dimension, Literal, Reference


class TestFormatNumber:
    def test_integral_float_drops_fraction(self):
        assert format_number(1.0) == "1"
        assert format_number(16) == "16"

    def test_fraction(self):
        assert format_number(0.5) == "0.5"

    def test_non_finite(self):
        assert format_number(float("nan")) == "NaN"
        assert format_number(float("inf")) == "Infinity"
        assert format_number(float("-inf")) == "-Infinity"

    def test_small_numbers_use_short_exponent(self):
        assert format_number(1e-07) == "1e-7"
        assert format_number(-2.5e-08) == "-2.5e-8"

    def test_small_numbers_above_threshold_are_plain(self):
        assert format_number(0.00001) == "0.00001"
        assert format_number(1.5e-05) == "0.000015"
        assert format_number(0.000001) == "0.000001"

    def test_large_numbers_use_signed_exponent(self):
        assert format_number(1e22) == "1e+22"
        assert format_number(1e20) == "100000000000000000000"


class TestValueFormatter:
    def setup_method(self):
        self.errors = ErrorCollector()
        known = {path_to_var_name("tokens.sizes.default")}
        self.fmt = ValueFormatter(ReferenceResolver(known), self.errors)

    def fmt_value(self, value):
        return self.fmt.format(value, "tokens.test")

    # ─── dimension ───

    def test_dimension_with_unit(self):
        assert self.fmt_value(Dimension(1.5, "rem")) == "1.5rem"

    def test_dimension_default_unit_px(self):
        assert self.fmt_value(Dimension(4)) == "4px"

    def test_percentage_unit(self):
        assert self.fmt_value(Dimension(50, "percentage")) == "50%"

    def test_dimension_reference_ignores_unit(self):
        value = Dimension(Reference("tokens.sizes.default", "{tokens.sizes.default}"), "px")
        assert self.fmt_value(value) == "var(--recursica_tokens_sizes_default)"
        assert len(self.errors) == 0

    def test_dimension_non_numeric_is_error(self):
        self.fmt_value(Dimension("big", "px"))
        assert self.errors.errors[0].message == "Unsupported dimension value type: string"

    # ─── literal ───

    @pytest.mark.parametrize("raw", ["#FFF", "#00000080", "none", "normal", "italic", "uppercase"])
    def test_passthrough_strings(self, raw):
        assert self.fmt_value(Literal(raw)) == raw

    def test_var_expression_passthrough(self):
        assert self.fmt_value(Literal("var(--a) var(--b)")) == "var(--a) var(--b)"

    def test_plain_string_quoted(self):
        assert self.fmt_value(Literal("Inter")) == '"Inter"'

    def test_inner_quotes_escaped(self):
        assert self.fmt_value(Literal('say "hi"')) == '"say \\"hi\\""'

    def test_number(self):
        assert self.fmt_value(Literal(400)) == "400"
        assert self.fmt_value(Literal(0.5)) == "0.5"

    def test_nan_is_error(self):
        assert self.fmt_value(Literal(float("nan"))) == "NaN"
        assert self.errors.errors[0].message == "Invalid number: NaN"
        assert self.errors.errors[0].path == "tokens.test"

    def test_list_joined(self):
        assert self.fmt_value(Literal(["Inter", "sans-serif"])) == '"Inter", "sans-serif"'

    def test_boolean_is_unsupported(self):
        self.fmt_value(Literal(True))
        assert self.errors.errors[0].message == "Unsupported value type: boolean"

    def test_none_value_is_skipped(self):
        assert self.fmt_value(None) is None

    # ─── reference ───

    def test_resolved_reference(self):
        assert self.fmt_value(Reference("tokens.sizes.default", "{tokens.sizes.default}")) == (
            "var(--recursica_tokens_sizes_default)"
        )

    def test_unresolved_reference_is_error(self):
        out = self.fmt_value(Reference("tokens.colors.missing", "{tokens.colors.missing}"))
        assert out == "var(--recursica_tokens_colors_missing)"
        err = self.errors.errors[0]
        assert err.path == "tokens.test"
        assert "{tokens.colors.missing}" in err.message
        assert "--recursica_tokens_colors_missing" in err.message
