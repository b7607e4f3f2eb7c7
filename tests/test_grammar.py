"""Tests for field expression parsing and range validation."""

import pytest

from tickrules import (
    FieldForm,
    FieldParseError,
    NonDividingStepError,
    OrderingError,
    RangeError,
    RuleError,
    UnsupportedFormError,
    ZeroStepError,
    classify_field,
    parse_field,
    validate_range,
)


# =============================================================================
# Classification Tests
# =============================================================================


class TestClassifyField:
    """Tests for grammar form classification."""

    @pytest.mark.parametrize(
        "text,form",
        [
            ("*", FieldForm.WILDCARD),
            ("*/5", FieldForm.STEPPED),
            ("*/0", FieldForm.STEPPED),
            ("*/60", FieldForm.STEPPED),
            ("10/20", FieldForm.LIST),
            ("10/20/30", FieldForm.LIST),
            ("30/20/10", FieldForm.LIST),
            ("0", FieldForm.INTEGER),
            ("42", FieldForm.INTEGER),
            ("-1", FieldForm.INTEGER),
            ("+3", FieldForm.INTEGER),
        ],
    )
    def test_recognised_forms(self, text, form):
        """Test each recognised form is classified."""
        assert classify_field(text) is form

    @pytest.mark.parametrize(
        "text",
        ["", "**", "*/", "*/x", "*/5/10", "1-5", "1,2", "10/*", "10/", "/10", "MON", "5L", "-", "1/-2", "²"],
    )
    def test_unsupported_forms(self, text):
        """Test unrecognised text is unsupported."""
        assert classify_field(text) is FieldForm.UNSUPPORTED


# =============================================================================
# Wildcard and Integer Tests
# =============================================================================


class TestParseWildcardAndInteger:
    """Tests for wildcard and single value parsing."""

    def test_wildcard_is_empty(self):
        """Test wildcard produces the match-any sentinel."""
        assert parse_field("*", 60) == ()

    def test_single_value(self):
        """Test a single integer yields a singleton."""
        assert parse_field("16", 60) == (16,)

    def test_single_value_not_range_checked(self):
        """Test parsing alone does not enforce legal ranges."""
        assert parse_field("99", 60) == (99,)
        assert parse_field("-1", 7) == (-1,)

    def test_unsupported_raises(self):
        """Test unsupported text raises UnsupportedFormError."""
        with pytest.raises(UnsupportedFormError) as exc:
            parse_field("1-5", 60)
        assert exc.value.text == "1-5"
        assert "not supported" in str(exc.value)


# =============================================================================
# Stepped Wildcard Tests
# =============================================================================


class TestParseStepped:
    """Tests for stepped wildcard parsing."""

    def test_every_five_minutes(self):
        """Test */5 over 60 yields 0..55."""
        assert parse_field("*/5", 60) == tuple(range(0, 60, 5))

    def test_non_dividing_step(self):
        """Test a step that does not divide evenly stops below the modulus."""
        assert parse_field("*/25", 60) == (0, 25, 50)

    def test_step_one(self):
        """Test */1 yields every value."""
        assert parse_field("*/1", 24) == tuple(range(24))

    def test_largest_step(self):
        """Test the largest allowed step yields two values."""
        assert parse_field("*/59", 60) == (0, 59)

    def test_start_offset(self):
        """Test generation from a non-zero start."""
        assert parse_field("*/3", 12, start=1) == (1, 4, 7, 10)
        assert parse_field("*/10", 31, start=1) == (1, 11, 21, 31)

    def test_zero_step(self):
        """Test */0 raises ZeroStepError."""
        with pytest.raises(ZeroStepError):
            parse_field("*/0", 60)

    def test_step_equal_modulus(self):
        """Test a step equal to the modulus is rejected."""
        with pytest.raises(NonDividingStepError) as exc:
            parse_field("*/60", 60)
        assert exc.value.step == 60
        assert exc.value.modulus == 60

    def test_step_above_modulus(self):
        """Test a step above the modulus is rejected."""
        with pytest.raises(NonDividingStepError):
            parse_field("*/30", 24)


# =============================================================================
# List Tests
# =============================================================================


class TestParseList:
    """Tests for explicit list parsing."""

    def test_increasing_list(self):
        """Test a strictly increasing list is accepted verbatim."""
        assert parse_field("10/20/30", 60) == (10, 20, 30)

    def test_two_values(self):
        """Test a two-value list."""
        assert parse_field("2/3", 12) == (2, 3)

    def test_list_starting_at_zero(self):
        """Test zero is allowed as the first list value."""
        assert parse_field("0/30", 60) == (0, 30)

    def test_decreasing_list(self):
        """Test a decreasing list raises OrderingError."""
        with pytest.raises(OrderingError) as exc:
            parse_field("30/20/10", 60)
        assert exc.value.previous == 30
        assert exc.value.value == 20

    def test_repeated_value(self):
        """Test a repeated value is not strictly increasing."""
        with pytest.raises(OrderingError):
            parse_field("10/10", 60)

    def test_errors_share_base(self):
        """Test grammar errors are ValueErrors with the original text."""
        with pytest.raises(FieldParseError) as exc:
            parse_field("5/4", 60)
        assert isinstance(exc.value, RuleError)
        assert isinstance(exc.value, ValueError)
        assert exc.value.text == "5/4"


# =============================================================================
# Range Validation Tests
# =============================================================================


class TestValidateRange:
    """Tests for range validation."""

    def test_values_in_range(self):
        """Test in-range values pass."""
        validate_range((0, 30, 59), 0, 59)

    def test_empty_values(self):
        """Test the wildcard sentinel always passes."""
        validate_range((), 1, 31)

    def test_above_maximum(self):
        """Test a value above the maximum names the upper bound."""
        with pytest.raises(RangeError) as exc:
            validate_range((10, 60), 0, 59)
        assert exc.value.value == 60
        assert exc.value.bound == 59
        assert exc.value.is_upper
        assert str(exc.value) == "60 is > 59"

    def test_below_minimum(self):
        """Test a value below the minimum names the lower bound."""
        with pytest.raises(RangeError) as exc:
            validate_range((0,), 1, 31)
        assert exc.value.value == 0
        assert exc.value.bound == 1
        assert not exc.value.is_upper
        assert str(exc.value) == "0 is < 1"

    def test_first_offending_value_reported(self):
        """Test validation stops at the first bad value."""
        with pytest.raises(RangeError) as exc:
            validate_range((-5, 100), 0, 59)
        assert exc.value.value == -5
