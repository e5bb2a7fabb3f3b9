# tests/core/tabular/test_ranges.py
"""Tests for integer list, range and step expansion."""

import pytest


class TestParseRange:
    """Single list elements."""

    def test_single_value(self) -> None:
        from gigs.core.tabular.ranges import RangeSpec, parse_range

        assert parse_range("16099") == RangeSpec(16099, 16099)

    def test_negative_single_value(self) -> None:
        from gigs.core.tabular.ranges import parse_range

        assert list(parse_range("-5")) == [-5]

    def test_range_with_step(self) -> None:
        from gigs.core.tabular.ranges import RangeSpec, parse_range

        assert parse_range("16362-16398 +2") == RangeSpec(16362, 16398, 2)

    def test_step_truncates_at_upper(self) -> None:
        from gigs.core.tabular.ranges import parse_range

        assert list(parse_range("1-6 +2")) == [1, 3, 5]

    def test_length(self) -> None:
        from gigs.core.tabular.ranges import parse_range

        assert len(parse_range("16362-16398 +2")) == 19
        assert len(parse_range("10-12")) == 3

    def test_reversed_bounds_rejected(self) -> None:
        from gigs.contracts.errors import FormatError
        from gigs.core.tabular.ranges import parse_range

        with pytest.raises(FormatError, match="exceeds upper bound"):
            parse_range("20-10")

    def test_zero_step_rejected(self) -> None:
        from gigs.contracts.errors import FormatError
        from gigs.core.tabular.ranges import parse_range

        with pytest.raises(FormatError, match="step"):
            parse_range("1-10 +0")

    @pytest.mark.parametrize("element", ["abc", "1-x", "1-5 +y", ""])
    def test_malformed_elements(self, element: str) -> None:
        from gigs.contracts.errors import FormatError
        from gigs.core.tabular.ranges import parse_range

        with pytest.raises(FormatError):
            parse_range(element)


class TestExpand:
    """Whole cells."""

    def test_stepped_range(self) -> None:
        from gigs.core.tabular.ranges import expand

        codes = expand("16362-16398 +2")
        assert len(codes) == 19
        assert codes[0] == 16362
        assert codes[-1] == 16398
        assert all(b - a == 2 for a, b in zip(codes, codes[1:], strict=False))

    def test_concatenation_in_declaration_order(self) -> None:
        from gigs.core.tabular.ranges import expand

        codes = expand("16261-16299; 16070-16089; 16099; 16091-16094")
        expected = (
            list(range(16261, 16300))
            + list(range(16070, 16090))
            + [16099]
            + list(range(16091, 16095))
        )
        assert codes == expected

    def test_no_deduplication(self) -> None:
        from gigs.core.tabular.ranges import expand

        assert expand("16001-16003; 16002") == [16001, 16002, 16003, 16002]

    def test_integer_passthrough(self) -> None:
        from gigs.core.tabular.ranges import expand

        assert expand(4326) == [4326]

    def test_regrouped_code_array(self) -> None:
        from gigs.core.tabular.ranges import expand

        assert expand([32601, 32602]) == [32601, 32602]

    def test_none_is_empty(self) -> None:
        from gigs.core.tabular.ranges import expand

        assert expand(None) == []

    @pytest.mark.parametrize("value", [True, 1.5, object()])
    def test_rejects_non_integer_values(self, value: object) -> None:
        from gigs.contracts.errors import FormatError
        from gigs.core.tabular.ranges import expand

        with pytest.raises(FormatError):
            expand(value)
