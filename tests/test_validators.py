"""Unit tests for the primitive argument checks."""

from __future__ import annotations

import pytest

from harmony_rpc.methods.validators import (
    is_bool_flag,
    is_flag,
    is_hex_address,
    is_hex_blob,
    is_hex_hash,
    is_non_negative_int,
    is_one_address,
    is_one_of,
    is_page_number,
    is_positive_int,
    is_sort_order,
    is_storage_slot,
    is_tx_type,
)

ONE_ADDRESS = "one1pdv9lrdwl0rg5vglh4xtyrv3wjk3wsqket7zxy"
HEX_ADDRESS = "0x" + "a1" * 20
HEX_HASH = "0x" + "ab" * 32


class TestOneAddress:
    """Tests for is_one_address."""

    def test_accepts_well_formed(self) -> None:
        assert is_one_address(ONE_ADDRESS)
        assert is_one_address("one1" + "0" * 38)

    @pytest.mark.parametrize(
        "value",
        [
            "not-an-address",
            "one2" + "a" * 38,
            "ONE1" + "a" * 38,
            "one1" + "a" * 37,
            "one1" + "a" * 39,
            "one1" + "A" * 38,
            "one1" + "a" * 37 + "_",
            " " + ONE_ADDRESS,
            "",
        ],
    )
    def test_rejects_deviations(self, value: str) -> None:
        assert not is_one_address(value)

    def test_rejects_non_strings(self) -> None:
        assert not is_one_address(None)
        assert not is_one_address(12345)
        assert not is_one_address(b"one1" + b"a" * 38)


class TestHexShapes:
    """Tests for hex address, hash, blob and storage slot checks."""

    def test_hex_address(self) -> None:
        assert is_hex_address(HEX_ADDRESS)
        assert is_hex_address("0x" + "AbCdEf0123" * 4)
        assert not is_hex_address("0x" + "a" * 39)
        assert not is_hex_address("0x" + "g" * 40)
        assert not is_hex_address("a1" * 20)

    def test_hash_accepts_exact_length_any_case(self) -> None:
        assert is_hex_hash(HEX_HASH)
        assert is_hex_hash("0x" + "AB" * 32)
        assert is_hex_hash("0x" + "aB" * 32)

    @pytest.mark.parametrize(
        "value",
        ["0x" + "a" * 63, "0x" + "a" * 65, "0X" + "a" * 64, "ab" * 32, "0x" + "z" * 64, None],
    )
    def test_hash_rejects_other_shapes(self, value: object) -> None:
        assert not is_hex_hash(value)

    def test_hex_blob_prefix_is_optional(self) -> None:
        assert is_hex_blob("0xf86c")
        assert is_hex_blob("0XF86C")
        assert is_hex_blob("f86c")
        assert not is_hex_blob("0x")
        assert not is_hex_blob("")
        assert not is_hex_blob("0xzz")

    def test_storage_slot(self) -> None:
        assert is_storage_slot("0x0")
        assert is_storage_slot("0x" + "f" * 64)
        assert not is_storage_slot("0x" + "f" * 65)
        assert not is_storage_slot("0")


class TestIntegers:
    """Tests for positive, non-negative and page-number checks."""

    @pytest.mark.parametrize("value", [1, 26943165, "1", "26943165", "10"])
    def test_positive_accepts(self, value: object) -> None:
        assert is_positive_int(value)

    @pytest.mark.parametrize("value", [0, -1, "0", "-5", "007", "01", "abc", "1.5", "", True, None, 1.0])
    def test_positive_rejects(self, value: object) -> None:
        assert not is_positive_int(value)

    def test_non_negative_permits_zero(self) -> None:
        assert is_non_negative_int(0)
        assert is_non_negative_int("0")
        assert is_non_negative_int("12")
        assert not is_non_negative_int(-1)
        assert not is_non_negative_int("-1")
        assert not is_non_negative_int(False)

    def test_page_number_allows_all_pages_sentinel(self) -> None:
        assert is_page_number(1)
        assert is_page_number("5")
        assert is_page_number(-1)
        assert is_page_number("-1")
        assert not is_page_number(0)
        assert not is_page_number(-2)


class TestEnumsAndFlags:
    """Tests for enum membership and boolean flags."""

    def test_tx_type(self) -> None:
        for value in ("ALL", "SENT", "RECEIVED"):
            assert is_tx_type(value)
        assert not is_tx_type("all")
        assert not is_tx_type("BOTH")

    def test_sort_order(self) -> None:
        assert is_sort_order("ASC")
        assert is_sort_order("DESC")
        assert not is_sort_order("asc")

    def test_default_flag_is_type_strict(self) -> None:
        assert is_flag(True)
        assert is_flag(False)
        assert not is_flag(1)
        assert not is_flag(0)
        assert not is_flag("true")
        assert not is_flag(None)

    def test_flag_forms_are_configurable(self) -> None:
        check = is_bool_flag(("1", "0"))
        assert check("1")
        assert check("0")
        assert not check(True)
        assert not check(1)

    def test_one_of_requires_exact_match(self) -> None:
        check = is_one_of(("A", "B"))
        assert check("A")
        assert not check("a")
        assert not check(["A"])
