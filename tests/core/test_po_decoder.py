"""Tests for customer PO decoding."""

import pytest

from shiprecon.core.po_decoder import (
    DecodedPO,
    SkipOrder,
    decode_customer_po,
    strip_sequence_suffix,
)
from shiprecon.errors import InputError, InvalidPOFormatError, InvalidStoreIdError

RESERVED = {"239457", "239558", "155255"}


class TestStripSequenceSuffix:
    def test_strips_numeric_suffix(self):
        assert strip_sequence_suffix("7400-12345-S2") == "7400-12345"

    def test_strips_hash_suffix(self):
        assert strip_sequence_suffix("7400-12345-S#") == "7400-12345"

    def test_keeps_po_without_suffix(self):
        assert strip_sequence_suffix("7400-12345") == "7400-12345"

    def test_only_trailing_suffix_is_removed(self):
        assert strip_sequence_suffix("7400-S1-12345") == "7400-S1-12345"


class TestDecodeCustomerPO:
    def test_two_segments(self):
        decoded = decode_customer_po("7400-12345")

        assert decoded == DecodedPO(
            store_id="7400", order_id="12345", cleaned_po="7400-12345"
        )

    def test_leading_abbreviation_and_suffix(self):
        decoded = decode_customer_po("ABC-7400-12345-S2")

        assert isinstance(decoded, DecodedPO)
        assert decoded.store_id == "7400"
        assert decoded.order_id == "12345"
        assert decoded.cleaned_po == "ABC-7400-12345"

    def test_extra_segments_are_ignored(self):
        decoded = decode_customer_po("ABC-7400-12345-X-Y")

        assert (decoded.store_id, decoded.order_id) == ("7400", "12345")

    def test_single_segment_is_invalid(self):
        with pytest.raises(InvalidPOFormatError) as exc_info:
            decode_customer_po("740012345")

        assert "740012345" in exc_info.value.message

    def test_non_numeric_store_id(self):
        with pytest.raises(InvalidStoreIdError) as exc_info:
            decode_customer_po("TSA-12345")

        assert exc_info.value.store_id == "TSA"

    def test_input_errors_share_base_class(self):
        with pytest.raises(InputError):
            decode_customer_po("nodashes")
        with pytest.raises(InputError):
            decode_customer_po("X-Y-Z")


class TestReservedOrders:
    def test_reserved_number_is_skipped(self):
        result = decode_customer_po("239457", RESERVED)

        assert isinstance(result, SkipOrder)
        assert result.cleaned_po == "239457"
        assert "B2B" in result.reason

    def test_reserved_number_skips_regardless_of_structure(self):
        # Would otherwise fail the store ID check
        result = decode_customer_po("ACME-PO239558-77-S3", RESERVED)

        assert isinstance(result, SkipOrder)
        assert result.cleaned_po == "ACME-PO239558-77"

    def test_no_reserved_numbers_configured(self):
        with pytest.raises(InvalidPOFormatError):
            decode_customer_po("239457")

    def test_empty_reserved_entry_is_ignored(self):
        decoded = decode_customer_po("7400-12345", {""})

        assert isinstance(decoded, DecodedPO)
