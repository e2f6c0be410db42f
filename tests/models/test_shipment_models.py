"""Tests for shipment and batch models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from shiprecon.errors import InvalidShipmentRecordError
from shiprecon.models.ingest import MailparserEnvelope
from shiprecon.models.shipment import (
    BatchResponse,
    BatchResult,
    ProcessingResult,
    ProcessingStatus,
    ShipmentRecord,
)


class TestShipmentRecord:
    def test_parse_mailparser_row(self):
        record = ShipmentRecord.model_validate(
            {
                "customer_po": "TSA-8636-104233-S1",
                "tracking_number": "1Z999AA10123456784",
                "ship_via_description": "UPS GRND",
                "stock_item": "1042 BLK",
                "item_qty": "2.0000",
                "shipment_date": "2026-10-15",
                "edwards_order_number": "E-558120",
            }
        )

        assert record.item_qty == Decimal("2.0000")
        assert record.supplier_order_number == "E-558120"
        assert record.shipment_id == "E-558120"

    def test_shipment_id_falls_back_to_tracking_number(self, shipment_factory):
        record = shipment_factory(edwards_order_number=None)

        assert record.shipment_id == "1Z999AA10123456784"

    def test_record_is_immutable(self, shipment_factory):
        record = shipment_factory()

        with pytest.raises(ValidationError):
            record.customer_po = "other"

    def test_tracking_number_required(self):
        with pytest.raises(ValidationError):
            ShipmentRecord(customer_po="1-2", stock_item="X", item_qty=1)

    def test_from_row_collects_every_problem(self):
        with pytest.raises(InvalidShipmentRecordError) as exc_info:
            ShipmentRecord.from_row(
                {"tracking_number": "1ZB", "customer_po": "1-2", "item_qty": "-1"}
            )

        assert exc_info.value.problems == [
            "stock_item: Field required",
            "item_qty: Input should be greater than or equal to 0",
        ]

    def test_from_row_returns_records_unchanged(self, shipment_factory):
        record = shipment_factory()

        assert ShipmentRecord.from_row(record) is record

    @pytest.mark.parametrize(
        "row,expected",
        [
            ({"edwards_order_number": "E-1", "tracking_number": "1ZA"}, "E-1"),
            ({"tracking_number": "1ZA"}, "1ZA"),
            ({"tracking_number": ""}, "row 4"),
            (["not", "a", "row"], "row 4"),
        ],
    )
    def test_row_label(self, row, expected):
        assert ShipmentRecord.row_label(row, 3) == expected


class TestBatchResult:
    def test_response_counts(self):
        batch = BatchResult(
            results=[
                ProcessingResult(shipment="a", status=ProcessingStatus.SUCCESS),
                ProcessingResult(shipment="b", status=ProcessingStatus.SKIPPED),
                ProcessingResult(
                    shipment="c", status=ProcessingStatus.ERROR, error="boom"
                ),
                ProcessingResult(
                    shipment="d", status=ProcessingStatus.ERROR, error="bang"
                ),
            ],
            errors=["boom", "bang"],
        )

        response = BatchResponse.from_batch(batch)

        assert response.success is False
        assert (response.total, response.succeeded, response.skipped, response.failed) == (
            4,
            1,
            1,
            2,
        )
        assert response.error == "boom\nbang"


class TestMailparserEnvelope:
    def test_to_request(self):
        envelope = MailparserEnvelope(
            mailparser='{"mail_attachments": [{"customer_po": "1-2", '
            '"tracking_number": "T1", "stock_item": "X", "item_qty": 1}]}'
        )

        request = envelope.to_request()

        assert len(request.mail_attachments) == 1
        assert ShipmentRecord.from_row(request.mail_attachments[0]).tracking_number == "T1"

    def test_non_object_document(self):
        with pytest.raises(ValueError, match="No mail_attachments"):
            MailparserEnvelope(mailparser="[1, 2]").to_request()
