"""
Ingest API request models.

These models define the structure of shipment batches submitted to the
processing endpoints, either as mail parser rows or as the raw mail parser
document. Rows are kept as received and validated one at a time by the
batch processor, so a malformed row fails alone.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from shiprecon.models.shipment import ShipmentRecord


class ProcessShipmentsRequest(BaseModel):
    """Request body carrying mail parser shipment rows."""

    mail_attachments: list[Any] = Field(
        description="Shipment rows parsed from the carrier email attachments",
        min_length=1,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "mail_attachments": [
                    ShipmentRecord.model_config["json_schema_extra"]["example"]
                ]
            }
        }
    )


class MailparserEnvelope(BaseModel):
    """Request body carrying the mail parser output as a JSON string."""

    mailparser: str = Field(
        description="Mail parser JSON document with a 'mail_attachments' array",
        min_length=1,
    )

    def to_request(self) -> ProcessShipmentsRequest:
        """
        Decode the embedded mail parser document.

        Raises:
            ValueError: If the document is not JSON or has no attachments
        """
        try:
            document = json.loads(self.mailparser)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error parsing mailparser document: {e}") from e

        if not isinstance(document, dict) or not document.get("mail_attachments"):
            raise ValueError("No mail_attachments found in mailparser document.")

        attachments = document["mail_attachments"]
        if not isinstance(attachments, list):
            raise ValueError("mail_attachments must be a list of shipment rows.")

        return ProcessShipmentsRequest(mail_attachments=attachments)
