"""
Shipment processing API routes.

These endpoints accept a batch of supplier shipment records, reconcile
each against its store order and submit tracking confirmations.
Every record is attempted; failures are reported per record.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from shiprecon.api.dependencies import get_processor
from shiprecon.core.processor import ShipmentProcessor
from shiprecon.models.ingest import MailparserEnvelope, ProcessShipmentsRequest
from shiprecon.models.shipment import BatchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/shipments/process", response_model=BatchResponse)
async def process_shipments(
    request: ProcessShipmentsRequest,
    processor: ShipmentProcessor = Depends(get_processor),
) -> BatchResponse:
    """
    Reconcile a batch of shipment records.

    Args:
        request: Mail parser shipment rows (at least one); malformed rows
            come back as error results
        processor: Shipment processor bound to the store API client

    Returns:
        BatchResponse with one result per record; success is false when
        any record failed, and error holds the distinct failure messages
    """
    batch = await processor.process_batch(request.mail_attachments)

    logger.info(
        "Processed %d shipment records (%d distinct errors)",
        len(batch.results),
        len(batch.errors),
    )

    return BatchResponse.from_batch(batch)


@router.post("/shipments/mailparser", response_model=BatchResponse)
async def process_mailparser_document(
    envelope: MailparserEnvelope,
    processor: ShipmentProcessor = Depends(get_processor),
) -> BatchResponse:
    """
    Reconcile the shipments of a raw mail parser document.

    Args:
        envelope: Mail parser output as a JSON string
        processor: Shipment processor bound to the store API client

    Returns:
        BatchResponse, as for /shipments/process

    Raises:
        400: Document is not JSON or has no attachments
    """
    try:
        request = envelope.to_request()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return await process_shipments(request, processor)
