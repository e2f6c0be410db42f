"""
Process a mail parser export from a local JSON file.

Reads a mail parser document ({"mail_attachments": [...]}), reconciles
every shipment against the configured stores and prints the per-record
results. Exits with status 1 when any record failed.

Usage:
    python scripts/process_shipments.py test_data.json
"""

import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from shiprecon.clients.order_service import StoreApiClient
from shiprecon.config import ReconcilerSettings, StoreRegistry
from shiprecon.core.processor import ShipmentProcessor
from shiprecon.models.ingest import MailparserEnvelope
from shiprecon.models.shipment import BatchResponse
from shiprecon.utils.logging import setup_logging

# Load environment variables
load_dotenv()


async def run(document_path: Path) -> BatchResponse:
    """Run one batch from a mail parser JSON file."""
    envelope = MailparserEnvelope(mailparser=document_path.read_text(encoding="utf-8"))
    request = envelope.to_request()

    settings = ReconcilerSettings.from_env()
    registry = StoreRegistry.from_env()

    async with StoreApiClient(
        api_version=settings.api_version,
        timeout_seconds=settings.http_timeout_seconds,
    ) as client:
        processor = ShipmentProcessor(registry, client, settings)
        batch = await processor.process_batch(request.mail_attachments)

    return BatchResponse.from_batch(batch)


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/process_shipments.py <mailparser.json>")
        sys.exit(2)

    document_path = Path(sys.argv[1])
    if not document_path.exists():
        print(f"❌ File not found: {document_path}")
        sys.exit(2)

    setup_logging("shiprecon-script")

    try:
        response = asyncio.run(run(document_path))
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(2)

    print(json.dumps(response.model_dump(mode="json"), indent=2))

    if not response.success:
        print(f"\n❌ {response.failed} shipment(s) failed:\n{response.error}")
        sys.exit(1)

    print(
        f"\n✅ All shipments processed: {response.succeeded} updated, "
        f"{response.skipped} skipped"
    )


if __name__ == "__main__":
    main()
