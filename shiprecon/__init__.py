"""
Shiprecon - carrier shipment to store order reconciliation.

Matches supplier shipment notifications against store orders and
submits bundled tracking confirmations back to the owning store.
"""

__version__ = "0.1.0"
