"""
SKU variant generation.

Supplier and store catalogs render multi-token SKUs inconsistently
("TS1042 BLK", "TS1042-BLK", "TS1042BLK"). Matching compares the sets
of all plausible renderings instead of the raw strings.
"""

import itertools
import re

SKU_PART_SEPARATOR_RE = re.compile(r"[\s-]+")

# Joiners tried at every boundary between two SKU parts
VARIANT_SEPARATORS = ("", " ", "-")


def generate_sku_variants(sku: str, max_parts: int = 8) -> set[str]:
    """
    Generate every rendering of a SKU across separator styles.

    The trimmed SKU is split on runs of whitespace and hyphens, and the
    parts are re-joined in order with "", " " or "-" chosen independently
    at each boundary, giving up to 3^(k-1) variants for k parts. The
    trimmed SKU itself is always included.

    Cost is exponential in the part count, so SKUs with more than
    max_parts parts only get the three uniform renderings.

    Args:
        sku: SKU to expand (already store-prefixed where applicable)
        max_parts: Part count cap for full expansion

    Returns:
        Set of SKU variants; {""} for a blank SKU
    """
    trimmed = sku.strip()
    parts = SKU_PART_SEPARATOR_RE.split(trimmed)

    if len(parts) > max_parts:
        joiners = [(separator,) * (len(parts) - 1) for separator in VARIANT_SEPARATORS]
    else:
        joiners = itertools.product(VARIANT_SEPARATORS, repeat=len(parts) - 1)

    variants = set()
    for separators in joiners:
        rendered = parts[0]
        for separator, part in zip(separators, parts[1:]):
            rendered += separator + part
        variants.add(rendered)

    variants.add(trimmed)
    return variants
