"""Data Fidelity Control System.

Compares the extraction manifest (rows a category's records should produce)
with the storage receipt (rows the store actually wrote).
"""

from designindex.utils.logging import logger

from .exceptions import DataFidelityError
from .models import Component, CssUtility, Documentation, Icon, Token


def build_manifest(records: list) -> dict[str, int]:
    """Expected row counts per table for a list of same-kind records."""
    manifest: dict[str, int] = {}

    def add(table: str, count: int):
        manifest[table] = manifest.get(table, 0) + count

    for record in records:
        if isinstance(record, Token):
            add("tokens", 1)
            add("token_properties", len(record.properties))
        elif isinstance(record, Component):
            add("components", 1)
            add("component_props", len(record.props))
            add("component_slots", len(record.slots))
            add("component_events", len(record.events))
            add("component_examples", len(record.examples))
            add("component_css_classes", len(record.css_classes))
        elif isinstance(record, CssUtility):
            add("css_utilities", 1)
            add("css_utility_classes", len(record.classes))
            add("css_utility_examples", len(record.examples))
        elif isinstance(record, Documentation):
            add("documentation", 1)
        elif isinstance(record, Icon):
            add("icons", 1)
        else:
            raise TypeError(f"Unsupported record type: {type(record).__name__}")

    return {table: count for table, count in manifest.items() if count}


def reconcile_counts(
    manifest: dict[str, int], receipt: dict[str, int], category: str, strict: bool = True
) -> dict[str, object]:
    """Compare what was extracted with what was stored.

    Extracted rows with nothing stored is an error (raised in strict mode);
    any other difference is a warning.
    """
    tables = set(manifest) | set(receipt)

    errors = []
    warnings = []

    for table in sorted(tables):
        extracted = manifest.get(table, 0)
        stored = receipt.get(table, 0)

        if extracted > 0 and stored == 0:
            errors.append(f"{table}: extracted {extracted} -> stored 0 (100% LOSS)")
        elif extracted != stored:
            delta = extracted - stored
            warnings.append(f"{table}: extracted {extracted} -> stored {stored} (delta: {delta})")

    result = {
        "status": "FAILED" if errors else ("WARNING" if warnings else "OK"),
        "errors": errors,
        "warnings": warnings,
    }

    if errors:
        error_msg = f"Fidelity check FAILED for {category}.\n" + "\n".join(f"  - {e}" for e in errors)
        if warnings:
            error_msg += "\nAdditional warnings:\n" + "\n".join(f"  - {w}" for w in warnings)

        if strict:
            logger.error(error_msg)
            raise DataFidelityError(error_msg, details=result)
        logger.error(f"[NON-STRICT] {error_msg}")

    elif warnings:
        lines = "\n".join(f"  - {w}" for w in warnings)
        logger.warning(f"Fidelity warnings for {category}:\n{lines}")

    return result
