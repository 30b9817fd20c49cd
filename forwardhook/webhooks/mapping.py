# forwardhook/webhooks/mapping.py
"""
Field mapping application.

Each mapping reads one value from the inbound document and writes it into
the outbound document. Mappings run in declared order and the first
failure aborts the whole document.
"""

from typing import Any, Dict, Iterable, Optional

from ..errors import MissingRequiredField
from ..jsonpath import MISSING, read, write
from ..logging import get_logger
from .models import FieldMapping

logger = get_logger(__name__)


def apply_mapping(
    mapping: FieldMapping,
    document: Any,
    output: Dict[str, Any],
    webhook: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Copy one field from `document` into `output`.

    Args:
        mapping: Source/destination pair
        document: Parsed inbound JSON
        output: Outbound document being built, mutated in place
        webhook: Webhook name, for diagnostics

    Returns:
        The output document

    Raises:
        MissingRequiredField: If the source is absent and the mapping is not optional
        StructuralConflict: If the destination clashes with earlier writes
    """
    value = read(document, mapping.source)
    if value is MISSING:
        if mapping.optional:
            logger.debug(
                "optional_field_skipped",
                webhook=webhook,
                source=str(mapping.source),
            )
            return output
        raise MissingRequiredField(mapping.source, webhook=webhook)

    return write(output, mapping.to, value)


def build_document(
    fields: Iterable[FieldMapping],
    document: Any,
    webhook: Optional[str] = None,
) -> Dict[str, Any]:
    """Run every mapping against `document` into a fresh output object."""
    output: Dict[str, Any] = {}
    for mapping in fields:
        apply_mapping(mapping, document, output, webhook=webhook)
    return output
