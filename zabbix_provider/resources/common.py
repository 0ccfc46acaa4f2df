"""
Helpers shared by the resource handlers
"""

from typing import Any, Dict, List, Optional

from ..errors import MultipleRecordsError
from ..resource_data import ResourceData
from ..types import FilterCriteria


def single_record(records: List[Dict[str, Any]], kind: str) -> Optional[Dict[str, Any]]:
    """
    Pick the only record of a lookup

    Args:
        records: Records returned by a *.get call
        kind: Plural entity name used in the error message

    Returns:
        The record, or None when the lookup found nothing

    Raises:
        MultipleRecordsError: If more than one record matched
    """
    if len(records) < 1:
        return None
    if len(records) > 1:
        raise MultipleRecordsError(f'multiple {kind} found')
    return records[0]


def set_fields(d: ResourceData, record: Dict[str, Any], mapping: Dict[str, str]) -> None:
    """
    Copy record values into d

    mapping is {field name: wire key}. Keys missing from the record are
    left alone, so write-only values such as passwords stay intact. Fields
    that d does not declare (data sources) are skipped.
    """
    for field, wire_key in mapping.items():
        if wire_key in record and field in d.fields():
            d.set(field, record[wire_key])


def lookup_filter(d: ResourceData, keys: List[str]) -> FilterCriteria:
    """Build a *.get filter from the lookup attributes that are set"""
    lookup = {}
    for key in keys:
        value, ok = d.get_ok(key)
        if ok:
            lookup[key] = value
    return lookup
