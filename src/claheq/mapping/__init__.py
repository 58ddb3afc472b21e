"""
claheq.mapping
==============

Histogram -> lookup-table mapping functions.

Modules
-------
area : Area-based (cumulative) mapping, identity mapping and the
       MappingFunction protocol for custom strategies.
"""

from .area import (
    MappingFunction,
    area_based_mapping,
    identity_mapping,
    DEFAULT_MAPPING,
    check_lookup_table,
)

import importlib as _importlib
area = _importlib.import_module(".area", __name__)

__all__ = [
    # functions
    "MappingFunction",
    "area_based_mapping",
    "identity_mapping",
    "DEFAULT_MAPPING",
    "check_lookup_table",
    # modules
    "area",
]
