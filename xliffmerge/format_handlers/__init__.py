#!/usr/bin/env python3
"""
Format handlers for localization catalog files.

Supported formats:
- XLIFF 2.0: Angular / OASIS XLIFF 2.0 (.xlf, .xliff)
"""

from .base import (
    STATE_FINAL,
    STATE_INITIAL,
    STATE_NOT_CHECKED,
    Catalog,
    FormatHandler,
    Note,
    Unit,
)
from .xliff2 import XLIFF_NS, CatalogError, Xliff2Handler, is_well_formed

__all__ = [
    'Catalog',
    'CatalogError',
    'FormatHandler',
    'Note',
    'Unit',
    'Xliff2Handler',
    'XLIFF_NS',
    'is_well_formed',
    'STATE_FINAL',
    'STATE_INITIAL',
    'STATE_NOT_CHECKED',
]
