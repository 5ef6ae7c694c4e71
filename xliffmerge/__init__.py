"""
xliffmerge - XLIFF 2.0 locale synchronization

Propagates the structure of the source language catalog to every locale
catalog, keeping existing translations, optionally machine translating new
units and marking each unit's translation state.

Quick start:
    xliff-merge --path angular/src/locale
    xliff-merge --path angular/src/locale --google-translate --api-key KEY
"""

__version__ = "1.0.0"

from .format_handlers import Catalog, CatalogError, Note, Unit, Xliff2Handler
from .merge import MergeStats, merge_catalog
from .sync import LocaleDirectory, LocaleSync
from .translator import GoogleTranslator, TranslationError, Translator

__all__ = [
    "Catalog",
    "CatalogError",
    "Note",
    "Unit",
    "Xliff2Handler",
    "MergeStats",
    "merge_catalog",
    "LocaleDirectory",
    "LocaleSync",
    "GoogleTranslator",
    "TranslationError",
    "Translator",
]
