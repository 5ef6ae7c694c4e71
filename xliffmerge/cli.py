#!/usr/bin/env python3
"""
xliff-merge - XLIFF 2.0 locale synchronization CLI

Propagates the source language catalog (messages.en.xlf) to every other
locale file in a directory. Existing translations are kept, new units are
machine translated when Google Translate is enabled, and anything left
untranslated gets the source text with state 'initial'.

Example:
    xliff-merge --path angular/src/locale
    xliff-merge --path src/locale --google-translate --api-key $KEY
    xliff-merge --locale de --locale ja     # also create missing locale files
"""

import argparse
import json
import logging
import os
import sys

from .sync import DEFAULT_EXTENSION, DEFAULT_PATH, DEFAULT_PREFIX, LocaleDirectory, LocaleSync
from .translator import create_translator


API_KEY_ENV = "GOOGLE_TRANSLATE_API_KEY"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xliff-merge",
        description="xliff-merge - synchronize XLIFF 2.0 locale files with the source catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Files:
  <path>/<prefix>.<locale>.xlf, e.g. angular/src/locale/messages.fr.xlf
  The source language file (messages.en.xlf) is the authoritative catalog.

States written:
  <previous>   existing translation, kept as is
  not-checked  machine translated
  initial      source text copied as placeholder

Examples:
  xliff-merge --path angular/src/locale
  xliff-merge --google-translate --api-key KEY
  GOOGLE_TRANSLATE_API_KEY=KEY xliff-merge --google-translate --fail-fast
        """,
    )
    parser.add_argument("--path", "-p", default=DEFAULT_PATH,
                        help=f"Locale directory (default: {DEFAULT_PATH})")
    parser.add_argument("--source-lang", "-s", default="en",
                        help="Locale of the authoritative catalog (default: en)")
    parser.add_argument("--prefix", default=DEFAULT_PREFIX,
                        help=f"File name prefix (default: {DEFAULT_PREFIX})")
    parser.add_argument("--google-translate", "-g", action="store_true",
                        help="Use Google Translate to translate new texts")
    parser.add_argument("--api-key", "-k", default=os.environ.get(API_KEY_ENV),
                        help=f"Google Translate API key (default: ${API_KEY_ENV})")
    parser.add_argument("--locale", "-l", action="append", dest="locales", default=[],
                        help="Locale to create if it has no file yet (repeatable)")
    parser.add_argument("--fail-fast", action="store_true",
                        help="Abort on the first locale file that cannot be loaded")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Log level for stderr diagnostics (default: INFO)")
    return parser


def cmd_merge(args) -> dict:
    """Synchronize every locale of the directory."""
    translator = create_translator(args.google_translate, args.api_key, source_lang=args.source_lang)
    directory = LocaleDirectory(args.path, prefix=args.prefix, extension=DEFAULT_EXTENSION)
    sync = LocaleSync(
        directory,
        source_lang=args.source_lang,
        translator=translator,
        fail_fast=args.fail_fast,
        locales=args.locales,
    )
    return sync.run()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result = cmd_merge(args)
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2, ensure_ascii=False))
    if result["status"] != "ok":
        sys.exit(1)


if __name__ == "__main__":
    main()
