#!/usr/bin/env python3
"""
Onboard a vendor into Ribbon from a CSV, PDF, website or Shopify store.

Each source command prints (or writes) the normalized vendor + products
draft as JSON. Review the draft, then commit it with optional edits.

Usage:
    # Extract a draft from a spreadsheet
    python3 import_vendor.py csv exhibitors.csv --output draft.json

    # From a PDF line sheet
    python3 import_vendor.py pdf linesheet.pdf -o draft.json

    # From a brand website
    python3 import_vendor.py website https://acme.example -o draft.json

    # From a Shopify store (falls back to SHOPIFY_STORE_URL / SHOPIFY_ACCESS_TOKEN)
    python3 import_vendor.py shopify --store acme.myshopify.com --token shpat_xxx -o draft.json

    # Commit the reviewed draft, fixing fields on the way
    python3 import_vendor.py commit draft.json --set email=hello@acme.example \\
        --set store.paymentTerms="Net 60" --set products.0.variants.1.price=24
"""

import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Any, Dict

from vendor_onboarding.common.config_loader import load_commit_defaults
from vendor_onboarding.common.log_config import setup_logging
from vendor_onboarding.common.settings import Settings
from vendor_onboarding.exceptions import InputValidationError, OnboardingError
from vendor_onboarding.extraction import (
    SOURCE_CSV,
    SOURCE_PDF,
    SOURCE_WEBSITE,
    CatalogExtractor,
    GeminiExtractionService,
)
from vendor_onboarding.models import CatalogDraft
from vendor_onboarding.review import ReviewSession
from vendor_onboarding.ribbon import ImportCommitter, RibbonClient
from vendor_onboarding.sources import (
    PDF_MIME_TYPE,
    DocumentTextSource,
    ShopifyCatalogSource,
    WebPageSource,
    csv_to_text,
    validate_csv_upload,
    validate_document_upload,
    validate_url,
)

logger = logging.getLogger("vendor_onboarding.cli")


def _read_upload(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise InputValidationError(f"Cannot read file: {path} ({e.strerror})", field="file") from e


def _extractor(settings: Settings) -> CatalogExtractor:
    service = GeminiExtractionService(settings.gemini_api_key, model=settings.gemini_model)
    return CatalogExtractor(service)


def run_csv(args, settings: Settings) -> CatalogDraft:
    data = _read_upload(args.file)
    validate_csv_upload(Path(args.file).name, len(data))
    try:
        content = data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InputValidationError("CSV file must be UTF-8 encoded", field="file") from e
    return _extractor(settings).extract(csv_to_text(content), SOURCE_CSV)


def run_pdf(args, settings: Settings) -> CatalogDraft:
    data = _read_upload(args.file)
    content_type = mimetypes.guess_type(args.file)[0] or ""
    validate_document_upload(Path(args.file).name, content_type, len(data))

    extractor = _extractor(settings)
    text = DocumentTextSource(extractor.service).extract_text(data, PDF_MIME_TYPE)
    return extractor.extract(text, SOURCE_PDF)


def run_website(args, settings: Settings) -> CatalogDraft:
    url = validate_url(args.url)
    with WebPageSource() as source:
        text = source.fetch_text(url)
    return _extractor(settings).extract(text, SOURCE_WEBSITE, url=url)


def run_shopify(args, settings: Settings) -> CatalogDraft:
    store = args.store or settings.shopify_store_url
    token = args.token or settings.shopify_access_token
    with ShopifyCatalogSource(store, token) as source:
        return source.fetch_catalog()


def apply_edit(session: ReviewSession, assignment: str) -> None:
    """
    Apply one --set edit.

    Paths:
        email, store.paymentTerms, vendor.brandName   vendor fields
        instagram, lookbook                           store links
        products.<i>.<field>                          product field
        products.<i>.variants.<j>.<field>             variant field
    """
    path, sep, raw = assignment.partition('=')
    if not sep or not path.strip():
        raise InputValidationError(f"Edit must look like path=value: {assignment}", field="set")

    path = path.strip()
    try:
        value: Any = json.loads(raw)
    except ValueError:
        value = raw

    parts = path.split('.')
    if parts[0] == 'products':
        try:
            if len(parts) == 3:
                session.update_product(int(parts[1]), parts[2], value)
                return
            if len(parts) == 5 and parts[2] == 'variants':
                session.update_variant(int(parts[1]), int(parts[3]), parts[4], value)
                return
        except ValueError as e:
            raise InputValidationError(f"Bad index in edit path: {path}", field="set") from e
        raise InputValidationError(f"Unknown edit path: {path}", field="set")

    if path == 'instagram':
        session.set_instagram_handle(str(raw))
    elif path == 'lookbook':
        session.set_lookbook_url(str(raw))
    else:
        session.update_vendor(path[len('vendor.'):] if path.startswith('vendor.') else path, value)


def run_commit(args, settings: Settings) -> Dict[str, Any]:
    session = ReviewSession.load(args.draft)
    for assignment in args.set or []:
        apply_edit(session, assignment)

    defaults = load_commit_defaults()
    with RibbonClient(settings.ribbon_base_url, endpoints=defaults.get('endpoints')) as client:
        result = session.commit(ImportCommitter(client, defaults=defaults))
    return result.to_dict()


def write_json(data: Dict[str, Any], output: str) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(text + "\n", encoding='utf-8')
        logger.info("Draft written to %s", output)
    else:
        print(text)


def main():
    parser = argparse.ArgumentParser(
        description="Onboard a vendor into Ribbon from CSV, PDF, website or Shopify",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 import_vendor.py csv exhibitors.csv -o draft.json
  python3 import_vendor.py shopify --store acme --token shpat_xxx -o draft.json
  python3 import_vendor.py commit draft.json --set email=hello@acme.example
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Only log warnings and errors')
    parser.add_argument('--env-file', type=str, default=None,
                        help='Path to a .env file (default: ./.env)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also append log records to this file')

    subparsers = parser.add_subparsers(dest='command', required=True)

    csv_parser = subparsers.add_parser('csv', help='Extract a draft from a CSV file')
    csv_parser.add_argument('file', help='CSV file (max 10MB)')

    pdf_parser = subparsers.add_parser('pdf', help='Extract a draft from a PDF file')
    pdf_parser.add_argument('file', help='PDF file (max 10MB)')

    web_parser = subparsers.add_parser('website', help='Extract a draft from a website')
    web_parser.add_argument('url', help='Website URL (http/https)')

    shopify_parser = subparsers.add_parser('shopify', help='Read a draft from a Shopify store')
    shopify_parser.add_argument('--store', '-s', type=str, default='',
                                help="Store URL or shop name (e.g., 'acme' or 'acme.myshopify.com')")
    shopify_parser.add_argument('--token', '-t', type=str, default='',
                                help='Shopify Admin API access token')

    for source_parser in (csv_parser, pdf_parser, web_parser, shopify_parser):
        source_parser.add_argument('--output', '-o', type=str, default='',
                                   help='Write the draft JSON here (default: stdout)')

    commit_parser = subparsers.add_parser('commit', help='Commit a reviewed draft to Ribbon')
    commit_parser.add_argument('draft', help='Draft JSON written by a source command')
    commit_parser.add_argument('--set', action='append', metavar='PATH=VALUE',
                               help='Edit a field before committing (repeatable)')

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)
    settings = Settings.from_env(Path(args.env_file) if args.env_file else None)

    runners = {
        'csv': run_csv,
        'pdf': run_pdf,
        'website': run_website,
        'shopify': run_shopify,
    }

    try:
        if args.command == 'commit':
            print(json.dumps(run_commit(args, settings), indent=2))
        else:
            draft = runners[args.command](args, settings)
            write_json(draft.to_dict(), args.output)
    except OnboardingError as e:
        logger.error("%s failed: %s", args.command, e.message)
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
