"""
Vendor Onboarding Importer

Turns vendor catalog data from a Shopify store, a CSV spreadsheet, a PDF
document or a public website into one normalized vendor + products draft,
and commits the reviewed draft to the Ribbon platform.

Modules:
    models         - Canonical catalog data classes (Vendor, Product, Variant)
    common         - Shared utilities (config loader, settings, logging, text)
    sources        - Source adapters (CSV, PDF, website, Shopify)
    shopify        - Shopify Admin/Storefront API client
    extraction     - AI-backed text-to-catalog extraction
    normalization  - Canonical schema rules and variant grouping
    review         - Caller-owned review/edit session
    ribbon         - Import committer for the Ribbon platform
"""
