"""
Extraction Prompts

Instruction templates sent to the extraction service. Each embeds the raw
source text and the JSON shape the reply must follow; the reply is parsed
by response_parser.parse_catalog_response().
"""

DOCUMENT_TEXT_INSTRUCTION = (
    "Extract all text content from this PDF document. "
    "Return only the text content without any formatting or explanations."
)

JSON_ONLY = "Return only valid JSON without any markdown formatting."

VARIANT_FIELDS = """{
  "sku": "8r98wefssh-2",
  "variantImage": null,
  "facets": null,
  "options": ["Red"],
  "availability": null,
  "qty": null,
  "maxQty": null,
  "price": null,
  "wholesale": 120,
  "stock": null,
  "inActive": null,
  "color": null,
  "room": null,
  "origin": null,
  "values": null,
  "materials": null,
  "collectionFacet": null,
  "type": null,
  "upc": null,
  "categoryFacet": null,
  "priceFacet": null,
  "size": null,
  "gallery": null,
  "artist": null,
  "galleryCity": null,
  "galleryCountry": null,
  "yearFacet": null,
  "paymentFacet": null
}"""

FULL_SCHEMA = """{
  "vendor": {
    "firstName": "", "lastName": "", "email": "", "brandName": "",
    "description": "", "phone": "", "businessWords": "", "title": "",
    "catalogURL": "", "showroomImageURL": "", "webSite": "", "avatarURL": "",
    "address": "", "address2": "", "city": "", "state": "", "country": "",
    "zipCode": "", "currencyCode": "USD",
    "store": {
      "profileURL": "", "about": "",
      "openingOrderAmt": 0, "reorderAmt": 0,
      "priceRange": "", "paymentTerms": "", "shippingPolicy": "",
      "estimatedShipTimes": "", "returnsAndExchanges": "",
      "vendorNotes": "", "vendorHighlightMessage": "", "videoLink": "",
      "links": [{"linkName": "", "linkValue": ""}],
      "curatedImages": [{"imageSrc": "", "callToAction": ""}],
      "lookbookURL": "",
      "profileSteps": [],
      "heading": ""
    }
  },
  "products": [
    {
      "name": "", "brandName": "", "description": "", "sku": "",
      "price": 0, "wholesale": 0, "qty": 0, "maxQty": 0,
      "category": [], "tags": "", "currencyCode": "", "productType": [],
      "availability": "", "imagesURL": [], "shippingClass": "",
      "productETA": "", "shortDescription": "", "stock": 0, "salePrice": 0,
      "variantInfo": {
        "options": [{"key": "", "value": ""}],
        "variants": [VARIANT]
      }
    }
  ]
}""".replace("VARIANT", "{ ...variant fields as in the example above... }")

SHORT_SCHEMA = """{
  "vendor": {
    "firstName": "", "lastName": "", "email": "", "brandName": "",
    "description": "", "phone": "", "webSite": "WEBSITE",
    "address": "", "address2": "", "city": "", "state": "",
    "zipCode": "", "country": "", "currencyCode": "USD"
  },
  "products": [
    {
      "name": "", "description": "", "price": 0, "wholesale": 0, "sku": "",
      "imagesURL": [], "category": [], "tags": "", "stock": 0,
      "variantInfo": {
        "options": [{"key": "", "value": ""}],
        "variants": [
          {"sku": "", "options": [], "price": 0, "wholesale": 0, "stock": 0,
           "variantImage": "", "color": [], "materials": [], "size": []}
        ]
      }
    }
  ]
}"""

GROUPING_RULES = """VARIANT GROUPING:
- Rows or entries with the same (or a very similar) product title are ONE product.
- A row with a missing title belongs to the product above it; if a SKU prefix
  matches another product, group it with that product instead.
- Put every grouped row in variantInfo.variants of that single product.
  Never create separate product entries for variants.
- Every product has variantInfo, even with only one variant.
- variantInfo.options is a list of {"key", "value"} pairs: key is the axis of
  variation (Color, Size, Material...), value is a comma-separated string of
  every distinct value found across the variants, e.g. {"key": "Size", "value": "M,XL"}.
- Each variant's options list holds its own values in the same order as the keys."""

VENDOR_RULES = """VENDOR PROFILE:
- Extract a clean vendor profile: brand name, contact, description, logo URL,
  Instagram handle and highlighted images when available.
- If any address part is missing (such as country), infer it from the city,
  state or ZIP code.
- store.links only takes two link names: "Link" (the website) and "Instagram".
  Put any other link (catalog, lookbook...) on the vendor itself, e.g. webSite
  or catalogURL."""


def build_tabular_prompt(text: str) -> str:
    """Prompt for flattened spreadsheet rows (see sources.tabular.flatten_rows)."""
    return "\n\n".join([
        "The following is messy spreadsheet data from an exhibitor. Extract structured "
        "JSON describing the exhibitor and their products.",
        VENDOR_RULES,
        GROUPING_RULES,
        "Include variant attributes such as sku, variantImage, wholesale, materials and "
        "color. Variant example:\n" + VARIANT_FIELDS,
        "EXPECTED JSON STRUCTURE:\n" + FULL_SCHEMA,
        "RAW INPUT:\n" + text,
        JSON_ONLY,
    ])


def build_document_prompt(text: str) -> str:
    """Prompt for text extracted from an uploaded PDF."""
    return "\n\n".join([
        "Analyze the following PDF content and extract vendor/exhibitor information and "
        "products.",
        "PDF CONTENT:\n" + text,
        "INSTRUCTIONS:\n"
        "1. Extract the vendor/exhibitor profile\n"
        "2. Identify and extract all products\n"
        "3. Group similar products as variants\n"
        "4. Infer missing details where possible",
        VENDOR_RULES,
        GROUPING_RULES,
        "EXPECTED JSON STRUCTURE:\n" + SHORT_SCHEMA.replace("WEBSITE", ""),
        JSON_ONLY,
    ])


def build_website_prompt(url: str, text: str) -> str:
    """Prompt for scraped website text; webSite is pre-filled with the URL."""
    return "\n\n".join([
        "Analyze the following website content and extract vendor/brand information and "
        "products.",
        "WEBSITE URL: " + url,
        "WEBSITE CONTENT:\n" + text,
        "INSTRUCTIONS:\n"
        "1. Extract vendor/brand information from the website\n"
        "2. Identify and extract product information\n"
        "3. Infer missing details where possible",
        VENDOR_RULES,
        GROUPING_RULES,
        "EXPECTED JSON STRUCTURE:\n" + SHORT_SCHEMA.replace("WEBSITE", url),
        JSON_ONLY,
    ])
