# Common utilities
from .config_loader import (
    load_address_regions,
    load_commit_defaults,
    load_config,
    load_facet_keywords,
)
from .csv_utils import configure_csv, parse_csv_text
from .log_config import setup_logging
from .settings import Settings
from .text_utils import collapse_whitespace, normalize_title, slugify, strip_html
