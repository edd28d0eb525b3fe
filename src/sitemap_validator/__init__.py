"""sitemap-validator - Rule-based validation for XML sitemaps.

Checks <urlset> structure, <loc> URLs and hreflang alternate links and
reports every problem as an error or a warning.
"""

__version__ = "0.1.0"
__author__ = "rpapub"
__email__ = "contact@rpapub.dev"
__description__ = "Rule-based validation for XML sitemaps with hreflang alternates"

from sitemap_validator.config import SitemapValidatorConfig, ValidatorConfig
from sitemap_validator.validation import ValidationEngine, ValidationReport, validate

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
    "SitemapValidatorConfig",
    "ValidatorConfig",
    "ValidationEngine",
    "ValidationReport",
    "validate",
]
