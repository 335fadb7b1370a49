from .exceptions import (
    KeyHuntException, ConfigurationError, CatalogError, CatalogNotFoundError,
    EmptyCatalogError, CatalogParseError, CatalogWriteError, ReportWriteError
)
from .matchers import Matcher, extract_base_prefixes, compile_exact_matchers, compile_dynamic_matchers
from .scanner import ScanEngine, UsageState, find_used_keys, check_translation_usage

__all__ = [
    'KeyHuntException',
    'ConfigurationError',
    'CatalogError',
    'CatalogNotFoundError',
    'EmptyCatalogError',
    'CatalogParseError',
    'CatalogWriteError',
    'ReportWriteError',
    'Matcher',
    'extract_base_prefixes',
    'compile_exact_matchers',
    'compile_dynamic_matchers',
    'ScanEngine',
    'UsageState',
    'find_used_keys',
    'check_translation_usage'
]
