"""domainseo - score domain names for SEO friendliness."""

__version__ = "0.1.0"

from .exceptions import DomainSEOError, InvalidDomainError, EnrichmentError, AccountError
from .scoring import (
    AnalysisResult,
    DomainAnalyzer,
    DomainComparison,
    NormalizedDomain,
    SEOMetrics,
    analyze_domain,
    compare_domains,
    normalize,
)

__all__ = [
    'DomainSEOError', 'InvalidDomainError', 'EnrichmentError', 'AccountError',
    'AnalysisResult', 'DomainAnalyzer', 'DomainComparison', 'NormalizedDomain',
    'SEOMetrics', 'analyze_domain', 'compare_domains', 'normalize',
]
