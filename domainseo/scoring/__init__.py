from .normalizer import NormalizedDomain, normalize, clean_domain_name, split_domain, join_domain
from .scorer import SEOMetrics, SEOScorer, SEO_KEYWORDS
from .insights import Insight, InsightGenerator
from .analyzer import (
    AnalysisResult,
    DomainAnalyzer,
    DomainComparison,
    analyze_domain,
    compare_domains,
    pick_best,
)

__all__ = [
    'NormalizedDomain', 'normalize', 'clean_domain_name', 'split_domain', 'join_domain',
    'SEOMetrics', 'SEOScorer', 'SEO_KEYWORDS', 'Insight', 'InsightGenerator',
    'AnalysisResult', 'DomainAnalyzer', 'DomainComparison', 'analyze_domain',
    'compare_domains', 'pick_best',
]
