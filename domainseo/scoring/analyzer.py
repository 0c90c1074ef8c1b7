"""Full analysis pipeline and multi-domain comparison."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from ..checkers.pricing_service import DomainPricing, PricingService
from .insights import Insight, InsightGenerator, details_by_code
from .normalizer import normalize
from .scorer import SEOMetrics, SEOScorer

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Everything derived from one analyzed domain."""
    domain: str
    metrics: SEOMetrics
    recommendations: List[Insight] = field(default_factory=list)
    strengths: List[Insight] = field(default_factory=list)
    weaknesses: List[Insight] = field(default_factory=list)
    pricing: Optional[DomainPricing] = None

    @property
    def recommendation_messages(self) -> List[str]:
        return [i.message for i in self.recommendations]

    @property
    def strength_messages(self) -> List[str]:
        return [i.message for i in self.strengths]

    @property
    def weakness_messages(self) -> List[str]:
        return [i.message for i in self.weaknesses]

    @property
    def recommendation_details(self) -> Dict[str, str]:
        return details_by_code(self.recommendations)

    @property
    def strength_details(self) -> Dict[str, str]:
        return details_by_code(self.strengths)

    @property
    def weakness_details(self) -> Dict[str, str]:
        return details_by_code(self.weaknesses)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'domain': self.domain,
            'metrics': self.metrics.to_dict(),
            'recommendations': [i.to_dict() for i in self.recommendations],
            'strengths': [i.to_dict() for i in self.strengths],
            'weaknesses': [i.to_dict() for i in self.weaknesses],
        }
        if self.pricing:
            result['pricing'] = self.pricing.to_dict()
        return result


@dataclass
class DomainComparison:
    """Analyses of several domains plus the highest-scoring one."""
    domains: List[AnalysisResult]
    best_choice: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'domains': [r.to_dict() for r in self.domains],
            'bestChoice': self.best_choice
        }


def pick_best(results: List[AnalysisResult]) -> Optional[str]:
    """Highest overall score in input order; the earlier domain keeps ties."""
    best: Optional[AnalysisResult] = None
    for result in results:
        if best is None or result.metrics.overall_score > best.metrics.overall_score:
            best = result
    return best.domain if best else None


class DomainAnalyzer:
    """Runs normalize -> score -> insights -> pricing for one or many domains."""

    def __init__(
        self,
        pricing_service: Optional[PricingService] = None,
        scorer: Optional[SEOScorer] = None,
        insight_generator: Optional[InsightGenerator] = None
    ):
        self.pricing_service = pricing_service
        self.scorer = scorer or SEOScorer()
        self.insights = insight_generator or InsightGenerator(keywords=self.scorer.keywords)

    def evaluate(self, raw_domain: str) -> AnalysisResult:
        """Synchronous scoring without enrichment. Raises InvalidDomainError."""
        domain = normalize(raw_domain)
        name, extension = domain.name, domain.extension
        metrics = self.scorer.score(domain)

        logger.debug("Scored %s: overall %s", domain, metrics.overall_score)

        return AnalysisResult(
            domain=str(domain),
            metrics=metrics,
            recommendations=self.insights.recommendations(metrics, name, extension),
            strengths=self.insights.strengths(metrics, name, extension),
            weaknesses=self.insights.weaknesses(metrics, name, extension),
        )

    async def _fetch_pricing(self, domain: str) -> Optional[DomainPricing]:
        if self.pricing_service is None:
            return None
        try:
            return await self.pricing_service.get_pricing(domain)
        except Exception as e:
            # Enrichment is optional; the analysis stands without it
            logger.warning("Pricing lookup failed for %s: %s", domain, e)
            return None

    async def enrich_async(self, result: AnalysisResult) -> AnalysisResult:
        """Attach pricing to an already scored result."""
        result.pricing = await self._fetch_pricing(result.domain)
        return result

    async def analyze_async(self, raw_domain: str) -> AnalysisResult:
        return await self.enrich_async(self.evaluate(raw_domain))

    async def compare_async(self, raw_domains: List[str]) -> DomainComparison:
        """Analyze domains concurrently and pick the best one."""
        results = await asyncio.gather(*(self.analyze_async(d) for d in raw_domains))
        results = list(results)
        return DomainComparison(domains=results, best_choice=pick_best(results))

    def enrich(self, result: AnalysisResult) -> AnalysisResult:
        """Synchronous wrapper for enrich_async."""
        return asyncio.run(self.enrich_async(result))

    def analyze(self, raw_domain: str) -> AnalysisResult:
        """Synchronous wrapper for analyze_async."""
        return asyncio.run(self.analyze_async(raw_domain))

    def compare(self, raw_domains: List[str]) -> DomainComparison:
        """Synchronous wrapper for compare_async."""
        return asyncio.run(self.compare_async(raw_domains))


def analyze_domain(raw_domain: str, pricing_service: Optional[PricingService] = None) -> AnalysisResult:
    return DomainAnalyzer(pricing_service=pricing_service).analyze(raw_domain)


def compare_domains(raw_domains: List[str],
                    pricing_service: Optional[PricingService] = None) -> DomainComparison:
    return DomainAnalyzer(pricing_service=pricing_service).compare(raw_domains)
