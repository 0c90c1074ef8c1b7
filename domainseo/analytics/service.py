"""Traffic and revenue projections, model-backed when available."""

import logging
import math
import random
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from ..exceptions import EnrichmentError
from ..llm_client import LLMClient
from .generator import TIME_FRAMES, POINT_COUNTS, DataPoint, date_labels, label_for

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsReport:
    """Traffic/revenue series per time frame plus headline metrics."""
    domain: str
    traffic: Dict[str, List[DataPoint]]
    revenue: Dict[str, List[DataPoint]]
    metrics: Dict[str, float]
    domain_exists: bool = False
    source: str = "projection"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'domain': self.domain,
            'trafficData': {tf: [p.to_dict() for p in pts] for tf, pts in self.traffic.items()},
            'revenueData': {tf: [p.to_dict() for p in pts] for tf, pts in self.revenue.items()},
            'metrics': self.metrics,
            'domainExists': self.domain_exists,
            'source': self.source
        }


def _percent_change(points: List[DataPoint]) -> int:
    if len(points) < 2 or points[-2].value == 0:
        return 0
    return math.floor((points[-1].value / points[-2].value - 1) * 100)


def fallback_analytics(domain: str, rng: random.Random, today: Optional[date] = None) -> AnalyticsReport:
    """Offline projection bundle driven entirely by the given generator."""
    base_traffic = math.floor(rng.random() * 20000 + 10000)
    conversion_rate = (rng.random() * 3 + 1) / 100   # 1-4%
    revenue_per_user = rng.random() * 0.4 + 0.2       # $0.20-$0.60

    scales = {
        'daily': (base_traffic / 30, 0.3),
        'weekly': (base_traffic / 4, 0.25),
        'monthly': (base_traffic, 0.2),
        'yearly': (base_traffic * 12, 0.15)
    }

    traffic = {}
    revenue = {}
    for time_frame in TIME_FRAMES:
        base_value, variance = scales[time_frame]
        points = []
        for day in date_labels(time_frame, POINT_COUNTS[time_frame], today):
            value = math.floor(base_value * (1 + rng.random() * variance * 2 - variance))
            points.append(DataPoint(name=label_for(time_frame, day), value=value, date=day.isoformat()))
        traffic[time_frame] = points
        revenue[time_frame] = [
            DataPoint(name=p.name, value=math.floor(p.value * conversion_rate * revenue_per_user), date=p.date)
            for p in points
        ]

    metrics = {
        'totalTraffic': math.floor(base_traffic * 30),
        'conversionRate': conversion_rate * 100,
        'totalRevenue': math.floor(base_traffic * 30 * conversion_rate * revenue_per_user),
        'averageRevenuePerUser': round(revenue_per_user, 2),
        'trafficChange': _percent_change(traffic['daily']),
        'revenueChange': _percent_change(revenue['daily'])
    }

    return AnalyticsReport(domain=domain, traffic=traffic, revenue=revenue, metrics=metrics,
                           domain_exists=False, source='projection')


def _parse_series(raw: Any) -> Dict[str, List[DataPoint]]:
    if not isinstance(raw, dict):
        raise EnrichmentError("Series data is not an object")
    series = {}
    for time_frame in TIME_FRAMES:
        series[time_frame] = [
            DataPoint(name=str(p['name']), value=int(p['value']), date=str(p.get('date', '')))
            for p in raw.get(time_frame, [])
        ]
    return series


class AnalyticsService:
    """Fetches analytics from a generative-text model, falling back to projections."""

    EXISTS_PROMPT = (
        "Check if the domain '{domain}' exists and is active. Research if this is a real "
        "website that's currently online. Return ONLY a valid JSON object with these "
        'properties: "exists" (boolean) and "popularity" (one of "high", "medium", "low" '
        "if it exists, or null). Return ONLY JSON with no explanations."
    )

    ANALYTICS_PROMPT = (
        "Act as a domain analytics expert. I need {kind} traffic and revenue data for the "
        "{state} domain: {domain}. Provide JSON with: trafficData and revenueData, each with "
        "daily, weekly, monthly and yearly arrays of {{name, value, date}}; and metrics with "
        "totalTraffic, conversionRate, totalRevenue, averageRevenuePerUser, trafficChange and "
        'revenueChange. Add "domainExists": {exists} to the JSON. Return ONLY valid JSON with '
        "no explanations or markdown."
    )

    def __init__(self, llm_client: Optional[LLMClient] = None, rng: Optional[random.Random] = None,
                 seed: Optional[int] = None):
        self.llm_client = llm_client
        self.rng = rng or random.Random(seed)

    async def check_domain_exists(self, domain: str) -> bool:
        try:
            data = await self.llm_client.generate_json(
                self.EXISTS_PROMPT.format(domain=domain), temperature=0.1
            )
        except EnrichmentError as e:
            logger.warning("Existence check failed for %s: %s", domain, e)
            return False
        return bool(data.get('exists', False))

    async def _fetch_from_model(self, domain: str) -> AnalyticsReport:
        exists = await self.check_domain_exists(domain)
        prompt = self.ANALYTICS_PROMPT.format(
            kind="ACCURATE" if exists else "PROJECTED",
            state="EXISTING" if exists else "potential",
            domain=domain,
            exists="true" if exists else "false"
        )
        data = await self.llm_client.generate_json(prompt, max_tokens=8192)

        try:
            return AnalyticsReport(
                domain=domain,
                traffic=_parse_series(data.get('trafficData')),
                revenue=_parse_series(data.get('revenueData')),
                metrics=dict(data.get('metrics') or {}),
                domain_exists=exists,
                source='llm'
            )
        except (KeyError, TypeError, ValueError) as e:
            raise EnrichmentError(f"Unusable analytics payload for {domain}: {e}") from e

    async def fetch_analytics(self, domain: str, today: Optional[date] = None) -> AnalyticsReport:
        if self.llm_client is not None and self.llm_client.configured:
            try:
                return await self._fetch_from_model(domain)
            except EnrichmentError as e:
                logger.warning("Falling back to projected analytics for %s: %s", domain, e)
        return fallback_analytics(domain, self.rng, today)
