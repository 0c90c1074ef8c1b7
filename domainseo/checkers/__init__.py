from .dns_checker import DNSChecker
from .whois_checker import WhoisChecker, WhoisRecord
from .pricing_service import (
    DomainPricing,
    PricingService,
    EstimatedPricingService,
    RegistryPricingService,
    LLMPricingService,
    build_pricing_service,
    default_price_estimate,
)

__all__ = [
    'DNSChecker', 'WhoisChecker', 'WhoisRecord', 'DomainPricing', 'PricingService',
    'EstimatedPricingService', 'RegistryPricingService', 'LLMPricingService',
    'build_pricing_service', 'default_price_estimate',
]
