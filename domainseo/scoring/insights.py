"""Threshold rules that turn metrics into recommendations, strengths and weaknesses."""

from dataclasses import dataclass
from typing import Dict, List

from .scorer import DIGITS, SEOMetrics, SEO_KEYWORDS


@dataclass(frozen=True)
class Insight:
    """One fired rule: a stable code, the display message and a longer explanation."""
    code: str
    message: str
    detail: str

    def to_dict(self) -> Dict[str, str]:
        return {'code': self.code, 'message': self.message, 'detail': self.detail}


def details_by_code(insights: List[Insight]) -> Dict[str, str]:
    return {insight.code: insight.detail for insight in insights}


class InsightGenerator:
    """Derives human-readable insights from computed metrics."""

    # Text of rules that do not depend on the domain
    RECOMMENDATIONS = {
        'longer_name': (
            "Consider a slightly longer domain name for better SEO impact.",
            "From a Functional Purpose perspective, your domain name is the foundation of your "
            "online identity and should effectively communicate your brand's essence while "
            "supporting SEO goals. The current length is suboptimal for keyword inclusion, "
            "limiting your ability to rank for relevant terms. At the Abstract Function level, a "
            "more strategically sized domain (6-14 characters) provides the ideal balance between "
            "memorability and search engine relevance, allowing for proper keyword integration "
            "while remaining easy to recall. In practical implementation (Physical Form), consider "
            "adding relevant industry terms or descriptive modifiers to your current domain that "
            "align with your target audience's search patterns."
        ),
        'shorter_name': (
            "Shorter domain names are typically more memorable and easier to type.",
            "At the Functional Purpose level, your domain name serves as the primary access point "
            "to your digital presence and should minimize user friction. The current length "
            "exceeds the optimal character count, creating potential barriers to memorability and "
            "direct navigation. The underlying Abstract Function principle is that shorter domains "
            "reduce cognitive load for users, leading to improved brand recall and word-of-mouth "
            "sharing. From a Generalized Function standpoint, lengthy domains increase the "
            "likelihood of typographical errors when users manually enter your URL, potentially "
            "resulting in lost traffic. Consider removing unnecessary words or using abbreviations "
            "to create a more concise and memorable domain identity."
        ),
        'improve_memorability': (
            "A more memorable domain name will help users find your site again.",
            "At the core Functional Purpose level, your domain should facilitate easy recall and "
            "return visits, functioning as a permanent mental anchor for your brand. The current "
            "domain structure scores below optimal on memorability metrics, which may impede "
            "organic brand building. From an Abstract Function perspective, memorable domains "
            "prioritize phonetic simplicity, avoid special characters, and utilize linguistic "
            "patterns that resonate with human memory systems. Examining the Physical Form of your "
            "domain, consider removing hyphens, numbers, or unusual spellings that create cognitive "
            "friction. A more memorable alternative might use alliteration, rhyming elements, or "
            "common word patterns that create stronger mental associations."
        ),
        'improve_brandability': (
            "Consider a more unique name that will stand out as a distinct brand.",
            "Your domain's primary Functional Purpose includes establishing a distinctive brand "
            "identity that stands apart from competitors and creates lasting impressions. The "
            "current name lacks sufficient uniqueness to achieve strong brand differentiation in "
            "your market space. At the Abstract Function level, brand distinctiveness is a "
            "foundational principle that enables more efficient marketing, stronger trademark "
            "protection, and reduced confusion in the marketplace. From a Physical Form "
            "perspective, consider creating a synthetic word, using unexpected word combinations, "
            "or incorporating creative prefixes/suffixes that maintain pronunciation clarity while "
            "establishing uniqueness. This approach will significantly strengthen your brand's "
            "memorability and legal defensibility."
        ),
        'move_keywords_forward': (
            "For better SEO impact, place keywords at the beginning of the domain name.",
            "From a Functional Purpose standpoint, your domain should optimize for both human "
            "usability and search algorithm interpretation. While your domain contains relevant "
            "keywords, their placement is suboptimal for maximum SEO impact. The Abstract Function "
            "principle at work is that search engines typically give more weight to terms "
            "appearing earlier in a domain name when determining relevance. At the Physical "
            "Function level, restructuring your domain to place primary keywords at the beginning "
            "would improve keyword prominence scores and potentially boost rankings for those "
            "terms. Consider reorganizing your domain structure to prioritize your most "
            "strategically valuable keyword at the beginning, followed by any secondary terms or "
            "brand identifiers."
        ),
        'strong_domain': (
            "This is a strong domain name. Focus on building quality content and backlinks.",
            "Your domain excels at its core Functional Purpose of establishing a strong online "
            "foundation, scoring well across key evaluation metrics. From an Abstract Function "
            "perspective, your domain successfully balances the competing priorities of "
            "memorability, brandability, and search relevance – the trifecta of domain name "
            "excellence. At the Generalized Function level, this strong domain will support "
            "multiple business objectives including direct navigation, brand recall, and search "
            "discovery. To maximize this solid foundation, focus now on reinforcing your domain "
            "strength with complementary strategies: develop high-quality content that deeply "
            "covers your topic area, build relevant backlinks from authoritative sites in your "
            "industry, and ensure technical SEO fundamentals are properly implemented across your "
            "site architecture."
        ),
    }

    STRENGTHS = {
        'good_length': (
            "Good domain length",
            "Your domain has an optimal length for SEO and usability. Domains between 6-14 "
            "characters are ideal as they are easier to remember and type while still allowing "
            "room for keywords."
        ),
        'has_keywords': (
            "Contains relevant keywords",
            "Your domain includes industry-relevant keywords that can improve search visibility. "
            "Search engines may give slight preference to domains that contain keywords related "
            "to your business or industry, especially if those keywords match common search "
            "queries."
        ),
        'memorable': (
            "Highly memorable",
            "Your domain name scores high on memorability factors such as length, "
            "pronounceability, and minimal use of hyphens or numbers. Memorable domains lead to "
            "more direct traffic as users can easily recall your URL."
        ),
        'brandable': (
            "Strong branding potential",
            "Your domain has excellent branding characteristics including uniqueness and "
            "distinctiveness. A strong brand domain helps establish a unique identity and can "
            "become a valuable business asset over time."
        ),
        'keyword_placement': (
            "Optimal keyword placement",
            "Your domain has keywords positioned optimally for search engine algorithms. Keywords "
            "at the beginning of a domain name can have a slightly stronger SEO impact than those "
            "positioned later."
        ),
        'uses_com': (
            "Uses .com extension",
            ".com domains typically enjoy higher user trust and click-through rates as they are "
            "the most familiar to users. This TLD is generally preferred by search engines and "
            "users alike, potentially leading to improved SEO performance."
        ),
    }

    WEAKNESSES = {
        'very_short': (
            "Very short domain name",
            "While short domains are easy to type, extremely short domain names may limit keyword "
            "inclusion opportunities. This could make it harder for your site to rank for "
            "relevant industry terms through the domain name alone."
        ),
        'lengthy': (
            "Lengthy domain name",
            "Longer domain names can be harder for users to remember and type correctly, "
            "potentially leading to reduced direct traffic. They can also be more prone to typos "
            "which might direct users to competitor sites."
        ),
        'lacks_keywords': (
            "Lacks relevant keywords",
            "Your domain doesn't contain industry-specific keywords that could help with search "
            "rankings. While modern SEO doesn't heavily weight keywords in domains, their presence "
            "can still provide a small advantage, especially for newer websites."
        ),
        'low_memorability': (
            "Low memorability",
            "Your domain may be difficult for users to remember due to factors such as unusual "
            "spelling, length, or the use of numbers and hyphens. This could reduce return visits and word-of-mouth marketing "
            "effectiveness."
        ),
        'limited_branding': (
            "Limited branding potential",
            "Your domain may have limited distinctive branding potential, which could impact "
            "recognition and differentiation from competitors. Strong brands typically have "
            "unique, distinctive names that stand out in their industry."
        ),
        'suboptimal_placement': (
            "Suboptimal keyword placement",
            "The keywords in your domain are positioned less optimally for search engine "
            "algorithms. Keywords that appear at the beginning of a domain name may have slightly "
            "more SEO impact than those positioned later."
        ),
        'hyphens': (
            "Contains hyphens",
            "Hyphens in domain names can reduce memorability and are sometimes associated with "
            "lower-quality websites. Users may forget to include the hyphens when typing your URL, "
            "potentially leading them to competitor sites."
        ),
        'numbers': (
            "Contains numbers",
            "Numbers in domain names can make them harder to remember and communicate verbally. "
            "Users may be unsure whether to spell out the number or use the numeral, and might "
            "confuse your domain with similar variations."
        ),
    }

    STRONG_DOMAIN_THRESHOLD = 8.5

    def __init__(self, keywords=SEO_KEYWORDS):
        self.keywords = tuple(keywords)

    def _fixed(self, table: Dict[str, tuple], code: str) -> Insight:
        message, detail = table[code]
        return Insight(code=code, message=message, detail=detail)

    def recommendations(self, metrics: SEOMetrics, name: str, extension: str) -> List[Insight]:
        # Length rules compare the length *score*, not the character count
        found = []

        if metrics.length < 7:
            found.append(self._fixed(self.RECOMMENDATIONS, 'longer_name'))

        if metrics.length > 9:
            found.append(self._fixed(self.RECOMMENDATIONS, 'shorter_name'))

        if not metrics.has_keywords:
            examples = "', '".join(self.keywords[:3])
            found.append(Insight(
                code='add_keywords',
                message="Including relevant keywords in your domain can improve SEO performance.",
                detail=(
                    "From a Functional Purpose perspective, your domain should serve as both a "
                    "brand identifier and a relevance signal to search engines. Currently, it "
                    "lacks specific industry keywords that would help establish topical authority. "
                    "The Abstract Function principle at work is that strategic keyword inclusion "
                    "can provide contextual clues to both users and search algorithms about your "
                    "website's focus area. At the Physical Function level, incorporating 1-2 "
                    "relevant keywords from your industry would create stronger semantic "
                    "connections between user search queries and your domain. Consider adding "
                    f"terms like '{examples}' if they align with your business focus."
                )
            ))

        if metrics.memorability < 7:
            found.append(self._fixed(self.RECOMMENDATIONS, 'improve_memorability'))

        if metrics.brandability < 7:
            found.append(self._fixed(self.RECOMMENDATIONS, 'improve_brandability'))

        if metrics.keyword_placement < 5 and metrics.has_keywords:
            found.append(self._fixed(self.RECOMMENDATIONS, 'move_keywords_forward'))

        if metrics.domain_extension < 8 and extension != 'com':
            found.append(Insight(
                code='prefer_com',
                message=".com domains generally perform better for SEO and user trust.",
                detail=(
                    "At the Functional Purpose level, your domain extension should maximize user "
                    "trust and accessibility across all contexts. While alternative TLDs can work, "
                    f"the .{extension} extension currently used lacks the universal recognition of "
                    ".com. The Abstract Function principle is that familiar patterns reduce "
                    "cognitive friction and build inherent trust, with .com being the most "
                    "recognized pattern globally. From a Physical Form perspective, users "
                    "encountering unfamiliar TLDs may experience hesitation or question legitimacy. "
                    "Consider securing the .com version of your domain name, even if it requires "
                    "slight modification to your preferred name, as the trust benefits typically "
                    "outweigh the costs of a less exact domain match."
                )
            ))

        if metrics.overall_score >= self.STRONG_DOMAIN_THRESHOLD:
            found.append(self._fixed(self.RECOMMENDATIONS, 'strong_domain'))

        return found

    def strengths(self, metrics: SEOMetrics, name: str, extension: str) -> List[Insight]:
        found = []

        if metrics.length >= 7:
            found.append(self._fixed(self.STRENGTHS, 'good_length'))

        if metrics.has_keywords:
            found.append(self._fixed(self.STRENGTHS, 'has_keywords'))

        if metrics.memorability >= 8:
            found.append(self._fixed(self.STRENGTHS, 'memorable'))

        if metrics.brandability >= 8:
            found.append(self._fixed(self.STRENGTHS, 'brandable'))

        if metrics.keyword_placement >= 8:
            found.append(self._fixed(self.STRENGTHS, 'keyword_placement'))

        if metrics.domain_extension >= 9:
            found.append(Insight(
                code='premium_tld',
                message="Premium TLD",
                detail=(
                    "Your domain uses a premium Top-Level Domain (TLD) extension which typically "
                    "enjoys higher user trust and better SEO performance. The "
                    f"{extension} TLD is widely recognized and respected across the internet."
                )
            ))
        elif metrics.domain_extension >= 7:
            found.append(Insight(
                code='solid_tld',
                message="Solid domain extension",
                detail=(
                    f"The {extension} TLD provides good SEO potential and user recognition. "
                    "While not as universally recognized as .com, this extension still performs "
                    "well in search rankings and user trust."
                )
            ))

        if extension == 'com':
            found.append(self._fixed(self.STRENGTHS, 'uses_com'))

        return found

    def weaknesses(self, metrics: SEOMetrics, name: str, extension: str) -> List[Insight]:
        found = []

        if metrics.length < 5:
            found.append(self._fixed(self.WEAKNESSES, 'very_short'))
        elif metrics.length > 12:
            found.append(self._fixed(self.WEAKNESSES, 'lengthy'))

        if not metrics.has_keywords:
            found.append(self._fixed(self.WEAKNESSES, 'lacks_keywords'))

        if metrics.memorability < 6:
            found.append(self._fixed(self.WEAKNESSES, 'low_memorability'))

        if metrics.brandability < 6:
            found.append(self._fixed(self.WEAKNESSES, 'limited_branding'))

        if metrics.keyword_placement < 5 and metrics.has_keywords:
            found.append(self._fixed(self.WEAKNESSES, 'suboptimal_placement'))

        if metrics.domain_extension < 7:
            found.append(Insight(
                code='weak_tld',
                message="Less effective TLD",
                detail=(
                    f"The {extension} TLD may have less SEO impact than premium alternatives like "
                    ".com. Some users may be less familiar with this extension, potentially "
                    "affecting click-through rates and perceived trustworthiness."
                )
            ))

        if '-' in name:
            found.append(self._fixed(self.WEAKNESSES, 'hyphens'))

        if any(c in DIGITS for c in name):
            found.append(self._fixed(self.WEAKNESSES, 'numbers'))

        return found
