"""Domain SEO scoring - metric calculators and weighted aggregate."""

import math
import re
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Union

from .normalizer import NormalizedDomain, normalize

# Common keywords that tend to help a domain rank (order is significant:
# insight text quotes the first few).
SEO_KEYWORDS = (
    'seo', 'search', 'rank', 'analytics', 'digital', 'web', 'app', 'tech',
    'online', 'cyber', 'data', 'cloud', 'smart', 'ai', 'mobile', 'social',
    'blog', 'content', 'marketing', 'business', 'market', 'shop', 'store',
    'learn', 'edu', 'pro', 'expert', 'help', 'solutions', 'service'
)

_SEGMENT_RE = re.compile(r'[-_.]')
_SPECIAL_RE = re.compile(r'[^a-z0-9-]')
_VOWELS = set('aeiou')
DIGITS = set('0123456789')


def round_half_up(value: float) -> int:
    """Round .5 upwards (Python's round() would go to the even neighbour)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class SEOMetrics:
    """Per-domain metric breakdown.

    Component scores are nominally 1-10 but are not clamped: memorability
    can exceed 10 and keyword placement can drop to zero or below for
    keywords found late in the name.
    """
    length: float
    has_keywords: bool
    memorability: float
    brandability: float
    keyword_placement: float
    domain_extension: float
    overall_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'length': self.length,
            'hasKeywords': self.has_keywords,
            'memorability': round(self.memorability, 2),
            'brandability': round(self.brandability, 2),
            'keywordPlacement': self.keyword_placement,
            'domainExtension': self.domain_extension,
            'overallScore': self.overall_score
        }

    def as_row(self) -> Dict[str, Any]:
        """Snake-case field mapping, used for storage."""
        return asdict(self)


class SEOScorer:
    """Scores a domain name on length, keywords, memorability and branding."""

    DEFAULT_WEIGHTS = {
        'length': 0.15,
        'keywords': 0.20,
        'memorability': 0.20,
        'brandability': 0.15,
        'keyword_placement': 0.15,
        'extension': 0.15
    }

    DEFAULT_TLD_SCORES = {
        'com': 10,
        'org': 8,
        'net': 7,
        'io': 8,
        'co': 7,
        'app': 9,
        'ai': 9,
        'dev': 8,
        'tech': 8,
        'digital': 7,
        'agency': 7,
        'store': 7,
        'shop': 7
    }

    UNKNOWN_TLD_SCORE = 5

    # Stand-in values for the keyword term in the aggregate
    KEYWORD_PRESENT_SCORE = 7
    KEYWORD_ABSENT_SCORE = 3

    NO_KEYWORD_PLACEMENT_SCORE = 3

    def __init__(
        self,
        weights: Optional[Dict[str, float]] = None,
        tld_scores: Optional[Dict[str, float]] = None,
        keywords=SEO_KEYWORDS
    ):
        self.weights = weights or self.DEFAULT_WEIGHTS
        self.tld_scores = tld_scores or self.DEFAULT_TLD_SCORES
        self.keywords = tuple(keywords)
        self._keyword_set = frozenset(self.keywords)

    def score_length(self, name: str) -> float:
        """Names of 6-14 characters are ideal; longer ones decay by 0.5/char."""
        length = len(name)

        if 6 <= length <= 14:
            return 10
        elif length < 6:
            return max(5, length)
        else:
            return max(1, 14 - (length - 14) * 0.5)

    def has_keywords(self, name: str) -> bool:
        """True if any SEO keyword appears in the name."""
        hyphen_parts = name.split('-')
        dot_parts = name.split('.')
        return any(
            keyword in name or keyword in hyphen_parts or keyword in dot_parts
            for keyword in self.keywords
        )

    def score_memorability(self, name: str) -> float:
        """Score memorability from hyphens, digits and vowel/consonant balance."""
        hyphens = name.count('-')
        digits = sum(1 for c in name if c in DIGITS)
        vowels = sum(1 for c in name if c in _VOWELS)
        consonants = len(name) - vowels - hyphens - digits

        # Pronounceable names sit around 0.4-0.6 vowels per consonant
        vc_ratio = vowels / (consonants or 1)
        if 0.4 <= vc_ratio <= 0.6:
            vc_ratio_score = 10
        elif vc_ratio > 0.6:
            vc_ratio_score = 8 - min(3, vc_ratio - 0.6) * 2
        else:
            vc_ratio_score = 8 - min(3, 0.4 - vc_ratio) * 2

        hyphen_penalty = min(5, hyphens * 1.5)
        digit_penalty = min(5, digits)

        return max(1, 10 - hyphen_penalty * 0.5 - digit_penalty * 0.3 + vc_ratio_score * 0.2)

    def score_brandability(self, name: str) -> float:
        """Score brandability - uniqueness, length and character cleanliness."""
        has_special_chars = bool(_SPECIAL_RE.search(name))
        has_numbers = any(c in DIGITS for c in name)

        common_word_count = sum(1 for word in name.split('-') if word in self._keyword_set)
        uniqueness_score = 10 - min(5, common_word_count * 2)

        length = len(name)
        if 3 < length < 12:
            length_score = 10
        elif length <= 3:
            length_score = 7
        else:
            length_score = 10 - min(5, (length - 12) * 0.5)

        # Can go negative; only the combined score is floored
        cleanliness_score = 10 - (3 if has_numbers else 0) - (5 if has_special_chars else 0)

        return max(1, uniqueness_score * 0.4 + length_score * 0.3 + cleanliness_score * 0.3)

    def score_keyword_placement(self, name: str) -> float:
        """Keywords earlier in the name score higher: 10, 8, 6, ... (unclamped)."""
        for index, segment in enumerate(_SEGMENT_RE.split(name)):
            if segment in self._keyword_set:
                return 10 - index * 2
        return self.NO_KEYWORD_PLACEMENT_SCORE

    def score_extension(self, extension: str) -> float:
        return self.tld_scores.get(extension, self.UNKNOWN_TLD_SCORE)

    def aggregate(
        self,
        length: float,
        has_keywords: bool,
        memorability: float,
        brandability: float,
        keyword_placement: float,
        extension: float
    ) -> int:
        """Weighted overall score rounded to an integer (not clamped)."""
        keyword_score = self.KEYWORD_PRESENT_SCORE if has_keywords else self.KEYWORD_ABSENT_SCORE
        raw_score = (
            length * self.weights['length'] +
            keyword_score * self.weights['keywords'] +
            memorability * self.weights['memorability'] +
            brandability * self.weights['brandability'] +
            keyword_placement * self.weights['keyword_placement'] +
            extension * self.weights['extension']
        )
        return round_half_up(raw_score)

    def score(self, domain: Union[str, NormalizedDomain]) -> SEOMetrics:
        """Calculate all metrics for a domain (raw strings are normalized first)."""
        if not isinstance(domain, NormalizedDomain):
            domain = normalize(domain)
        name, extension = domain.name, domain.extension

        length = self.score_length(name)
        has_keywords = self.has_keywords(name)
        memorability = self.score_memorability(name)
        brandability = self.score_brandability(name)
        keyword_placement = self.score_keyword_placement(name)
        extension_score = self.score_extension(extension)

        return SEOMetrics(
            length=length,
            has_keywords=has_keywords,
            memorability=memorability,
            brandability=brandability,
            keyword_placement=keyword_placement,
            domain_extension=extension_score,
            overall_score=self.aggregate(
                length, has_keywords, memorability, brandability,
                keyword_placement, extension_score
            )
        )
