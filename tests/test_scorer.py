"""
Tests for the metric calculators and the weighted aggregate.
"""

import pytest

from domainseo.scoring.scorer import SEO_KEYWORDS, SEOScorer, round_half_up


@pytest.fixture
def scorer():
    return SEOScorer()


class TestRoundHalfUp:

    @pytest.mark.parametrize("value,expected", [
        (6.5, 7), (7.5, 8), (7.49, 7), (7.858, 8), (8.93, 9), (0.5, 1),
    ])
    def test_rounds_half_upwards(self, value, expected):
        assert round_half_up(value) == expected


class TestLengthScore:
    """Test the length calculator."""

    @pytest.mark.parametrize("length", range(6, 15))
    def test_ideal_range_scores_ten(self, scorer, length):
        assert scorer.score_length("a" * length) == 10

    @pytest.mark.parametrize("length,expected", [(1, 5), (3, 5), (5, 5)])
    def test_short_names(self, scorer, length, expected):
        assert scorer.score_length("a" * length) == expected

    @pytest.mark.parametrize("length,expected", [(15, 13.5), (20, 11), (26, 8), (40, 1), (60, 1)])
    def test_long_names_decay_to_floor(self, scorer, length, expected):
        assert scorer.score_length("a" * length) == expected


class TestKeywords:

    def test_keyword_list_order(self):
        assert SEO_KEYWORDS[:3] == ('seo', 'search', 'rank')
        assert len(SEO_KEYWORDS) == 30

    def test_substring_match(self, scorer):
        assert scorer.has_keywords("myseo-app") is True

    def test_substring_inside_unrelated_word(self, scorer):
        # "ai" inside "domain"
        assert scorer.has_keywords("averylongdomainnameexample") is True

    def test_no_keyword(self, scorer):
        assert scorer.has_keywords("example") is False


class TestMemorability:
    """Test the memorability calculator."""

    def test_balanced_name_with_hyphen(self, scorer):
        assert scorer.score_memorability("myseo-app") == pytest.approx(11.25)

    def test_vowel_heavy_name(self, scorer):
        assert scorer.score_memorability("example") == pytest.approx(11.54)

    def test_digits_are_penalised(self, scorer):
        assert scorer.score_memorability("site123") == pytest.approx(10.54)

    def test_can_exceed_ten(self, scorer):
        assert scorer.score_memorability("example") > 10

    def test_never_below_one(self, scorer):
        assert scorer.score_memorability("1-2-3-4-5-6-7-8") >= 1


class TestBrandability:
    """Test the brandability calculator."""

    def test_clean_unique_name(self, scorer):
        assert scorer.score_brandability("example") == pytest.approx(10)

    def test_keyword_word_reduces_uniqueness(self, scorer):
        assert scorer.score_brandability("myseo-app") == pytest.approx(9.2)

    def test_digits_reduce_cleanliness(self, scorer):
        assert scorer.score_brandability("site123") == pytest.approx(9.1)

    def test_special_character(self, scorer):
        assert scorer.score_brandability("my_site") == pytest.approx(8.5)

    def test_very_short_name(self, scorer):
        assert scorer.score_brandability("ab") == pytest.approx(9.1)

    def test_long_name(self, scorer):
        assert scorer.score_brandability("averylongdomainnameexample") == pytest.approx(8.5)

    def test_floor(self, scorer):
        name = "seo-app-web-" + "_" * 30 + "1"
        assert scorer.score_brandability(name) >= 1


class TestKeywordPlacement:
    """Test the keyword placement calculator."""

    def test_first_segment(self, scorer):
        assert scorer.score_keyword_placement("seo-tools") == 10

    def test_second_segment(self, scorer):
        assert scorer.score_keyword_placement("myseo-app") == 8

    def test_underscore_separates_segments(self, scorer):
        assert scorer.score_keyword_placement("my_web") == 8

    def test_no_whole_segment_match(self, scorer):
        assert scorer.score_keyword_placement("averylongdomainnameexample") == 3

    def test_late_keyword_reaches_zero(self, scorer):
        assert scorer.score_keyword_placement("a-b-c-d-e-seo") == 0

    def test_later_keyword_goes_negative(self, scorer):
        assert scorer.score_keyword_placement("a-b-c-d-e-f-seo") == -2


class TestExtension:

    @pytest.mark.parametrize("ext,expected", [("com", 10), ("io", 8), ("net", 7), ("ai", 9)])
    def test_known_tlds(self, scorer, ext, expected):
        assert scorer.score_extension(ext) == expected

    def test_unknown_tld(self, scorer):
        assert scorer.score_extension("xyz") == 5


class TestScore:
    """Test full metric computation."""

    def test_example_com(self, scorer):
        m = scorer.score("example.com")
        assert m.length == 10
        assert m.has_keywords is False
        assert m.keyword_placement == 3
        assert m.domain_extension == 10
        assert m.overall_score == 8

    def test_myseo_app_io(self, scorer):
        m = scorer.score("https://www.myseo-app.io/page")
        assert m.has_keywords is True
        assert m.keyword_placement == 8
        assert m.domain_extension == 8
        assert m.overall_score == 9

    def test_short_and_long(self, scorer):
        assert scorer.score("short.com").overall_score == 7
        assert scorer.score("averylongdomainnameexample.net").overall_score == 8

    def test_is_deterministic(self, scorer):
        assert scorer.score("site123.net") == scorer.score("site123.net")

    def test_aggregate_matches_formula(self, scorer):
        m = scorer.score("site123.net")
        raw = (m.length * 0.15 + 3 * 0.2 + m.memorability * 0.2 + m.brandability * 0.15
               + m.keyword_placement * 0.15 + m.domain_extension * 0.15)
        assert m.overall_score == round_half_up(raw)

    def test_custom_weights(self):
        weights = dict(SEOScorer.DEFAULT_WEIGHTS, extension=0.0)
        assert SEOScorer(weights=weights).score("example.com").overall_score == 6

    def test_to_dict_uses_camel_case(self, scorer):
        data = scorer.score("example.com").to_dict()
        assert data['hasKeywords'] is False
        assert data['memorability'] == 11.54
        assert data['overallScore'] == 8
        assert set(data) == {'length', 'hasKeywords', 'memorability', 'brandability',
                             'keywordPlacement', 'domainExtension', 'overallScore'}
