from services.keyword_matcher import (
    clean_token,
    contains_whole_word,
    extract_keywords,
    match_keywords,
    round_half_up,
)


class TestWholeWord:
    def test_java_not_inside_javascript(self):
        assert not contains_whole_word("javascript developer", "java")

    def test_symbol_forms(self):
        assert contains_whole_word("uses c++ daily", "c++")
        assert contains_whole_word("worked with ci/cd", "ci/cd")
        assert contains_whole_word("built on .net core", ".net")

    def test_case_insensitive(self):
        assert contains_whole_word("Deployed on AWS", "aws")

    def test_empty_form(self):
        assert not contains_whole_word("anything", "")

    def test_cache_does_not_change_result(self):
        first = contains_whole_word("go and rust", "rust")
        second = contains_whole_word("go and rust", "rust")
        assert first is second is True


class TestCleanToken:
    def test_strips_surrounding_noise_and_trailing_period(self):
        assert clean_token("(Python),") == "Python"
        assert clean_token("Node.js,") == "Node.js"
        assert clean_token("Kubernetes.") == "Kubernetes"

    def test_keeps_symbols(self):
        assert clean_token("C++") == "C++"
        assert clean_token("C#:") == "C#"


class TestExtractKeywords:
    def test_multi_word_alias_consumes_its_tokens(self, catalog):
        keywords = extract_keywords("Experience with Amazon Web Services required", catalog)
        assert "Amazon Web Services" in keywords
        assert list(keywords).count("Amazon Web Services") == 1

    def test_stop_words_ignored(self, catalog):
        assert extract_keywords("the and with experience required", catalog) == {}

    def test_display_prefers_short_registered_casing(self, catalog):
        keywords = extract_keywords("Must know aws", catalog)
        assert keywords["Amazon Web Services"] == "AWS"


class TestMatchKeywords:
    def test_synonyms_are_matched(self, catalog):
        result = match_keywords(
            "Experienced with AWS, React.js, and Node.",
            "Need Amazon Web Services, ReactJS, and Kubernetes.",
            catalog,
        )
        assert result.matched == ["Amazon Web Services", "React"]
        assert result.missing == ["Kubernetes"]
        assert result.match_percentage == 66.7

    def test_sub_word_is_not_a_match(self, catalog):
        result = match_keywords("JavaScript and TypeScript", "Java expertise required", catalog)
        assert "Java" in result.missing
        assert "Java" not in result.matched

    def test_javascript_matched_java_missing(self, catalog):
        result = match_keywords("JavaScript and TypeScript", "Java and JavaScript", catalog)
        assert "JavaScript" in result.matched
        assert "Java" in result.missing

    def test_empty_job_description(self, catalog):
        result = match_keywords("Python developer", "", catalog)
        assert result.matched == []
        assert result.missing == []
        assert result.match_percentage == 0.0

    def test_deterministic(self, catalog, sample_resume, sample_jd):
        first = match_keywords(sample_resume, sample_jd, catalog)
        second = match_keywords(sample_resume, sample_jd, catalog)
        assert first == second


def test_round_half_up():
    assert round_half_up(66.66666) == 66.7
    assert round_half_up(0.05) == 0.1
    assert round_half_up(2.5, 0) == 3.0
