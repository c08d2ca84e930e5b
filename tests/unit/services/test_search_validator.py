import pytest

from src.services.search_validator import SearchValidator, MAX_QUERY_LENGTH


@pytest.fixture
def validator():
    return SearchValidator()


class TestValidateSearchQuery:
    @pytest.mark.parametrize(
        "query", ["hello world", "What's new?", "C# tips, tricks!", "x-ray 2024."]
    )
    def test_valid_queries(self, validator, query):
        assert validator.validate_search_query(query).is_valid

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_empty(self, validator, query):
        result = validator.validate_search_query(query)
        assert not result.is_valid
        assert result.error_message == "Search query cannot be empty."

    def test_too_long(self, validator):
        result = validator.validate_search_query("a" * (MAX_QUERY_LENGTH + 1))
        assert not result.is_valid
        assert "too long" in result.error_message

    def test_max_length_is_allowed(self, validator):
        assert validator.validate_search_query("a" * MAX_QUERY_LENGTH).is_valid

    @pytest.mark.parametrize(
        "query",
        [
            "SELECT name",
            "drop table users",
            "hello -- comment",
            "a; b",
            "x' or 'y",
            "1 or 1=1",
            "union all",
        ],
    )
    def test_sql_injection(self, validator, query):
        result = validator.validate_search_query(query)
        assert not result.is_valid
        assert result.error_message == "Invalid characters detected in search query."

    @pytest.mark.parametrize(
        "query",
        ["<script>alert(1)</script>", "javascript:void", "img onerror", "eval (x)"],
    )
    def test_xss(self, validator, query):
        result = validator.validate_search_query(query)
        assert not result.is_valid
        assert result.error_message == "Invalid characters detected in search query."

    @pytest.mark.parametrize("query", ["50% off", "a&b", "café", "path/to"])
    def test_disallowed_characters(self, validator, query):
        result = validator.validate_search_query(query)
        assert not result.is_valid
        assert "invalid characters" in result.error_message


class TestValidateSearchEngines:
    def test_valid_case_insensitive(self, validator):
        assert validator.validate_search_engines(["Google", "BING", "yahoo"]).is_valid

    def test_resolves_through_registry(self, validator):
        assert validator.validate_search_engines([" Google ", "yandex"]).is_valid

    @pytest.mark.parametrize("engines", [None, []])
    def test_none_selected(self, validator, engines):
        result = validator.validate_search_engines(engines)
        assert not result.is_valid
        assert "At least one" in result.error_message

    def test_too_many(self, validator):
        result = validator.validate_search_engines(["google"] * 7)
        assert not result.is_valid
        assert "Maximum 6" in result.error_message

    def test_all_six_allowed(self, validator):
        engines = ["google", "bing", "yahoo", "duckduckgo", "baidu", "yandex"]
        assert validator.validate_search_engines(engines).is_valid

    def test_blank_name(self, validator):
        result = validator.validate_search_engines(["google", "  "])
        assert not result.is_valid
        assert result.error_message == "Search engine name cannot be empty."

    def test_unknown_engine(self, validator):
        result = validator.validate_search_engines(["altavista"])
        assert not result.is_valid
        assert result.error_message.startswith("Invalid search engine: altavista.")
        assert "google" in result.error_message


def test_validate_checks_query_first(validator):
    result = validator.validate("", ["altavista"])
    assert result.error_message == "Search query cannot be empty."

    result = validator.validate("hello", ["altavista"])
    assert "altavista" in result.error_message

    assert validator.validate("hello world", ["google"]).is_valid
