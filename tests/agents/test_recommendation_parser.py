"""
Tests for the Gemini response parser and the prompt builder.

The parser is the only boundary between untrusted model text and typed
recommendation data, so these tests cover:
- Code-fence stripping
- Rejection of every non-array top-level value
- Lenient per-field handling (missing, null, numeric, boolean, extra fields)
- Raw text preserved on every ParseError
"""

import json

import pytest

from movie_recommender.agents.recommendation import (
    RECOMMENDATION_COUNT,
    RECOMMENDATION_FIELDS,
    build_recommendation_prompt,
    parse_recommendations,
    strip_code_fences,
)
from movie_recommender.exceptions import ParseError
from movie_recommender.schemas.recommendations import RecommendationItem


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def movies_json():
    return json.dumps([
        {
            "title": "Interstellar",
            "year": "2014",
            "director": "Christopher Nolan",
            "genre": "Sci-Fi",
            "reason": "time-related themes",
        },
        {
            "title": "Primer",
            "year": "2004",
            "director": "Shane Carruth",
            "genre": "Sci-Fi",
            "reason": "A low-budget, rigorous take on time travel",
        },
    ])


# =============================================================================
# UNIT TESTS: Fence Stripping
# =============================================================================

class TestStripCodeFences:
    """Tests for strip_code_fences function."""

    def test_json_fence_removed(self):
        assert strip_code_fences('```json\n[1]\n```') == "[1]"

    def test_plain_fence_removed(self):
        assert strip_code_fences('```\n[]\n```') == "[]"

    def test_uppercase_language_tag_removed(self):
        assert strip_code_fences('```JSON\n[]\n```') == "[]"

    def test_surrounding_whitespace_trimmed(self):
        assert strip_code_fences('  \n [] \n\t') == "[]"

    def test_prose_is_kept(self):
        """Only markers are removed; surrounding prose stays and fails decoding later."""
        assert strip_code_fences('Here you go:\n```json\n[]\n```') == "Here you go:\n\n[]"


# =============================================================================
# UNIT TESTS: Parsing
# =============================================================================

class TestParseRecommendations:
    """Tests for parse_recommendations function."""

    def test_plain_array(self, movies_json):
        items = parse_recommendations(movies_json)

        assert len(items) == 2
        assert all(isinstance(item, RecommendationItem) for item in items)
        assert items[0].title == "Interstellar"
        assert items[1].director == "Shane Carruth"

    def test_order_preserved(self, movies_json):
        items = parse_recommendations(movies_json)
        assert [item.title for item in items] == ["Interstellar", "Primer"]

    @pytest.mark.parametrize("wrapper", [
        "```json\n{}\n```",
        "```\n{}\n```",
        "```json{}```",
        "\n\n```json\n{}\n```\n\n",
    ])
    def test_fenced_equals_unfenced(self, movies_json, wrapper):
        """Stripping fences never changes what is parsed."""
        fenced = wrapper.replace("{}", movies_json)
        assert parse_recommendations(fenced) == parse_recommendations(movies_json)

    def test_interstellar_scenario(self):
        raw = (
            '```json\n[{"title":"Interstellar","year":"2014","director":"Christopher Nolan",'
            '"genre":"Sci-Fi","reason":"time-related themes"}]\n```'
        )
        items = parse_recommendations(raw)

        assert len(items) == 1
        assert items[0].model_dump() == {
            "title": "Interstellar",
            "year": "2014",
            "director": "Christopher Nolan",
            "genre": "Sci-Fi",
            "reason": "time-related themes",
        }

    def test_empty_array(self):
        assert parse_recommendations("[]") == []

    def test_missing_fields_become_empty(self):
        items = parse_recommendations('[{"title": "Heat"}]')

        assert items[0].title == "Heat"
        assert items[0].year == ""
        assert items[0].director == ""
        assert items[0].genre == ""
        assert items[0].reason == ""

    def test_null_field_becomes_empty(self):
        items = parse_recommendations('[{"title": "Heat", "year": null}]')
        assert items[0].year == ""

    def test_numeric_year_coerced_to_text(self):
        items = parse_recommendations('[{"title": "Heat", "year": 1995}]')
        assert items[0].year == "1995"

    def test_boolean_field_coerced_to_text(self):
        items = parse_recommendations('[{"title": "Heat", "year": "1995", "genre": true}]')

        assert items[0].title == "Heat"
        assert items[0].genre == "true"

    def test_extra_fields_ignored(self):
        items = parse_recommendations('[{"title": "Heat", "rating": 8.3, "cast": ["Al Pacino"]}]')

        assert items[0].title == "Heat"
        assert "rating" not in items[0].model_dump()

    @pytest.mark.parametrize("raw,kind", [
        ('{"title": "Interstellar"}', "object"),
        ("42", "number"),
        ("3.14", "number"),
        ('"Interstellar"', "string"),
        ("null", "null"),
        ("true", "boolean"),
        ('```json\n{"movies": []}\n```', "object"),
    ])
    def test_non_array_top_level_rejected(self, raw, kind):
        with pytest.raises(ParseError) as exc_info:
            parse_recommendations(raw)

        assert kind in exc_info.value.message
        assert exc_info.value.raw_response == raw

    def test_prose_rejected_with_raw_text(self):
        raw = "Sorry, I can't help with that."

        with pytest.raises(ParseError) as exc_info:
            parse_recommendations(raw)

        assert exc_info.value.raw_response == raw

    def test_prose_around_json_rejected(self, movies_json):
        """No attempt is made to dig JSON out of surrounding text."""
        raw = f"Here are some movies:\n```json\n{movies_json}\n```\nEnjoy!"

        with pytest.raises(ParseError):
            parse_recommendations(raw)

    def test_truncated_json_rejected(self, movies_json):
        raw = movies_json[: len(movies_json) // 2]

        with pytest.raises(ParseError) as exc_info:
            parse_recommendations(raw)

        assert exc_info.value.raw_response == raw

    def test_empty_text_rejected(self):
        with pytest.raises(ParseError):
            parse_recommendations("   ")

    def test_non_object_element_rejects_whole_response(self, movies_json):
        """One bad element fails the whole answer; no partial result."""
        decoded = json.loads(movies_json) + ["Inception"]
        raw = json.dumps(decoded)

        with pytest.raises(ParseError) as exc_info:
            parse_recommendations(raw)

        assert "2" in exc_info.value.message

    def test_nested_field_value_rejected(self):
        raw = '[{"title": {"en": "Heat"}, "year": "1995"}]'

        with pytest.raises(ParseError):
            parse_recommendations(raw)


# =============================================================================
# UNIT TESTS: Prompt Building
# =============================================================================

class TestPromptBuilding:
    """Tests for build_recommendation_prompt function."""

    def test_prompt_includes_query(self):
        prompt = build_recommendation_prompt("sci-fi with time travel")
        assert '"sci-fi with time travel"' in prompt

    def test_prompt_trims_query(self):
        assert build_recommendation_prompt("  heist movies \n") == build_recommendation_prompt("heist movies")

    def test_prompt_is_deterministic(self):
        assert build_recommendation_prompt("noir") == build_recommendation_prompt("noir")

    def test_prompt_requests_five_movies(self):
        assert RECOMMENDATION_COUNT == 5
        assert "recommend 5 movies" in build_recommendation_prompt("noir")

    def test_prompt_names_every_field(self):
        prompt = build_recommendation_prompt("noir")

        for field in RECOMMENDATION_FIELDS:
            assert field in prompt
        assert "title, year, director, genre, and reason" in prompt

    def test_prompt_requires_json_array(self):
        assert "JSON array" in build_recommendation_prompt("noir")

    def test_query_with_braces(self):
        """Braces in user text must not break template formatting."""
        prompt = build_recommendation_prompt("movies like {Inception}")
        assert "{Inception}" in prompt

    def test_query_with_emojis(self):
        prompt = build_recommendation_prompt("🎬 feel-good 🍿")
        assert "🎬 feel-good 🍿" in prompt
