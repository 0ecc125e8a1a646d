"""
Movie Recommendation Prompt Template

Contains the prompt builder for the Recommendation Service.

Output contract requested from the model:
- Exactly RECOMMENDATION_COUNT movies
- Each movie is an object with the RECOMMENDATION_FIELDS keys
- The whole answer is a JSON array of those objects

The template only asks for this shape; actual compliance is enforced by
movie_recommender.agents.recommendation.parser.
"""

RECOMMENDATION_COUNT = 5

RECOMMENDATION_FIELDS = ("title", "year", "director", "genre", "reason")

RECOMMENDATION_PROMPT_TEMPLATE = """Based on the following user preference, recommend {count} movies. For each movie, provide:
- Title
- Year
- Director
- Genre
- A brief reason why it matches their preference

User preference: "{query}"

Format your response as a JSON array with objects containing: {fields} fields."""


def build_recommendation_prompt(query: str) -> str:
    """
    Render the model prompt for a movie preference query.

    Pure and deterministic: the same query always yields the same prompt.
    Surrounding whitespace is trimmed before the query is embedded.

    Args:
        query: The user's free-text movie preference

    Returns:
        str: Prompt ready to be sent to Gemini
    """
    field_names = list(RECOMMENDATION_FIELDS)
    fields = ", ".join(field_names[:-1]) + f", and {field_names[-1]}"

    return RECOMMENDATION_PROMPT_TEMPLATE.format(
        count=RECOMMENDATION_COUNT,
        query=query.strip(),
        fields=fields,
    )
