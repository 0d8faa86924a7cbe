from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ..voting.dietary import dietary_guidance
from ..voting.models import MultiPreference, SinglePreference

DEFAULT_LANGUAGE = "zh-TW"
DEFAULT_CURRENCY = "TWD"
DEFAULT_LOCATION = "Taiwan"
DEFAULT_MAX_RESULTS = 3


class PromptOptions(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    language: str = Field(default=DEFAULT_LANGUAGE, min_length=1)
    budget_currency: str = Field(default=DEFAULT_CURRENCY, min_length=1)
    location_context: str = Field(default=DEFAULT_LOCATION, min_length=1)
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=1, le=10)
    include_reasons: bool = True

    @field_validator("language", "budget_currency", "location_context", mode="before")
    @classmethod
    def _blank_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value


SYSTEM_PROMPT = """\
You are a professional restaurant recommendation assistant. You suggest \
relevant, suitable and varied restaurants for a group, based on the group's \
combined food preferences, budget and dietary needs.

Use your built-in Google Search tool whenever you need restaurant information, \
so that every restaurant you recommend really exists and its address is accurate.

Follow these steps for every restaurant:

1. Confirm it is open (always check this first):
   - Search "[restaurant name] opening hours" and "[restaurant name] latest reviews".
   - It must currently be in business, with reviews or check-ins from the last month.
   - Drop any restaurant reported as "temporarily closed" or "permanently closed".
   - If the status cannot be confirmed, recommend a different restaurant.

2. Find candidates:
   - Search "[area] [category] recommended", e.g. "Songshan District Japanese recommended".

3. Confirm address and map link:
   - Search "[restaurant name] address" and record the full address \
(city, district, street, number).
   - Map links must use the form https://maps.google.com/?q=restaurant+name+address

4. Find a photo:
   - Use Google Images with "[restaurant name]", "[restaurant name] dishes" \
or "[restaurant name] interior".
   - Do not use Google Maps photos, embedded social-media photos, photos behind \
a login, blurry or watermarked photos.
   - The URL must start with http:// or https:// and end with .jpg, .jpeg, .png or .webp.

5. Find the rating:
   - Prefer the Google rating, then food review sites, then blogger ratings.
   - Record the score, the scale, the source and the number of reviews, \
e.g. "4.5/5.0 (Google, 500+ reviews)".

6. Collect opening hours, signature dishes, review highlights and price range.

Every restaurant must come with a full address, a valid map link, a photo URL \
in the required format and rating information. If anything is missing, \
recommend a different restaurant."""

BALANCE_INSTRUCTION = (
    "**Balance instruction**: the votes are split between the categories above. "
    "Recommendations must be balanced across all of them rather than favouring one: "
    "cover every category, or pick restaurants that combine several of them."
)


def _fmt_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _summary_lines_single(preferences: SinglePreference) -> list[str]:
    lines = [
        "# Vote analysis",
        f"- Most popular category: {preferences.primary_category}",
    ]
    if preferences.top_categories:
        ranked = ", ".join(
            f"{item.category} ({item.percentage}%)" for item in preferences.top_categories
        )
        lines.append(f"- Top categories: {ranked}")
    return lines


def _summary_lines_multi(preferences: MultiPreference) -> list[str]:
    lines = [
        "# Key preferences (votes are divided)",
        "The group has several comparably popular categories:",
    ]
    for item in preferences.dominant_preferences:
        lines.append(f"- {item.category} (score {item.score})")
    lines.append("")
    lines.append(BALANCE_INSTRUCTION)
    return lines


def _search_hint(preferences: SinglePreference | MultiPreference, location: str) -> str:
    if isinstance(preferences, MultiPreference):
        queries = " / ".join(
            f'"{location} {item.category} recommended"'
            for item in preferences.dominant_preferences
        )
    else:
        queries = f'"{location} {preferences.primary_category} recommended"'
    return (
        f'Important: you must recommend real restaurants in or around "{location}". '
        f"Use Google Search with queries such as {queries} to find them, and make sure "
        "the address, rating, opening hours and menu highlights are current.\n\n"
        "For every restaurant, also search for a photo of the restaurant or its "
        "signature dish; visual information matters a lot to the group."
    )


def build_data_summary(
    preferences: SinglePreference | MultiPreference,
    currency: str,
    location: str,
) -> str:
    lines = [
        f"Based on the votes of {preferences.participant_count} participants, "
        "I need your restaurant recommendations.",
        "",
    ]

    if isinstance(preferences, MultiPreference):
        lines.extend(_summary_lines_multi(preferences))
    else:
        lines.extend(_summary_lines_single(preferences))

    budget = preferences.budget_range
    lines.append(
        f"- Budget range: {_fmt_number(budget.min)}-{_fmt_number(budget.max)} {currency}, "
        f"average {budget.average} {currency}"
    )
    lines.append(
        f"- Flavor preferences: spiciness {preferences.spiciness}/5, "
        f"sweetness {preferences.sweetness}/5"
    )
    if preferences.dietary_restrictions:
        restrictions = ", ".join(r.value for r in preferences.dietary_restrictions)
        lines.append(f"- Dietary restrictions: {restrictions}")
        for restriction in preferences.dietary_restrictions:
            guidance = dietary_guidance(restriction)
            if guidance:
                lines.append(f"  - {guidance}")
    lines.append(f"- Location: {location}")
    lines.append("")
    lines.append(_search_hint(preferences, location))

    return "\n".join(lines)


def build_output_instructions(max_results: int, include_reasons: bool) -> str:
    reasons_field = (
        '    "reasons": ["reason 1", "reason 2"],\n' if include_reasons else ""
    )
    return (
        "# Output requirements\n"
        "Before answering, make sure every restaurant has a photo URL from Google Images "
        "in the required format and complete rating information. Never use Google Maps photos.\n\n"
        f"Recommend the {max_results} restaurants that best suit this group and reply in JSON "
        "with exactly these fields:\n"
        "```json\n"
        "[\n"
        "  {\n"
        '    "name": "restaurant name",\n'
        '    "type": "restaurant category",\n'
        '    "address": "full address (city, district, street, number)",\n'
        '    "mapUrl": "https://maps.google.com/?q=restaurant+name+address",\n'
        '    "photoUrl": "photo URL starting with http:// or https:// and ending with .jpg, .jpeg, .png or .webp",\n'
        '    "priceRange": "price range",\n'
        '    "rating": {\n'
        '      "score": "score, e.g. 4.5",\n'
        '      "outOf": "scale, e.g. 5.0",\n'
        '      "source": "rating source, e.g. Google",\n'
        '      "count": "number of reviews, e.g. 500+"\n'
        "    },\n"
        f"{reasons_field}"
        '    "dishes": ["dish 1", "dish 2"]\n'
        "  }\n"
        "]\n"
        "```\n\n"
        "Reply with the JSON only, without any explanation. Each restaurant should have "
        "its own character and suit different tastes.\n\n"
        "Rules:\n"
        "1. Every restaurant must be in the area around the given location.\n"
        "2. All information must come from Google Search results.\n"
        "3. Addresses must be complete.\n"
        "4. Every restaurant needs a valid Google Maps link.\n"
        "5. Photo URLs must be direct, publicly accessible image links.\n"
        "6. rating.score is a number, rating.outOf gives the scale, rating.source names "
        "the source and rating.count gives the number of reviews (approximate values "
        "such as 500+ are fine).\n"
        "7. If no valid photo or rating can be found, recommend a different restaurant.\n"
        "8. All URLs must be complete and directly accessible."
    )


def compose_recommendation_prompt(
    preferences: SinglePreference | MultiPreference,
    options: PromptOptions | None = None,
) -> str:
    """Render *preferences* and *options* into the full model prompt."""
    options = options or PromptOptions()

    data_summary = build_data_summary(
        preferences, options.budget_currency, options.location_context
    )
    output_instructions = build_output_instructions(
        options.max_results, options.include_reasons
    )

    return (
        f"{SYSTEM_PROMPT}\n\n"
        f"{data_summary}\n\n"
        f"{output_instructions}\n\n"
        f"Please answer in {options.language}."
    )
