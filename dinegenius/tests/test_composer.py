from dinegenius.prompts.composer import (
    BALANCE_INSTRUCTION,
    PromptOptions,
    compose_recommendation_prompt,
)
from dinegenius.voting.models import (
    BudgetRange,
    CategoryCount,
    DietaryRestriction,
    DominantPreference,
    MultiPreference,
    SinglePreference,
)

BUDGET = BudgetRange(min=300, max=400, average=350)

SINGLE = SinglePreference(
    participant_count=5,
    primary_category="Japanese",
    top_categories=[
        CategoryCount(category="Japanese", count=3, percentage=60),
        CategoryCount(category="Italian", count=2, percentage=40),
    ],
    budget_range=BUDGET,
    spiciness=2.5,
    sweetness=0.0,
)

MULTI = MultiPreference(
    participant_count=20,
    dominant_preferences=[
        DominantPreference(category="Korean", score=50),
        DominantPreference(category="Thai", score=45),
    ],
    budget_range=BUDGET,
    spiciness=1.0,
    sweetness=3.2,
    dietary_restrictions=[DietaryRestriction.vegan, DietaryRestriction.nut_free],
)


class TestSinglePreferencePrompt:
    def test_contains_summary(self):
        prompt = compose_recommendation_prompt(SINGLE)
        assert "Most popular category: Japanese" in prompt
        assert "Japanese (60%), Italian (40%)" in prompt
        assert "300-400 TWD, average 350 TWD" in prompt
        assert "spiciness 2.5/5, sweetness 0.0/5" in prompt

    def test_has_no_balance_instruction(self):
        prompt = compose_recommendation_prompt(SINGLE)
        assert BALANCE_INSTRUCTION not in prompt
        assert "Balance instruction" not in prompt

    def test_no_dietary_line_without_restrictions(self):
        assert "Dietary restrictions" not in compose_recommendation_prompt(SINGLE)


class TestMultiPreferencePrompt:
    def test_lists_all_dominant_categories(self):
        prompt = compose_recommendation_prompt(MULTI)
        assert "- Korean (score 50)" in prompt
        assert "- Thai (score 45)" in prompt

    def test_has_balance_instruction(self):
        assert BALANCE_INSTRUCTION in compose_recommendation_prompt(MULTI)

    def test_has_no_single_winner_framing(self):
        assert "Most popular category" not in compose_recommendation_prompt(MULTI)

    def test_dietary_restrictions_rendered(self):
        prompt = compose_recommendation_prompt(MULTI)
        assert "- Dietary restrictions: vegan, nut-free" in prompt
        assert '"nut-free"' in prompt


class TestOptions:
    def test_defaults(self):
        prompt = compose_recommendation_prompt(SINGLE)
        assert "TWD" in prompt
        assert "- Location: Taiwan" in prompt
        assert "Recommend the 3 restaurants" in prompt
        assert prompt.endswith("Please answer in zh-TW.")

    def test_custom_options(self):
        options = PromptOptions(
            language="en-US",
            budget_currency="USD",
            location_context="Taipei Xinyi District",
            max_results=5,
        )
        prompt = compose_recommendation_prompt(SINGLE, options)
        assert "300-400 USD, average 350 USD" in prompt
        assert "- Location: Taipei Xinyi District" in prompt
        assert "Recommend the 5 restaurants" in prompt
        assert prompt.endswith("Please answer in en-US.")

    def test_options_accept_camel_case(self):
        options = PromptOptions.model_validate({"budgetCurrency": "JPY", "maxResults": 2})
        assert options.budget_currency == "JPY"
        assert options.max_results == 2

    def test_blank_options_fall_back_to_defaults(self):
        options = PromptOptions.model_validate(
            {"language": "", "budgetCurrency": "  ", "locationContext": None}
        )
        assert options == PromptOptions()

    def test_reasons_field_is_optional(self):
        with_reasons = compose_recommendation_prompt(SINGLE, PromptOptions(include_reasons=True))
        without = compose_recommendation_prompt(SINGLE, PromptOptions(include_reasons=False))
        assert '"reasons"' in with_reasons
        assert '"reasons"' not in without
        assert '"dishes"' in without


def test_prompt_is_deterministic():
    options = PromptOptions(language="ja-JP", max_results=4)
    assert compose_recommendation_prompt(MULTI, options) == compose_recommendation_prompt(
        MULTI, options
    )


def test_section_order():
    prompt = compose_recommendation_prompt(SINGLE)
    assert (
        prompt.index("professional restaurant recommendation assistant")
        < prompt.index("# Vote analysis")
        < prompt.index("# Output requirements")
        < prompt.index("Please answer in")
    )
