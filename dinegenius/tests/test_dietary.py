from dinegenius.voting.dietary import dietary_guidance, extract_dietary_restrictions
from dinegenius.voting.models import DietaryRestriction


def test_extracts_vegan_and_nut_free():
    result = extract_dietary_restrictions(["我吃全素", "不吃堅果"])
    assert result == [DietaryRestriction.vegan, DietaryRestriction.nut_free]


def test_duplicates_are_removed():
    result = extract_dietary_restrictions(["不吃堅果", "堅果過敏，不吃堅果"])
    assert result == [DietaryRestriction.nut_free]


def test_several_synonyms_map_to_one_tag():
    assert extract_dietary_restrictions(["不吃肉"]) == [DietaryRestriction.vegetarian]
    assert extract_dietary_restrictions(["我是素食者"]) == [DietaryRestriction.vegetarian]


def test_english_keywords():
    result = extract_dietary_restrictions(["vegan please", "I have a seafood allergy"])
    assert result == [DietaryRestriction.vegan, DietaryRestriction.seafood_allergy]


def test_matching_is_case_sensitive():
    assert extract_dietary_restrictions(["VEGAN"]) == []


def test_negation_is_not_understood():
    assert extract_dietary_restrictions(["I am not vegetarian"]) == [
        DietaryRestriction.vegetarian
    ]


def test_no_comments():
    assert extract_dietary_restrictions(None) == []
    assert extract_dietary_restrictions([]) == []
    assert extract_dietary_restrictions(["anything goes"]) == []


def test_every_restriction_has_guidance():
    for restriction in DietaryRestriction:
        assert dietary_guidance(restriction)
