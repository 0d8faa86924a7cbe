import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from dinegenius.app import app
from dinegenius.exceptions import AIServiceError, AITimeoutError, InvalidInput
from dinegenius.rooms.store import clear_rooms

client = TestClient(app)

AI_REPLY = "```json\n" + json.dumps([
    {
        "name": "Sushi Zen",
        "type": "Japanese",
        "address": "No. 5, Songshan Rd",
        "priceRange": "300-500 TWD",
        "rating": {"score": 4.6, "outOf": 5, "source": "Google", "count": "120"},
        "reasons": ["Most of the group wants Japanese"],
        "dishes": ["Omakase"],
    }
]) + "\n```"

VOTES = [
    {"participantId": "p1", "foodType": "Japanese", "budget": 300, "spiciness": 2},
    {"participantId": "p2", "foodType": "Japanese", "budget": 400},
    {"participantId": "p3", "foodType": "Italian", "budget": 350, "comments": "I am vegan"},
]


def _passthrough(recs, location, config):
    return recs, False


@pytest.fixture(autouse=True)
def _empty_rooms():
    clear_rooms()
    yield
    clear_rooms()


def test_root():
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "success"


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"] == {"status": "ok"}


@patch("dinegenius.recommendations.service.enrich_recommendations", side_effect=_passthrough)
@patch("dinegenius.recommendations.service.generate_with_retry", return_value=AI_REPLY)
def test_recommendations_happy_path(mock_generate, mock_enrich):
    resp = client.post("/recommendations", json={"votes": VOTES})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    [rec] = body["data"]["recommendations"]
    assert rec["name"] == "Sushi Zen"
    assert rec["priceRange"] == "300-500 TWD"
    assert rec["mapUrl"].startswith("https://maps.google.com/?q=")

    stats = body["data"]["analysisStats"]
    assert stats["participantCount"] == 3
    assert stats["mostPopular"] == "Japanese"
    assert stats["budgetRange"] == {"min": 300, "max": 400, "average": 350}

    assert body["meta"]["placesApiUsed"] is False
    assert body["meta"]["aiModel"]
    assert body["meta"]["processingTime"].endswith("s")

    prompt = mock_generate.call_args.args[0]
    assert "Japanese" in prompt
    assert "vegan" in prompt


@patch("dinegenius.recommendations.service.enrich_recommendations", side_effect=_passthrough)
@patch("dinegenius.recommendations.service.generate_with_retry", return_value=AI_REPLY)
def test_options_reach_the_prompt(mock_generate, mock_enrich):
    resp = client.post("/recommendations", json={
        "votes": VOTES,
        "options": {"language": "en", "maxResults": 5, "locationContext": "Tokyo"},
    })

    assert resp.status_code == 200
    prompt = mock_generate.call_args.args[0]
    assert "Tokyo" in prompt
    assert "Recommend the 5 restaurants" in prompt
    assert mock_enrich.call_args.args[1] == "Tokyo"


@patch("dinegenius.recommendations.service.enrich_recommendations", side_effect=_passthrough)
@patch("dinegenius.recommendations.service.generate_with_retry", return_value=AI_REPLY)
def test_room_recommendations_are_stored(mock_generate, mock_enrich):
    resp = client.post("/recommendations", json={"votes": VOTES, "roomId": "room-42"})
    assert resp.status_code == 200

    stored = client.get("/recommendations/room-42")
    assert stored.status_code == 200
    body = stored.json()
    assert body["success"] is True
    assert body["data"]["data"]["recommendations"][0]["name"] == "Sushi Zen"


def test_unknown_room_is_404():
    resp = client.get("/recommendations/missing-room")
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["statusCode"] == 404


def test_empty_votes_rejected():
    resp = client.post("/recommendations", json={"votes": []})
    assert resp.status_code == 422


def test_out_of_range_spiciness_rejected():
    vote = {"participantId": "p1", "foodType": "Thai", "budget": 200, "spiciness": 7}
    resp = client.post("/recommendations", json={"votes": [vote]})
    assert resp.status_code == 422


@patch("dinegenius.recommendations.service.generate_with_retry")
def test_ai_timeout_maps_to_504(mock_generate):
    mock_generate.side_effect = AITimeoutError("timed out after 8s")

    resp = client.post("/recommendations", json={"votes": VOTES})

    assert resp.status_code == 504
    assert resp.json()["error"]["message"] == "AI service timed out"


@patch("dinegenius.recommendations.service.generate_with_retry")
def test_ai_failure_maps_to_503(mock_generate):
    mock_generate.side_effect = AIServiceError("upstream exploded")

    resp = client.post("/recommendations", json={"votes": VOTES})

    assert resp.status_code == 503
    assert resp.json()["success"] is False


@patch("dinegenius.recommendations.service.aggregate_votes")
def test_invalid_input_maps_to_400(mock_aggregate):
    mock_aggregate.side_effect = InvalidInput("no votes")

    resp = client.post("/recommendations", json={"votes": VOTES})

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Invalid request data"


def test_vote_without_category_rejected():
    votes = [{"participantId": "p1", "foodType": "", "budget": 200}]
    resp = client.post("/recommendations", json={"votes": votes})
    assert resp.status_code == 422


@patch("dinegenius.recommendations.service.enrich_recommendations", side_effect=_passthrough)
@patch("dinegenius.recommendations.service.generate_with_retry", return_value=AI_REPLY)
def test_blank_language_uses_default(mock_generate, mock_enrich):
    resp = client.post("/recommendations", json={"votes": VOTES, "options": {"language": ""}})

    assert resp.status_code == 200
    assert mock_generate.call_args.args[0].endswith("Please answer in zh-TW.")
