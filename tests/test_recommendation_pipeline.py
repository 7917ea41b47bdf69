"""End-to-end recommendation agent tests with a scripted model."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from agents.outfit_recommender import OutfitRecommendationAgent
from logic.errors import GenerationFailed, InsufficientWardrobe
from logic.partitioning import partition_wardrobe
from logic.prompt_builder import NO_PREFERENCES, NO_SHOES, build_recommendation_prompt
from models.clothing_item import ClothingItem
from models.outfit import RecommendationRequest
from tools.generative_client import ScriptedGenerativeClient
from tools.wardrobe_store import SQLiteWardrobeStore

SCENARIO_RESPONSE = (
    '{"name":"Breezy Day","description":"...","top":{"id":"A"},"bottom":{"id":"B"},'
    '"shoes":{"id":null},"occasion":"casual","weather":"sunny","season":"summer"}'
)


def _item(item_id: str, category: str, tags=None, user_id: str = "user-1") -> ClothingItem:
    return ClothingItem(
        item_id=item_id,
        user_id=user_id,
        name=f"Item {item_id}",
        category=category,
        image_url=f"/uploads/{item_id}.png",
        tags=tags or [],
    )


@pytest.fixture()
def store(tmp_path: Path) -> SQLiteWardrobeStore:
    return SQLiteWardrobeStore(tmp_path / "wardrobe.db")


def _stock(store: SQLiteWardrobeStore, items: List[ClothingItem]) -> None:
    for item in items:
        store.create_item(item)


def test_scenario_top_and_bottom_without_shoes(store: SQLiteWardrobeStore) -> None:
    """Wardrobe with one top and one bottom yields a shoes-less outfit."""

    _stock(store, [_item("A", "tops", ["casual", "blue"]), _item("B", "bottoms", ["casual"])])
    client = ScriptedGenerativeClient([SCENARIO_RESPONSE])
    agent = OutfitRecommendationAgent(store, client)

    response = agent.recommend("user-1", "sunny", "summer", "casual")

    assert response["success"] is True
    outfit = response["outfit"]
    assert outfit["top"]["id"] == "A"
    assert outfit["bottom"]["id"] == "B"
    assert outfit["shoes"] is None
    assert (outfit["occasion"], outfit["weather"], outfit["season"]) == ("casual", "sunny", "summer")
    assert outfit["name"] == "Breezy Day"
    assert outfit["top"]["tags"] == ["casual", "blue"]
    assert client.call_count == 1


@pytest.mark.parametrize(
    "items, empty",
    [
        ([], True),
        ([_item("A", "tops"), _item("S", "shoes")], False),
        ([_item("B", "bottoms"), _item("D", "dresses")], False),
        ([_item("A", "tops", user_id="someone-else"), _item("B", "bottoms", user_id="someone-else")], True),
    ],
)
def test_insufficient_wardrobe_never_calls_model(store: SQLiteWardrobeStore, items, empty) -> None:
    _stock(store, items)
    client = ScriptedGenerativeClient(default=SCENARIO_RESPONSE)
    agent = OutfitRecommendationAgent(store, client)

    response = agent.recommend("user-1", "sunny", "summer", "casual")

    assert response == {"success": False, "error": "InsufficientWardrobe", "details": response["details"]}
    assert client.call_count == 0
    with pytest.raises(InsufficientWardrobe) as excinfo:
        agent.load_candidates("user-1")
    assert excinfo.value.empty is empty


@pytest.mark.parametrize(
    "args",
    [
        (None, "sunny", "summer", "casual"),
        ("user-1", "", "summer", "casual"),
        ("user-1", "sunny", "  ", "casual"),
        ("user-1", "sunny", "summer", None),
    ],
)
def test_missing_parameters_fail_before_storage(args) -> None:
    class ExplodingStore(SQLiteWardrobeStore):
        def __init__(self) -> None:
            pass

        def list_records_for_user(self, user_id):
            raise AssertionError("storage must not be touched")

    client = ScriptedGenerativeClient(default=SCENARIO_RESPONSE)
    response = OutfitRecommendationAgent(ExplodingStore(), client).recommend(*args)

    assert response["success"] is False
    assert response["error"] == "MissingParameter"
    assert client.call_count == 0


def test_generation_failure_is_reported_not_retried(store: SQLiteWardrobeStore) -> None:
    _stock(store, [_item("A", "tops"), _item("B", "bottoms")])
    client = ScriptedGenerativeClient([GenerationFailed("quota exceeded"), SCENARIO_RESPONSE])

    response = OutfitRecommendationAgent(store, client).recommend("user-1", "sunny", "summer", "casual")

    assert response == {"success": False, "error": "GenerationFailed", "details": "quota exceeded"}
    assert client.call_count == 1


def test_unexpected_client_errors_become_generation_failures(store: SQLiteWardrobeStore) -> None:
    _stock(store, [_item("A", "tops"), _item("B", "bottoms")])
    client = ScriptedGenerativeClient([ConnectionError("connection reset")])

    response = OutfitRecommendationAgent(store, client).recommend("user-1", "sunny", "summer", "casual")

    assert response["error"] == "GenerationFailed"
    assert "connection reset" in response["details"]


@pytest.mark.parametrize(
    "model_text, expected_error",
    [
        ("Sorry, I cannot help with that.", "MalformedRecommendation"),
        ('{"name": "x", "top": {"id": "A"}}', "IncompleteRecommendation"),
        ('{"name": "x", "top": {"id": "Q"}, "bottom": {"id": "B"}}', "UnknownItemReference"),
    ],
)
def test_bad_model_answers_map_to_error_kinds(store: SQLiteWardrobeStore, model_text, expected_error) -> None:
    _stock(store, [_item("A", "tops"), _item("B", "bottoms")])
    client = ScriptedGenerativeClient([model_text])

    response = OutfitRecommendationAgent(store, client).recommend("user-1", "sunny", "summer", "casual")

    assert response["success"] is False
    assert response["error"] == expected_error
    assert response["details"]


@pytest.mark.parametrize(
    "wardrobe, answer_top, answer_bottom",
    [
        ([_item("t1", "tops"), _item("b1", "bottoms")], "t1", "b1"),
        ([_item("t1", "top"), _item("t2", "tops"), _item("b1", "bottom")], "t1", "b1"),
        ([_item("t1", "tops"), _item("b1", "bottoms"), _item("b2", "bottoms")], "b1", "b2"),
        ([_item("t1", "tops"), _item("b1", "bottoms"), _item("s1", "shoes")], "t1", "s1"),
    ],
)
def test_outcome_is_either_valid_outfit_or_error_kind(
    store: SQLiteWardrobeStore, wardrobe, answer_top, answer_bottom
) -> None:
    _stock(store, wardrobe)
    answer = {"name": "n", "top": {"id": answer_top}, "bottom": {"id": answer_bottom}}
    client = ScriptedGenerativeClient([json.dumps(answer)])

    response = OutfitRecommendationAgent(store, client).recommend("user-1", "rainy", "fall", "work")

    tops = {i.item_id for i in wardrobe if i.category in ("tops", "top")}
    bottoms = {i.item_id for i in wardrobe if i.category in ("bottoms", "bottom")}
    if response["success"]:
        assert response["outfit"]["top"]["id"] in tops
        assert response["outfit"]["bottom"]["id"] in bottoms
    else:
        assert response["error"] == "UnknownItemReference"


def test_prompt_lists_candidates_and_contract() -> None:
    candidates = partition_wardrobe(
        [
            _item("A", "tops", ["casual", "blue"]),
            _item("B", "bottoms", ["casual"]),
            _item("H", "accessories", ["hat"]),
        ]
    )
    request = RecommendationRequest(user_id="user-1", weather="sunny", season="summer", occasion="casual")

    prompt = build_recommendation_prompt(request, candidates)

    assert '- ID: A, Name: "Item A", Tags: [casual, blue]' in prompt
    assert '- ID: B, Name: "Item B", Tags: [casual]' in prompt
    assert "ID: H" not in prompt
    assert NO_SHOES in prompt
    assert f"Additional preferences: {NO_PREFERENCES}" in prompt
    assert '"occasion": "casual"' in prompt
    assert "Do not include any explanations, markdown formatting" in prompt


def test_prompt_uses_additional_info_when_given(store: SQLiteWardrobeStore) -> None:
    _stock(store, [_item("A", "tops"), _item("B", "bottoms"), _item("S", "shoes", ["boots"])])
    client = ScriptedGenerativeClient([SCENARIO_RESPONSE])

    OutfitRecommendationAgent(store, client).recommend(
        "user-1", "sunny", "summer", "casual", additional_info="no black please"
    )

    prompt = client.prompts[0]
    assert "Additional preferences: no black please" in prompt
    assert '- ID: S, Name: "Item S", Tags: [boots]' in prompt
    assert NO_SHOES not in prompt


def test_corrupt_tags_degrade_to_empty_in_prompt(store: SQLiteWardrobeStore) -> None:
    _stock(store, [_item("A", "tops", ["x"]), _item("B", "bottoms")])
    with store._connect() as conn:
        conn.execute("UPDATE clothing_items SET tags_text = 'oops' WHERE item_id = 'A'")
    client = ScriptedGenerativeClient([SCENARIO_RESPONSE])

    response = OutfitRecommendationAgent(store, client).recommend("user-1", "sunny", "summer", "casual")

    assert response["success"] is True
    assert '- ID: A, Name: "Item A", Tags: []' in client.prompts[0]
