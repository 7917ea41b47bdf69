"""Upload-time tagging and wardrobe tool tests."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from agents.wardrobe_tagger import WardrobeTaggingAgent
from logic.errors import GenerationFailed
from logic.tags import merge_tags, parse_generated_tags
from tools.generative_client import ScriptedGenerativeClient
from tools.image_store import ImageRejected, LocalImageStore
from tools.wardrobe_store import ItemNotFound, SQLiteWardrobeStore
from tools.wardrobe_tools import WardrobeTools


def _png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), "blue").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def image_store(tmp_path: Path) -> LocalImageStore:
    return LocalImageStore(tmp_path / "uploads", max_bytes=64 * 1024)


def test_parse_generated_tags_handles_csv_and_json() -> None:
    assert parse_generated_tags('"Summer, Casual ,  , Blue"') == ["summer", "casual", "blue"]
    assert parse_generated_tags('["Vintage", "Denim"]') == ["vintage", "denim"]
    assert parse_generated_tags("") == []


def test_merge_tags_puts_user_tags_first_without_duplicates() -> None:
    assert merge_tags(["Blue", "Cotton"], ["blue", "summer", "summer"]) == ["blue", "cotton", "summer"]


def test_tagger_merges_user_and_generated_tags() -> None:
    client = ScriptedGenerativeClient(["summer, casual, floral"])
    agent = WardrobeTaggingAgent(client)

    tags = agent.generate_tags(b"img", "tops", "Floral shirt", ["Casual", "Mine"])

    assert tags == ["casual", "mine", "summer", "floral"]
    assert "- Category: tops" in client.prompts[0]
    assert "- User tags: Casual, Mine" in client.prompts[0]
    assert client.images == [b"img"]


def test_tagger_falls_back_to_user_tags_on_failure() -> None:
    client = ScriptedGenerativeClient([GenerationFailed("blocked")])
    agent = WardrobeTaggingAgent(client)

    assert agent.generate_tags(b"img", "tops", "Shirt", ["Keep", "Me"]) == ["Keep", "Me"]


def test_image_store_rejects_bad_uploads(image_store: LocalImageStore) -> None:
    with pytest.raises(ImageRejected):
        image_store.save("a.png", b"")
    with pytest.raises(ImageRejected):
        image_store.save("a.png", b"definitely not an image")
    with pytest.raises(ImageRejected):
        image_store.save("a.png", b"0" * (64 * 1024 + 1))


def test_image_store_saves_and_deletes(image_store: LocalImageStore) -> None:
    url = image_store.save("Shirt.PNG", _png_bytes())

    assert url.startswith("/uploads/") and url.endswith(".png")
    assert image_store.path_for(url).exists()
    assert image_store.delete(url) is True
    assert image_store.delete(url) is False


def test_upload_and_delete_item_round_trip(tmp_path: Path, image_store: LocalImageStore) -> None:
    store = SQLiteWardrobeStore(tmp_path / "wardrobe.db")
    client = ScriptedGenerativeClient(["cotton, blue"])
    tools = WardrobeTools(store, image_store, WardrobeTaggingAgent(client))

    created = tools.upload_item("user-1", "Blue tee", "tops", _png_bytes(), "tee.png", ["Blue"])

    assert created["tags"] == ["blue", "cotton"]
    assert created["category"] == "tops"
    assert tools.list_items("user-1") == [created]
    assert tools.list_items("user-1", category="bottoms") == []
    assert image_store.path_for(created["image_url"]).exists()

    tools.delete_item(created["id"])
    assert tools.get_item(created["id"]) is None
    assert not image_store.path_for(created["image_url"]).exists()
    with pytest.raises(ItemNotFound):
        tools.delete_item(created["id"])


def test_upload_rejects_unknown_category_before_calling_model(tmp_path: Path, image_store: LocalImageStore) -> None:
    client = ScriptedGenerativeClient(default="x")
    tools = WardrobeTools(SQLiteWardrobeStore(tmp_path / "w.db"), image_store, WardrobeTaggingAgent(client))

    with pytest.raises(ValueError):
        tools.upload_item("user-1", "Hat", "hats", _png_bytes(), "hat.png")
    assert client.call_count == 0


def test_preview_tags_does_not_persist(tmp_path: Path, image_store: LocalImageStore) -> None:
    store = SQLiteWardrobeStore(tmp_path / "w.db")
    tools = WardrobeTools(store, image_store, WardrobeTaggingAgent(ScriptedGenerativeClient(["Winter, Wool"])))

    assert tools.preview_tags(_png_bytes(), "outerwear", "Coat") == ["winter", "wool"]
    assert tools.list_all_items() == []
