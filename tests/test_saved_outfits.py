"""Manual outfit assembly and the saved outfit list."""

from pathlib import Path
import sys
import threading

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_builder import create_manual_outfit
from memory.saved_outfits import SavedOutfitStore
from models.clothing_item import ClothingItem


def _item(item_id: str, category: str) -> ClothingItem:
    return ClothingItem(
        item_id=item_id,
        user_id="user-1",
        name=f"Item {item_id}",
        category=category,
        image_url=f"/uploads/{item_id}.png",
        created_at=1.0,
    )


WARDROBE = [_item("t", "tops"), _item("b", "bottoms"), _item("s", "shoes")]


def test_manual_outfit_allows_empty_slots() -> None:
    outfit = create_manual_outfit(WARDROBE, " Weekend ", top_id="t")

    assert outfit.name == "Weekend"
    assert outfit.top is not None and outfit.top.item_id == "t"
    assert outfit.bottom is None and outfit.shoes is None
    assert outfit.to_dict()["bottom"] is None


def test_manual_outfit_requires_name_and_matching_slots() -> None:
    with pytest.raises(ValueError):
        create_manual_outfit(WARDROBE, "   ", top_id="t")
    with pytest.raises(ValueError):
        create_manual_outfit(WARDROBE, "Mixed up", top_id="b")
    with pytest.raises(ValueError):
        create_manual_outfit(WARDROBE, "Ghost", shoes_id="missing")


def test_saved_outfits_append_and_delete_by_id(tmp_path: Path) -> None:
    store = SavedOutfitStore(str(tmp_path / "saved"))

    assert store.list_outfits("user-1") == []
    store.save_outfit("user-1", {"id": "o1", "name": "First"})
    store.save_outfit("user-1", {"id": "o2", "name": "Second"})
    store.save_outfit("user-2", {"id": "o3", "name": "Other user"})

    assert [o["id"] for o in store.list_outfits("user-1")] == ["o1", "o2"]
    assert store.delete_outfit("user-1", "o1") is True
    assert store.delete_outfit("user-1", "o1") is False
    assert [o["id"] for o in store.list_outfits("user-1")] == ["o2"]
    assert [o["id"] for o in store.list_outfits("user-2")] == ["o3"]


def test_saved_outfit_requires_id(tmp_path: Path) -> None:
    store = SavedOutfitStore(str(tmp_path / "saved"))
    with pytest.raises(ValueError):
        store.save_outfit("user-1", {"name": "No id"})


def test_user_ids_cannot_escape_base_dir(tmp_path: Path) -> None:
    store = SavedOutfitStore(str(tmp_path / "saved"))
    store.save_outfit("../../evil", {"id": "o1"})

    assert list((tmp_path / "saved").iterdir())
    assert store.list_outfits("../../evil") == [{"id": "o1"}]


def test_similar_user_ids_do_not_share_outfits(tmp_path: Path) -> None:
    store = SavedOutfitStore(str(tmp_path / "saved"))
    store.save_outfit("alice@example.com", {"id": "o1", "name": "private"})

    assert store.list_outfits("alice_example.com") == []
    assert store.delete_outfit("alice_example.com", "o1") is False
    assert [o["id"] for o in store.list_outfits("alice@example.com")] == ["o1"]


def test_concurrent_saves_keep_every_outfit(tmp_path: Path) -> None:
    store = SavedOutfitStore(str(tmp_path / "saved"))

    def save_many(prefix: str) -> None:
        for index in range(25):
            store.save_outfit("user-1", {"id": f"{prefix}-{index}"})

    workers = [threading.Thread(target=save_many, args=(f"w{n}",)) for n in range(4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert len(store.list_outfits("user-1")) == 100
    assert [path.suffix for path in (tmp_path / "saved").iterdir()] == [".json"]
