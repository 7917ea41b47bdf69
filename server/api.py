"""FastAPI server exposing wardrobe and outfit endpoints."""

import json
from typing import List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from logic.errors import GenerationFailed, InsufficientWardrobe, MissingParameter, RecommendationError
from logic.validation import ManualOutfitPayload, RecommendationPayload, SavedOutfitPayload
from tools.image_store import ImageRejected
from tools.wardrobe_store import ItemNotFound
from wardrobe_app.app import WardrobeApp
from wardrobe_app.logging_config import configure_logging

configure_logging()

app = FastAPI(title="Wardrobe", version="0.1.0")
_wardrobe_app: WardrobeApp | None = None


def get_wardrobe_app() -> WardrobeApp:
    """Lazily build the container so importing this module has no side effects."""

    global _wardrobe_app
    if _wardrobe_app is None:
        _wardrobe_app = WardrobeApp()
    return _wardrobe_app


def status_for(exc: RecommendationError) -> int:
    if isinstance(exc, MissingParameter):
        return 400
    if isinstance(exc, InsufficientWardrobe):
        return 404 if exc.empty else 400
    if isinstance(exc, GenerationFailed):
        return 502
    return 500


def _parse_tags(raw: Optional[str]) -> List[str]:
    try:
        tags = json.loads(raw or "[]")
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="tags must be a JSON array of strings") from exc
    if not isinstance(tags, list):
        raise HTTPException(status_code=400, detail="tags must be a JSON array of strings")
    return [tag for tag in tags if isinstance(tag, str) and tag.strip()]


@app.get("/healthz")
async def healthcheck(wardrobe: WardrobeApp = Depends(get_wardrobe_app)) -> dict:
    return {
        "status": "ok",
        "service": "wardrobe",
        "environment": wardrobe.config.environment or "local",
        "model": wardrobe.config.model,
    }


@app.post("/clothes")
def upload_clothes(
    user_id: str = Form(...),
    name: str = Form(""),
    category: str = Form(...),
    tags: str = Form("[]"),
    image: UploadFile = File(...),
    wardrobe: WardrobeApp = Depends(get_wardrobe_app),
) -> dict:
    """Store a photo, enrich its tags with the model and persist the item."""

    try:
        item = wardrobe.wardrobe_tools.upload_item(
            user_id=user_id,
            name=name,
            category=category,
            image_bytes=image.file.read(),
            filename=image.filename,
            user_tags=_parse_tags(tags),
        )
    except (ImageRejected, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True, "data": item}


@app.post("/clothes/tags")
def generate_tags(
    category: str = Form(...),
    name: str = Form(""),
    image: UploadFile = File(...),
    wardrobe: WardrobeApp = Depends(get_wardrobe_app),
) -> dict:
    try:
        tags = wardrobe.wardrobe_tools.preview_tags(image.file.read(), category, name)
    except ImageRejected as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True, "tags": tags}


@app.get("/clothes")
def list_clothes(
    user_id: str,
    category: str = "all",
    tag: Optional[str] = None,
    q: Optional[str] = None,
    wardrobe: WardrobeApp = Depends(get_wardrobe_app),
) -> list:
    if not user_id.strip():
        raise HTTPException(status_code=400, detail="User ID is required")
    return wardrobe.wardrobe_tools.list_items(user_id, category=category, tag=tag, text=q)


@app.get("/clothes/all")
def list_all_clothes(wardrobe: WardrobeApp = Depends(get_wardrobe_app)) -> list:
    return wardrobe.wardrobe_tools.list_all_items()


@app.delete("/clothes/{item_id}")
def delete_clothes(item_id: str, wardrobe: WardrobeApp = Depends(get_wardrobe_app)) -> dict:
    try:
        wardrobe.wardrobe_tools.delete_item(item_id)
    except ItemNotFound as exc:
        raise HTTPException(status_code=404, detail="Clothing item not found") from exc
    return {"message": "Clothing item deleted successfully"}


@app.post("/outfit/recommend")
def recommend_outfit(
    request: RecommendationPayload, wardrobe: WardrobeApp = Depends(get_wardrobe_app)
) -> JSONResponse:
    """Run the recommendation pipeline; failures keep the structured payload."""

    payload, error = wardrobe.recommender.execute(
        request.user_id,
        request.weather,
        request.season,
        request.occasion,
        request.additional_info,
    )
    return JSONResponse(status_code=status_for(error) if error else 200, content=payload)


@app.get("/users/{user_id}/outfits")
def list_saved_outfits(user_id: str, wardrobe: WardrobeApp = Depends(get_wardrobe_app)) -> list:
    return wardrobe.saved_outfits.list_outfits(user_id)


@app.post("/users/{user_id}/outfits", status_code=201)
def save_outfit(
    user_id: str, outfit: SavedOutfitPayload, wardrobe: WardrobeApp = Depends(get_wardrobe_app)
) -> dict:
    return wardrobe.saved_outfits.save_outfit(user_id, outfit.model_dump())


@app.post("/users/{user_id}/outfits/manual", status_code=201)
def save_manual_outfit(
    user_id: str, outfit: ManualOutfitPayload, wardrobe: WardrobeApp = Depends(get_wardrobe_app)
) -> dict:
    try:
        return wardrobe.save_manual_outfit(
            user_id,
            outfit.name,
            top_id=outfit.top_id,
            bottom_id=outfit.bottom_id,
            shoes_id=outfit.shoes_id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.delete("/users/{user_id}/outfits/{outfit_id}")
def delete_saved_outfit(
    user_id: str, outfit_id: str, wardrobe: WardrobeApp = Depends(get_wardrobe_app)
) -> dict:
    if not wardrobe.saved_outfits.delete_outfit(user_id, outfit_id):
        raise HTTPException(status_code=404, detail="Outfit not found")
    return {"message": "Outfit deleted successfully"}


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
