from fastapi import APIRouter

from app.schemas import SUCCESS, RawFoodFields, TakeOutRequest, item_with_freshness
from freezer_tracker.core import inventory
from freezer_tracker.core import raw_food as raw_food_core

router = APIRouter(prefix="/raw-food", tags=["raw-food"])


@router.get("")
def raw_food_active():
    items = raw_food_core.list_active()
    return [item_with_freshness(e) for e in inventory.classify_items("raw", items)]


@router.get("/consumed")
def raw_food_consumed():
    return raw_food_core.list_consumed()


# Sub-categories can contain a slash ("Fish/Seafood").
@router.get("/names/{sub_category:path}")
def raw_food_names(sub_category: str):
    return raw_food_core.get_names(sub_category)


@router.post("", status_code=201)
def raw_food_create(body: RawFoodFields):
    return raw_food_core.create(body.model_dump())


@router.post("/{item_id}/take-out")
def raw_food_take_out(item_id: int, body: TakeOutRequest):
    raw_food_core.take_out(item_id, body.amount_taken)
    return SUCCESS


@router.patch("/{item_id}")
def raw_food_update(item_id: int, body: RawFoodFields):
    return raw_food_core.update(item_id, body.model_dump(exclude_unset=True))


@router.delete("/{item_id}")
def raw_food_delete(item_id: int):
    raw_food_core.delete(item_id)
    return SUCCESS


@router.post("/{item_id}/put-back")
def raw_food_put_back(item_id: int):
    raw_food_core.put_back(item_id)
    return SUCCESS
