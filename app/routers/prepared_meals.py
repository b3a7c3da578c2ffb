from fastapi import APIRouter

from app.schemas import SUCCESS, PreparedMealCreate, PreparedMealFields, item_with_freshness
from freezer_tracker.core import inventory
from freezer_tracker.core import prepared_meals as meals_core

router = APIRouter(prefix="/prepared-meals", tags=["prepared-meals"])


@router.get("")
def meals_active():
    items = meals_core.list_active()
    return [item_with_freshness(e) for e in inventory.classify_items("prepared", items)]


@router.get("/consumed")
def meals_consumed():
    return meals_core.list_consumed()


@router.get("/names")
def meals_names():
    return meals_core.get_names()


@router.post("", status_code=201)
def meals_create(body: PreparedMealCreate):
    fields = body.model_dump(exclude={"quantity"})
    return meals_core.create(fields, quantity=body.quantity)


@router.post("/{item_id}/take-out")
def meals_take_out(item_id: int):
    meals_core.take_out(item_id)
    return SUCCESS


@router.patch("/{item_id}")
def meals_update(item_id: int, body: PreparedMealFields):
    return meals_core.update(item_id, body.model_dump(exclude_unset=True))


@router.delete("/{item_id}")
def meals_delete(item_id: int):
    meals_core.delete(item_id)
    return SUCCESS


@router.post("/{item_id}/put-back")
def meals_put_back(item_id: int):
    meals_core.put_back(item_id)
    return SUCCESS
