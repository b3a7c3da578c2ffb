from fastapi import APIRouter

from app.schemas import SUCCESS, BreastMilkFields, item_with_freshness
from freezer_tracker.core import breast_milk as milk_core
from freezer_tracker.core import inventory

router = APIRouter(prefix="/breast-milk", tags=["breast-milk"])


@router.get("")
def milk_active():
    items = milk_core.list_active()
    return [item_with_freshness(e) for e in inventory.classify_items("milk", items)]


@router.get("/consumed")
def milk_consumed():
    return milk_core.list_consumed()


@router.post("", status_code=201)
def milk_create(body: BreastMilkFields):
    return milk_core.create(body.model_dump())


@router.post("/{item_id}/take-out")
def milk_take_out(item_id: int):
    milk_core.take_out(item_id)
    return SUCCESS


@router.patch("/{item_id}")
def milk_update(item_id: int, body: BreastMilkFields):
    return milk_core.update(item_id, body.model_dump(exclude_unset=True))


@router.delete("/{item_id}")
def milk_delete(item_id: int):
    milk_core.delete(item_id)
    return SUCCESS


@router.post("/{item_id}/put-back")
def milk_put_back(item_id: int):
    milk_core.put_back(item_id)
    return SUCCESS
