"""Fridge endpoints: the acting user's pantry, its setup and what it can cook."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kitchen.api.dependencies import current_user, get_db
from kitchen.infra.Pantry_Repository import PantryRepository
from kitchen.logic.pantry.analysis import compute_expiring_soon
from kitchen.utilities.validators import FridgeItemInput, FridgeSetupInput

router = APIRouter(prefix="/api/fridge", tags=["fridge"])


@router.get("")
def get_fridge(user: str = Depends(current_user), db: Session = Depends(get_db)):
    pantry = PantryRepository(db).list_for_user(user)
    return {"owner_user_id": user, "count": len(pantry), "items": pantry.to_dict()}


@router.post("", status_code=201)
def add_or_update_item(payload: FridgeItemInput, user: str = Depends(current_user),
                       db: Session = Depends(get_db)):
    item = PantryRepository(db).add_or_update(user, payload.ingredient_id, payload.quantity, payload.expiry_date)
    return item.to_dict()


@router.post("/setup", status_code=201)
def setup_fridge(payload: FridgeSetupInput, user: str = Depends(current_user), db: Session = Depends(get_db)):
    pantry = PantryRepository(db).setup(user, payload.ingredient_ids, payload.quantities)
    return {"owner_user_id": user, "count": len(pantry), "items": pantry.to_dict()}


@router.get("/expiring")
def expiring_items(window: Optional[int] = Query(default=None, ge=0), user: str = Depends(current_user),
                   db: Session = Depends(get_db)):
    return compute_expiring_soon(PantryRepository(db).list_for_user(user), window=window)


@router.get("/cookable")
def cookable_recipes(user: str = Depends(current_user), db: Session = Depends(get_db)):
    return [r.to_dict() for r in PantryRepository(db).cookable_for_user(user)]


@router.delete("/{item_id}", status_code=204)
def remove_item(item_id: int, user: str = Depends(current_user), db: Session = Depends(get_db)):
    PantryRepository(db).remove(item_id, actor_id=user)
