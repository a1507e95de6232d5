"""Shopping list endpoints."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from kitchen.api.dependencies import current_user, get_db
from kitchen.domain.ownership import ensure_owner
from kitchen.infra.ShoppingList_Repository import ShoppingListRepository
from kitchen.infra.pdf_utils import generate_pdf_for_shopping_list
from kitchen.utilities.validators import (
    CompletedInput, CustomItemInput, MergeInput, PurchasedInput, ShoppingListFromRecipeInput,
)

router = APIRouter(prefix="/api/shopping-lists", tags=["shopping"])


def _owned(repo: ShoppingListRepository, list_id: int, user: str):
    shopping_list = repo.get(list_id)
    ensure_owner(user, shopping_list.owner_user_id, "shopping lists")
    return shopping_list


@router.get("")
def list_shopping_lists(user: str = Depends(current_user), db: Session = Depends(get_db)):
    return [s.to_dict() for s in ShoppingListRepository(db).list_for_user(user)]


@router.post("/from-recipe", status_code=201)
def create_from_recipe(payload: ShoppingListFromRecipeInput, user: str = Depends(current_user),
                       db: Session = Depends(get_db)):
    return ShoppingListRepository(db).create_for_recipe(user, payload.recipe_id, payload.name).to_dict()


@router.post("/merge", status_code=201)
def create_merged(payload: MergeInput, user: str = Depends(current_user), db: Session = Depends(get_db)):
    return ShoppingListRepository(db).create_merged(user, payload.recipe_ids, payload.name).to_dict()


@router.post("/items/{item_id}/purchased")
def set_item_purchased(item_id: int, payload: PurchasedInput, user: str = Depends(current_user),
                       db: Session = Depends(get_db)):
    return ShoppingListRepository(db).set_purchased(item_id, payload.is_purchased, actor_id=user).to_dict()


@router.get("/{list_id}")
def get_shopping_list(list_id: int, user: str = Depends(current_user), db: Session = Depends(get_db)):
    return _owned(ShoppingListRepository(db), list_id, user).to_dict()


@router.get("/{list_id}/pdf")
def export_pdf(list_id: int, user: str = Depends(current_user), db: Session = Depends(get_db)):
    shopping_list = _owned(ShoppingListRepository(db), list_id, user)
    pdf_bytes = generate_pdf_for_shopping_list(shopping_list)
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": f"attachment; filename=shopping_list_{list_id}.pdf"})


@router.post("/{list_id}/items", status_code=201)
def add_custom_item(list_id: int, payload: CustomItemInput, user: str = Depends(current_user),
                    db: Session = Depends(get_db)):
    item = ShoppingListRepository(db).add_custom_item(list_id, payload.name, payload.quantity,
                                                      payload.category, actor_id=user)
    return item.to_dict()


@router.post("/{list_id}/purchased")
def mark_all_purchased(list_id: int, payload: PurchasedInput, user: str = Depends(current_user),
                       db: Session = Depends(get_db)):
    repo = ShoppingListRepository(db)
    updated = repo.mark_all_purchased(list_id, payload.is_purchased, actor_id=user)
    return {"updated": updated, "shopping_list": repo.get(list_id).to_dict()}


@router.post("/{list_id}/completed")
def set_completed(list_id: int, payload: CompletedInput, user: str = Depends(current_user),
                  db: Session = Depends(get_db)):
    return ShoppingListRepository(db).set_completed(list_id, payload.is_completed, actor_id=user).to_dict()


@router.delete("/{list_id}", status_code=204)
def delete_shopping_list(list_id: int, user: str = Depends(current_user), db: Session = Depends(get_db)):
    ShoppingListRepository(db).delete(list_id, user)
