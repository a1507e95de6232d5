"""Input checks shared by fridge setup and recipe authoring.

Both take parallel ``ingredient_ids`` / ``quantities`` arrays from the request
layer; they are paired here and rejected before anything is written.
"""
from typing import List, Sequence, Tuple

from kitchen.domain.errors import ValidationFailure
from kitchen.utilities.config import MIN_SETUP_INGREDIENTS

__all__ = ["pair_ids_with_quantities", "validate_fridge_setup"]


def pair_ids_with_quantities(ingredient_ids: Sequence[int], quantities: Sequence[str],
                             *, allow_duplicates: bool = False) -> List[Tuple[int, str]]:
    """Zip ids with quantities, failing on length mismatch or repeated ids."""
    ingredient_ids = list(ingredient_ids or [])
    quantities = list(quantities or [])
    if len(ingredient_ids) != len(quantities):
        raise ValidationFailure(
            "Ingredient ids and quantities must have the same length",
            detail=f"got {len(ingredient_ids)} ids and {len(quantities)} quantities",
        )
    if not allow_duplicates and len(set(ingredient_ids)) != len(ingredient_ids):
        raise ValidationFailure("Each ingredient may only be listed once")
    return list(zip(ingredient_ids, quantities))


def validate_fridge_setup(ingredient_ids: Sequence[int], quantities: Sequence[str],
                          minimum: int = MIN_SETUP_INGREDIENTS) -> List[Tuple[int, str]]:
    """Initial fridge setup needs at least ``minimum`` ingredients.

    Repeated ids are allowed here; the fridge upsert keeps the last quantity.
    """
    pairs = pair_ids_with_quantities(ingredient_ids, quantities, allow_duplicates=True)
    if len(pairs) < minimum:
        raise ValidationFailure(f"Please add at least {minimum} ingredients")
    return pairs
