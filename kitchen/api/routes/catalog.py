from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kitchen.api.dependencies import get_db
from kitchen.infra.Catalog_Repository import CatalogRepository

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/ingredients")
def list_ingredients(db: Session = Depends(get_db)):
    return [i.to_dict() for i in CatalogRepository(db).list_ingredients()]


@router.get("/categories")
def list_categories(db: Session = Depends(get_db)):
    return [c.to_dict() for c in CatalogRepository(db).list_categories()]
