from fastapi import APIRouter, status

from app.dependencies import db_dependency
from app.schemas.category import CategoryResponse
from app.services.category import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", status_code=status.HTTP_200_OK, response_model=list[CategoryResponse])
def get_categories(db: db_dependency):
    return CategoryService(db).get_categories()
