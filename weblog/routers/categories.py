from fastapi import APIRouter, Depends
from typing import List
from sqlalchemy.orm import Session
from weblog.db.session import get_db
from weblog.schemas.post import CategoryOut
from weblog.crud.categories import list_categories

router = APIRouter()


@router.get("", response_model=List[CategoryOut])
def get_categories(db: Session = Depends(get_db)):
    return list_categories(db)
