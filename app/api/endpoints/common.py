from fastapi import APIRouter, Request
from typing import List

from app.core.constants import DEPARTMENTS, INTEREST_TAGS
from app.core.rate_limiter import limiter

router = APIRouter(
    prefix="/api/common",
    tags=["Common / Metadata"]
)

# ----------------------------------------------------------
# 1. INTEREST TAGS (registration form + event categories)
# ----------------------------------------------------------
@router.get("/interests", response_model=List[str])
@limiter.limit("60/minute")
async def get_interest_tags(request: Request):
    return INTEREST_TAGS

# ----------------------------------------------------------
# 2. DEPARTMENTS
# ----------------------------------------------------------
@router.get("/departments", response_model=List[str])
@limiter.limit("60/minute")
async def get_departments(request: Request):
    return DEPARTMENTS
