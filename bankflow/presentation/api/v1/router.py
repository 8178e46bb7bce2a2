from fastapi import APIRouter

from .bills import bills_router
from .loans import loans_router
from .migrations import migrations_router
from .recurring import recurring_router
from .transfers import transfers_router

router = APIRouter()

router.include_router(bills_router, tags=["Bills"])
router.include_router(recurring_router, tags=["Recurring Payments"])
router.include_router(migrations_router, tags=["Migrations"])
router.include_router(loans_router, tags=["Loans"])
router.include_router(transfers_router, tags=["Transfers"])
