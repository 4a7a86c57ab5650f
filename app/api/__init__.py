"""API router."""
from fastapi import APIRouter, Depends

from app.core.dependencies import protect
from app.api.auth import router as auth_router
from app.api.users import router as users_router
from app.api.scanned_items import router as scanned_items_router
from app.api.items import router as items_router
from app.api.bags import router as bags_router
from app.api.picks import router as picks_router
from app.api.orders import router as orders_router
from app.api.racks import router as racks_router
from app.api.tasks import router as tasks_router


router = APIRouter()

# Everything except authentication sits behind the access-token gate
protected = [Depends(protect)]

router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
router.include_router(users_router, prefix="/users", tags=["Users"], dependencies=protected)
router.include_router(scanned_items_router, prefix="/scanned-items", tags=["Scanned Items"], dependencies=protected)
router.include_router(items_router, prefix="/items", tags=["Items"], dependencies=protected)
router.include_router(bags_router, prefix="/bags", tags=["Bags"], dependencies=protected)
router.include_router(picks_router, prefix="/picks", tags=["Picking"], dependencies=protected)
router.include_router(orders_router, prefix="/orders", tags=["Orders"], dependencies=protected)
router.include_router(racks_router, prefix="/racks", tags=["Racks"], dependencies=protected)
router.include_router(tasks_router, prefix="/tasks", tags=["Tasks"], dependencies=protected)
