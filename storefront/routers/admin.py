from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.services.auth import get_current_admin
from storefront.services.dashboard import DashboardService
from storefront.models.user import User
from storefront.schemas.user import DashboardStats

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/dashboard", response_model=DashboardStats)
async def admin_dashboard(
    user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return DashboardService.get_stats(db)
