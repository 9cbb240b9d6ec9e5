"""PDV Management — points of sale, network stats, promoter portfolios and
partner dashboards.

Invariants:
    - Static paths (/stats, /overview, /by-partner, /promoter) registered before /{pdv_id}
    - promotor_id query filter "TODOS" (or absent) means every promoter
    - Trend window bounds are enforced by the service (out of range → 400)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from aurora_admin.api.dependencies import get_pdv_service, get_user_service
from aurora_admin.core.domain_types import PdvId, UserId
from aurora_admin.core.filter_records import ALL_PROMOTERS, filter_pdvs
from aurora_admin.schemas.pdv import (
    DailySales, NetworkOverview, PDVCreate, PDVDashboardStats, PDVResponse,
    PDVStats, PDVUpdate, PromoterPDVResponse,
)
from aurora_admin.services.pdv_service import DEFAULT_TREND_DAYS, PDVService
from aurora_admin.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/pdvs", tags=["pdvs"])


@router.get("", response_model=list[PDVResponse])
async def list_pdvs(
    q: str | None = Query(None, max_length=200),
    promotor_id: str = Query(ALL_PROMOTERS),
    service: PDVService = Depends(get_pdv_service),
):
    """List PDVs by name, filtered by name/city substring and promoter."""
    pdvs = await service.list_pdvs()
    return filter_pdvs(pdvs, q, promotor_id)


@router.get("/stats", response_model=PDVStats)
async def get_stats(service: PDVService = Depends(get_pdv_service)):
    return await service.get_stats()


@router.get("/overview", response_model=NetworkOverview)
async def get_overview(
    service: PDVService = Depends(get_pdv_service),
    users: UserService = Depends(get_user_service),
):
    """PDVs, promoters, partners and stats in one round trip."""
    return await service.get_network_overview(users.list_users)


@router.get("/by-partner/{parceiro_id}", response_model=PDVResponse)
async def get_by_partner(
    parceiro_id: UUID, service: PDVService = Depends(get_pdv_service),
):
    return await service.get_by_partner(UserId(str(parceiro_id)))


@router.get("/promoter/{promotor_id}", response_model=list[PromoterPDVResponse])
async def get_promoter_pdvs(
    promotor_id: UUID, service: PDVService = Depends(get_pdv_service),
):
    return await service.get_promoter_pdvs(UserId(str(promotor_id)))


@router.get("/{pdv_id}/dashboard", response_model=PDVDashboardStats)
async def get_dashboard(
    pdv_id: UUID, service: PDVService = Depends(get_pdv_service),
):
    """Today's sales, pieces in stock and the current commission rate."""
    return await service.get_dashboard_stats(PdvId(str(pdv_id)))


@router.get("/{pdv_id}/trend", response_model=list[DailySales])
async def get_sales_trend(
    pdv_id: UUID,
    days: int = Query(DEFAULT_TREND_DAYS),
    service: PDVService = Depends(get_pdv_service),
):
    return await service.get_sales_trend(PdvId(str(pdv_id)), days)


@router.post("", response_model=PDVResponse, status_code=status.HTTP_201_CREATED)
async def create_pdv(
    body: PDVCreate, service: PDVService = Depends(get_pdv_service),
):
    return await service.create_pdv(body.to_payload())


@router.patch("/{pdv_id}", response_model=PDVResponse)
async def update_pdv(
    pdv_id: UUID, body: PDVUpdate, service: PDVService = Depends(get_pdv_service),
):
    return await service.update_pdv(PdvId(str(pdv_id)), body.to_payload())


@router.delete("/{pdv_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pdv(
    pdv_id: UUID, service: PDVService = Depends(get_pdv_service),
):
    await service.delete_pdv(PdvId(str(pdv_id)))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
