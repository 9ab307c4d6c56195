"""Studio services (what gets booked: 1-2-1, duet, group)."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.db.base import apply_changes, utcnow
from trainer_aide.db.session import get_db
from trainer_aide.models.calendar import Service
from trainer_aide.schemas.calendar import ServiceCreate, ServiceRead, ServiceUpdate, check_service_capacity

router = APIRouter()


@router.get("", response_model=list[ServiceRead])
async def list_services(
    db: AsyncSession = Depends(get_db),
    active_only: bool = False,
):
    stmt = select(Service).order_by(Service.duration, Service.name)
    if active_only:
        stmt = stmt.where(Service.is_active.is_(True))
    result = await db.execute(stmt)
    return list(result.scalars().all())


@router.get("/active", response_model=list[ServiceRead])
async def list_active_services(db: AsyncSession = Depends(get_db)):
    return await list_services(db=db, active_only=True)


@router.post("", response_model=ServiceRead, status_code=201)
async def create_service(
    payload: ServiceCreate,
    db: AsyncSession = Depends(get_db),
):
    service = Service(**payload.model_dump())
    db.add(service)
    await db.flush()
    await db.refresh(service)
    return service


@router.get("/{service_id}", response_model=ServiceRead)
async def get_service(
    service_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    service = await db.get(Service, service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.patch("/{service_id}", response_model=ServiceRead)
async def update_service(
    service_id: uuid.UUID,
    payload: ServiceUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partial update; type and capacity are checked together."""
    service = await db.get(Service, service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    data = payload.model_dump(exclude_unset=True)
    try:
        check_service_capacity(data.get("type", service.type), data.get("max_capacity", service.max_capacity))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    apply_changes(service, data)
    service.updated_at = utcnow()
    await db.flush()
    await db.refresh(service)
    return service


@router.delete("/{service_id}", status_code=204)
async def delete_service(
    service_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    service = await db.get(Service, service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    await db.delete(service)
    return None
