"""Client profiles: intake data used by sessions and AI program generation."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.db.base import apply_changes
from trainer_aide.db.session import get_db
from trainer_aide.models.user import ClientProfile
from trainer_aide.schemas.user import (
    ClientProfileCreate,
    ClientProfileRead,
    ClientProfileUpdate,
    WorkoutConstraints,
)
from trainer_aide.services.client_constraints import extract_workout_constraints

router = APIRouter()

_JSON_FIELDS = {"injuries", "secondary_goals"}


async def _get_client(db: AsyncSession, client_id: uuid.UUID) -> ClientProfile:
    client = await db.get(ClientProfile, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client profile not found")
    return client


def _profile_values(payload, exclude_unset: bool = False) -> dict:
    """Column values; nested JSON fields (injuries, goals) dumped to plain JSON."""
    data = payload.model_dump(exclude_unset=exclude_unset)
    json_fields = {k for k in data if k in _JSON_FIELDS}
    if json_fields:
        data.update(payload.model_dump(mode="json", include=json_fields))
    return data


async def _ensure_email_free(db: AsyncSession, email: str, exclude_id: uuid.UUID | None = None) -> None:
    stmt = select(ClientProfile.id).where(ClientProfile.email == email)
    if exclude_id:
        stmt = stmt.where(ClientProfile.id != exclude_id)
    if (await db.execute(stmt)).first():
        raise HTTPException(status_code=409, detail="A client with this email already exists")


@router.get("", response_model=list[ClientProfileRead])
async def list_clients(
    db: AsyncSession = Depends(get_db),
    trainer_id: uuid.UUID | None = None,
    search: str | None = None,
    include_inactive: bool = False,
    skip: int = 0,
    limit: int = 100,
):
    """Active clients, optionally for one trainer or matching a name/email substring."""
    stmt = select(ClientProfile)
    if not include_inactive:
        stmt = stmt.where(ClientProfile.is_active.is_(True))
    if trainer_id:
        stmt = stmt.where(ClientProfile.assigned_trainer_id == trainer_id)
    if search:
        term = f"%{search.strip()}%"
        stmt = stmt.where(
            or_(
                ClientProfile.first_name.ilike(term),
                ClientProfile.last_name.ilike(term),
                ClientProfile.email.ilike(term),
            )
        )
    stmt = stmt.order_by(ClientProfile.first_name, ClientProfile.last_name).offset(skip).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


@router.post("", response_model=ClientProfileRead, status_code=201)
async def create_client(
    payload: ClientProfileCreate,
    db: AsyncSession = Depends(get_db),
):
    await _ensure_email_free(db, payload.email)
    client = ClientProfile(**_profile_values(payload))
    db.add(client)
    await db.flush()
    await db.refresh(client)
    return client


@router.get("/{client_id}", response_model=ClientProfileRead)
async def get_client(
    client_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await _get_client(db, client_id)


@router.get("/{client_id}/constraints", response_model=WorkoutConstraints)
async def get_client_constraints(
    client_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """What program generation would use for this client."""
    return extract_workout_constraints(await _get_client(db, client_id))


@router.patch("/{client_id}", response_model=ClientProfileRead)
async def update_client(
    client_id: uuid.UUID,
    payload: ClientProfileUpdate,
    db: AsyncSession = Depends(get_db),
):
    client = await _get_client(db, client_id)
    data = _profile_values(payload, exclude_unset=True)
    if data.get("email") and data["email"] != client.email:
        await _ensure_email_free(db, data["email"], exclude_id=client_id)
    apply_changes(client, data)
    await db.flush()
    await db.refresh(client)
    return client


@router.post("/{client_id}/deactivate", response_model=ClientProfileRead)
async def deactivate_client(
    client_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    client = await _get_client(db, client_id)
    client.is_active = False
    await db.flush()
    await db.refresh(client)
    return client


@router.delete("/{client_id}", status_code=204)
async def delete_client(
    client_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    client = await _get_client(db, client_id)
    await db.delete(client)
    return None
