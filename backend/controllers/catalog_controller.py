"""HTTP controller layer for rooms, customers and service health."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from backend.controllers.dependencies import get_customer_repository, get_room_repository
from backend.repository.data_repository import CustomerRepository, RoomRepository
from backend.utils.config import get_settings


router = APIRouter(tags=["catalog"])


class RoomResponse(BaseModel):
    id: int
    description: str


class CustomerResponse(BaseModel):
    id: int
    name: str
    email: str


class HealthResponse(BaseModel):
    status: str
    app_name: str
    version: str


@router.get("/rooms", response_model=list[RoomResponse], status_code=status.HTTP_200_OK)
async def list_rooms(
    repository: RoomRepository = Depends(get_room_repository),
) -> list[RoomResponse]:
    return [RoomResponse(id=room.id, description=room.description) for room in repository.get_all()]


@router.get(
    "/customers",
    response_model=list[CustomerResponse],
    status_code=status.HTTP_200_OK,
)
async def list_customers(
    repository: CustomerRepository = Depends(get_customer_repository),
) -> list[CustomerResponse]:
    return [
        CustomerResponse(id=customer.id, name=customer.name, email=customer.email)
        for customer in repository.get_all()
    ]


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health(request: Request) -> HealthResponse:
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return HealthResponse(
        status="ok",
        app_name=settings.app_name,
        version=settings.app_version,
    )
