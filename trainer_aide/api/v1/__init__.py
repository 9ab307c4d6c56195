"""API v1 router aggregation."""

from fastapi import APIRouter

from trainer_aide.api.v1.endpoints import (
    ai_generation,
    ai_programs,
    availability,
    booking_requests,
    calendar,
    clients,
    exercises,
    health,
    sessions,
    stats,
    studio_services,
    templates,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])

api_router.include_router(studio_services.router, prefix="/services", tags=["services"])
api_router.include_router(calendar.router, prefix="/calendar/bookings", tags=["calendar"])
api_router.include_router(availability.router, prefix="/trainers", tags=["availability"])
api_router.include_router(booking_requests.router, prefix="/booking-requests", tags=["booking-requests"])

api_router.include_router(ai_programs.router, prefix="/ai-programs", tags=["ai-programs"])
api_router.include_router(ai_generation.router, prefix="/ai", tags=["ai"])
