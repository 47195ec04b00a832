"""API route handlers."""

from .confessions import router as confessions_router
from .matrimony import router as matrimony_router
from .schedule import router as schedule_router
from .alerts import router as alerts_router
