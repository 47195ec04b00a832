"""Business logic services."""

from .confession_service import ConfessionService
from .matrimony_service import MatrimonyService
from .schedule_service import ScheduleService
from .alert_service import AlertService
