from .base import Base
from .matrimony import MatrimonyProfile, Match, MatchReport, ChatMessage
from .confession import Confession, ConfessionLike, ConfessionReport
from .schedule import ScheduleEntry, KeyValueEntry

__all__ = [
    'Base',
    'MatrimonyProfile',
    'Match',
    'MatchReport',
    'ChatMessage',
    'Confession',
    'ConfessionLike',
    'ConfessionReport',
    'ScheduleEntry',
    'KeyValueEntry',
]
