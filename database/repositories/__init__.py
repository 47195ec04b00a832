from database.repositories.base import BaseRepository
from database.repositories.profile import ProfileRepository
from database.repositories.match import MatchRepository, build_match_id
from database.repositories.confession import ConfessionRepository
from database.repositories.schedule import ScheduleRepository
from database.repositories.kv import SqlKeyValueStore

__all__ = [
    'BaseRepository',
    'ProfileRepository',
    'MatchRepository',
    'build_match_id',
    'ConfessionRepository',
    'ScheduleRepository',
    'SqlKeyValueStore',
]
