"""
Plain data models passed into and out of the scheduler
"""
from .show import Show, ShowStatus
from .cast_member import CastMember, Gender, MemberStatus
from .role import RoleCatalog, OFF, DEFAULT_ROLES, DEFAULT_FEMALE_ONLY_ROLES
from .assignment import Assignment

__all__ = [
    'Show',
    'ShowStatus',
    'CastMember',
    'Gender',
    'MemberStatus',
    'RoleCatalog',
    'OFF',
    'DEFAULT_ROLES',
    'DEFAULT_FEMALE_ONLY_ROLES',
    'Assignment',
]
