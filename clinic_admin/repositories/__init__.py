"""
Repository Layer Package.

Data-access abstractions over the Supabase directory tables.  Services
never call ``gateway.supabase.table(...)`` directly.

Usage:
    from clinic_admin.repositories.user_repository import UserRepository
"""

from clinic_admin.repositories.base_repository import BaseRepository
from clinic_admin.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
]
