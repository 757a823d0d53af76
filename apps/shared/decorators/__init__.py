"""
Shared decorators.

- Database error handling
- Database availability check
"""

from apps.shared.decorators.database import ensure_database_available
from apps.shared.decorators.database import handle_db_errors

__all__ = [
    'ensure_database_available',
    'handle_db_errors',
]
