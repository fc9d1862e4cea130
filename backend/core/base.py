"""
core/base.py: Declarative Base and shared enums.

All ORM models import Base from here.
Enums used by more than one domain module live here to avoid circular imports.
"""

from enum import Enum
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class TaskStatus(str, Enum):
    """Display state of a maintenance task, derived on every read."""
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    SCHEDULED = "scheduled"
