"""
core/schemas.py: Core/general Pydantic schemas.
"""

from pydantic import BaseModel


class HealthCheck(BaseModel):
    status: str = "ok"
    version: str
    database: str
