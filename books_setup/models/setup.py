from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TableStatus(str, Enum):
    EXISTS = "exists"
    CREATED = "created"
    MANUAL_REQUIRED = "manual_required"
    FAILED = "failed"


class UserStatus(str, Enum):
    EXISTS = "exists"
    CREATED = "created"
    FAILED = "failed"


class TableOutcome(BaseModel):
    table_name: str
    status: TableStatus
    sql: Optional[str] = Field(None, description="DDL to run by hand when status is manual_required")
    error: Optional[str] = None


class UserOutcome(BaseModel):
    username: str
    role: str
    status: UserStatus
    error: Optional[str] = None


class SetupReport(BaseModel):
    tables: list[TableOutcome] = Field(default_factory=list)
    users: list[UserOutcome] = Field(default_factory=list)
    aborted: bool = False
    error: Optional[str] = None

    @property
    def created_count(self) -> int:
        return sum(1 for u in self.users if u.status == UserStatus.CREATED)

    @property
    def existing_count(self) -> int:
        return sum(1 for u in self.users if u.status == UserStatus.EXISTS)

    @property
    def failed_count(self) -> int:
        return sum(1 for u in self.users if u.status == UserStatus.FAILED)

    @property
    def manual_sql(self) -> list[str]:
        """DDL statements an operator still has to apply by hand, in table order."""

        return [t.sql for t in self.tables if t.status == TableStatus.MANUAL_REQUIRED and t.sql]
