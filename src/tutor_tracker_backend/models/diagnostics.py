'''

'''
from typing import Optional
from pydantic import BaseModel, Field, computed_field

class TableCheck(BaseModel):
    table: str
    ok: bool
    records_found: int = 0
    error: Optional[str] = None

class AirtableDiagnostics(BaseModel):
    """Result of the configuration check and the per-table connection test."""
    configured: bool
    missing_settings: list[str] = Field(default_factory=list)
    base_id: Optional[str] = None
    tables: list[TableCheck] = Field(default_factory=list)

    @computed_field
    @property
    def ok(self) -> bool:
        return self.configured and all(check.ok for check in self.tables)
