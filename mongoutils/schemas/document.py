from pydantic import BaseModel, ConfigDict
from typing import List, Dict, Any

from mongoutils.utils.query_params import SortSpec


class SortDirective(BaseModel):
    field: str
    descending: bool

    @classmethod
    def from_spec(cls, spec: SortSpec) -> "SortDirective":
        return cls(field=spec.field, descending=spec.descending)


class DocumentResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str


class DocumentListResponse(BaseModel):
    collection: str
    count: int
    total: int
    limit: int
    sort: List[SortDirective]
    items: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    ok: bool
    database: str
