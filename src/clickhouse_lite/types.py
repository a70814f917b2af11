from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class MetaField(BaseModel):
    """Column descriptor as reported by the server."""

    name: str
    type: str


class QueryStatistics(BaseModel):
    bytes_read: int
    # wall time in seconds
    elapsed: float
    # rows scanned by the engine, may exceed QueryResult.rows after aggregation
    rows_read: int


class QueryResult(BaseModel, Generic[T]):
    """Decoded body of a `FORMAT JSON` query.

    `data` keeps the order the server returned. `meta` describes the columns
    independently of the row type the caller decoded into.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: list[T] = Field(default_factory=list)
    meta: list[MetaField] = Field(default_factory=list)
    rows: int
    statistics: QueryStatistics

    @property
    def column_names(self) -> list[str]:
        return [field.name for field in self.meta]


# Raw shape of the response before rows are projected into the caller's type
class ResponseEnvelope(BaseModel):
    data: list[dict[str, Any]]
    meta: list[MetaField]
    rows: int = Field(ge=0)
    statistics: QueryStatistics
