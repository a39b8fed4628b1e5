"""
Response schemas and the JSON decoder.

Models follow the provider's current dataset schema; older variants of the
payload (``docs`` listings, ``source_code`` fields) are not accepted.
"""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, ValidationError, field_validator, model_validator

from .columns import to_columns, to_named_columns
from .errors import DecodeError


# A single data cell: number, text or null. Anything else fails decoding.
Cell = Union[StrictInt, StrictFloat, StrictStr, None]
Row = list[Cell]


class _Schema(BaseModel):
    model_config = ConfigDict(extra="ignore")


def _empty_if_null(model, value, info):
    # The provider sends null for missing text and flags; keep the field default
    if value is None:
        return model.model_fields[info.field_name].default
    return value


class _Tabular(_Schema):
    """Shared behaviour of responses carrying a data matrix."""

    column_names: list[str]
    data: list[Row]

    # URL the response was fetched from
    source_url: Optional[str] = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def check_row_width(self):
        if self.column_names:
            width = len(self.column_names)
            for i, row in enumerate(self.data):
                if len(row) != width:
                    raise ValueError(
                        f"row {i} has {len(row)} cells but there are {width} columns"
                    )
        return self

    def to_columns(self) -> list[list[Cell]]:
        """The data matrix as a list of columns."""
        return to_columns(self.data)

    def to_named_columns(self, keys: Sequence[str] | None = None) -> dict[str, list[Cell]]:
        """
        The data matrix as a mapping of column name to column.

        Keys default to the column names returned by the provider.
        """
        if keys is None:
            keys = self.column_names
        return to_named_columns(self.data, keys)


class _DatasetMeta(_Schema):
    """Descriptive fields of a dataset."""

    id: Optional[int] = None
    dataset_code: str = ""
    database_code: str = ""
    name: str = ""
    description: str = ""
    refreshed_at: Optional[str] = None
    newest_available_date: Optional[str] = None
    oldest_available_date: Optional[str] = None
    frequency: Optional[str] = None
    type: Optional[str] = None
    premium: bool = False
    limit: Optional[int] = None
    transform: Optional[str] = None
    column_index: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    collapse: Optional[str] = None
    order: Optional[str] = None
    database_id: Optional[int] = None

    @field_validator("dataset_code", "database_code", "name", "description", "premium", mode="before")
    @classmethod
    def null_to_empty(cls, value, info):
        return _empty_if_null(cls, value, info)


class Dataset(_DatasetMeta):
    """A dataset as listed by the provider."""

    column_names: list[str] = Field(default_factory=list)


class SymbolResponse(_Tabular, _DatasetMeta):
    """Response for a single symbol: dataset metadata plus rows."""


class SymbolsResponse(_Tabular):
    """Response for several symbols joined on date."""

    columns: list[str] = Field(default_factory=list)
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    frequency: Optional[str] = None


class ResponseMeta(_Schema):
    """Pagination details of a listing or search."""

    per_page: Optional[int] = None
    query: Optional[str] = None
    current_page: Optional[int] = None
    prev_page: Optional[int] = None
    total_pages: Optional[int] = None
    total_count: Optional[int] = None
    next_page: Optional[int] = None
    current_first_item: Optional[int] = None
    current_last_item: Optional[int] = None


class ListResponse(_Schema):
    """Datasets available from a source."""

    datasets: list[Dataset]
    meta: ResponseMeta = Field(default_factory=ResponseMeta)
    source_url: Optional[str] = Field(default=None, exclude=True)


class Source(_Schema):
    """A data source (publisher of datasets)."""

    id: Optional[int] = None
    code: str = ""
    datasets_count: Optional[int] = None
    description: str = ""
    name: str = ""
    host: Optional[str] = None
    premium: bool = False

    @field_validator("code", "description", "name", "premium", mode="before")
    @classmethod
    def null_to_empty(cls, value, info):
        return _empty_if_null(cls, value, info)


class SearchResponse(ListResponse):
    """Search results and the sources they come from."""

    sources: list[Source] = Field(default_factory=list)


ResponseT = TypeVar("ResponseT", bound=BaseModel)


def decode(raw: bytes, model: type[ResponseT], url: str | None = None) -> ResponseT:
    """
    Parse a JSON response into the given model.

    Raises DecodeError (with the raw body) on malformed JSON or schema mismatch.
    """
    try:
        response = model.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(raw, e, url=url) from e
    if hasattr(response, "source_url"):
        response.source_url = url
    return response
