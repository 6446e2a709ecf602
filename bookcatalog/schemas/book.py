from pydantic import BaseModel, ConfigDict, Field


class BookInput(BaseModel):
    author: str | None = None
    title: str | None = None
    year: int | None = Field(None, ge=-(2**31), le=2**31 - 1)


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    author: str | None
    title: str | None
    year: int | None


class BookIdResponse(BaseModel):
    id: str


class BookFilter(BaseModel):
    """Optional sub-filters for a list query. Only one applies per call,
    chosen by precedence: ``ids``, then ``author``, then the year range."""

    model_config = ConfigDict(populate_by_name=True)

    ids: list[str] | None = None
    author: str | None = None
    start_date: str | None = Field(None, alias="startDate")
    end_date: str | None = Field(None, alias="endDate")


class BookFiltersInput(BaseModel):
    filter: BookFilter | None = None
    limit: int | None = Field(None, ge=0)
