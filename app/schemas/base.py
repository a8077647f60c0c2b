"""
Shared pydantic base for request/response schemas.

Python attributes are snake_case; the JSON wire format is camelCase
(`numEmployees`, `logoUrl`, `companyHandle`), which is also the field naming
the repositories use.
"""

from typing import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema accepting and emitting camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictCamelModel(CamelModel):
    """Request schema that rejects unknown keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


_http_url = TypeAdapter(HttpUrl)


def _check_http_url(v: str) -> str:
    # HttpUrl normalizes (e.g. adds a trailing slash); store what the client sent
    try:
        _http_url.validate_python(v)
    except ValidationError:
        raise ValueError("must be a valid http(s) URL")
    return v


# A string that pydantic's HttpUrl accepts, kept as the original text
HttpUrlStr = Annotated[str, AfterValidator(_check_http_url)]
