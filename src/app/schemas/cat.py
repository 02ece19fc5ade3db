"""
Pydantic request/response schemas (DTOs) for the cat endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CatRequest(BaseModel):
    """
    Body of POST /cat/create and PUT /cat/update/{id}.

    An `id` in the body is accepted but ignored: creates get a fresh id and
    updates use the path id.
    """

    id: int | None = None
    name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=0)


class CatDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    age: int
