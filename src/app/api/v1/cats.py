"""
Cat endpoints.

Routes map one-to-one onto CatService calls. Domain errors are not caught
here; the handlers in error_handlers.py turn them into 400 plain-text responses.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query, Response, status

from app.core.dependencies import get_cat_service
from app.exceptions.base import InvalidValueError, NotFoundError
from app.models.cat import Cat
from app.schemas.cat import CatDto, CatRequest
from app.services.cat_service import MAX_TOP, CatService

router = APIRouter(prefix="/cat", tags=["cat"])

# ids are BIGINT-range integers; anything outside can only be a bad request
MIN_ID, MAX_ID = -MAX_TOP - 1, MAX_TOP


def _to_entity(payload: CatRequest) -> Cat:
    return Cat.builder().name(payload.name).age(payload.age).build()


@router.post("/create", response_model=CatDto, status_code=status.HTTP_201_CREATED)
async def create_cat(
    payload: CatRequest,
    service: CatService = Depends(get_cat_service),
) -> Cat:
    return await service.create(_to_entity(payload))


@router.put("/update/{cat_id}", response_model=CatDto)
async def update_cat(
    payload: CatRequest,
    cat_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    service: CatService = Depends(get_cat_service),
) -> Cat:
    return await service.update_by_id(cat_id, _to_entity(payload))


@router.delete("/delete/{cat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cat(
    cat_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    service: CatService = Depends(get_cat_service),
) -> Response:
    await service.delete_by_id(cat_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Fixed paths are declared before /{cat_id} so "top3" is never parsed as an id.

@router.get("/top3", response_model=list[CatDto])
async def get_top_three(
    field_name: str = Query(..., alias="fieldName"),
    service: CatService = Depends(get_cat_service),
) -> list[Cat]:
    return await service.find_top_three(field_name)


@router.get("/youngest", response_model=CatDto)
async def get_youngest(service: CatService = Depends(get_cat_service)) -> Cat:
    return await service.find_first_by_age()


@router.get("/total", response_model=int)
async def get_total(
    field_name: str = Query(..., alias="fieldName"),
    service: CatService = Depends(get_cat_service),
) -> int:
    return await service.find_total_by(field_name)


@router.get("", response_model=list[CatDto])
@router.get("/", response_model=list[CatDto], include_in_schema=False)
async def list_cats(
    top: int | None = Query(None),
    field_name: str | None = Query(None, alias="fieldName"),
    service: CatService = Depends(get_cat_service),
) -> list[Cat]:
    """
    Without query parameters: every cat.
    With both `top` and `fieldName`: the first `top` cats ordered by `fieldName`.
    Only one of them is a missing-parameter error, reported for `top` first.
    """
    if top is None and field_name is None:
        return await service.find_all()
    if top is None:
        raise InvalidValueError.missing("top")
    if field_name is None:
        raise InvalidValueError.missing("fieldName")
    return await service.find_top_by_field(top, field_name)


@router.get("/{cat_id}", response_model=CatDto)
async def get_cat(
    cat_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    service: CatService = Depends(get_cat_service),
) -> Cat:
    cat = await service.find_by_id(cat_id)
    if cat is None:
        raise NotFoundError(f"Cat with id = '{cat_id}' is not found")
    return cat
