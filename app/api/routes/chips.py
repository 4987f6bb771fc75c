from typing import Annotated, Any

from fastapi import APIRouter, Depends

from app.api.dependencies import get_chip_catalog
from app.schemas.chips import ChipNotFoundResponse
from app.services.chip_catalog import ChipCatalog

router = APIRouter(tags=["Chips"])

CatalogDep = Annotated[ChipCatalog, Depends(get_chip_catalog)]


@router.get("/chips", response_model=None)
def list_chips(catalog: CatalogDep) -> dict[str, Any]:
    """Return every chip configuration, keyed by chip id, in file order."""
    return catalog.as_dict()


@router.get(
    "/chips/{chip_id}",
    response_model=None,
    responses={404: {"model": ChipNotFoundResponse, "description": "Unknown chip id"}},
)
def get_chip(chip_id: str, catalog: CatalogDep) -> Any:
    """Return a single chip configuration.

    Args:
        chip_id: Key of the record in the chip configuration file.

    Returns:
        The stored record, unmodified.

    Raises:
        NotFoundAppError: Rendered as 404 with the requested id and the
            list of available ids.
    """
    return catalog.get_chip(chip_id)
