"""Pydantic schemas documenting chip lookup responses."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ChipNotFoundResponse(BaseModel):
    """Body returned when a chip id is not in the catalog."""

    error: str = Field(..., description="Always 'Chip not found'.")
    requested: str = Field(..., description="The chip id from the request path.")
    available: List[str] = Field(
        ..., description="Every valid chip id, in the order of the configuration file."
    )
