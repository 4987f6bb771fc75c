"""Read-only chip configuration catalog.

The catalog is loaded once from ``chips.json`` when the application is built
and handed to request handlers through ``app.state``. Records are opaque JSON
values; the server only cares about their keys.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from app.core.errors import ConfigurationAppError, NotFoundAppError

logger = logging.getLogger(__name__)

CHIP_NOT_FOUND_MESSAGE = "Chip not found"


class ChipCatalog(Mapping[str, Any]):
    """Immutable mapping of chip id to configuration record.

    Iteration order is the order of the source file.
    """

    def __init__(self, chips: Mapping[str, Any], source: Path | None = None) -> None:
        self._chips: Mapping[str, Any] = MappingProxyType(dict(chips))
        self.source = source

    def __getitem__(self, chip_id: str) -> Any:
        return self._chips[chip_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._chips)

    def __len__(self) -> int:
        return len(self._chips)

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return f"ChipCatalog(size={len(self)}, source={self.source!s})"

    @property
    def ids(self) -> list[str]:
        return list(self._chips)

    def as_dict(self) -> dict[str, Any]:
        """Return the whole catalog as a plain dict, in file order."""
        return dict(self._chips)

    def get_chip(self, chip_id: str) -> Any:
        """Return the record for ``chip_id``.

        Any stored value counts as present, including ``null`` or ``false``.

        Raises:
            NotFoundAppError: If the id is not a key of the catalog.
        """
        if chip_id not in self._chips:
            logger.info(
                "chip.not_found",
                extra={"requested": chip_id, "available_count": len(self._chips)},
            )
            raise NotFoundAppError(
                code="chip_not_found",
                message=CHIP_NOT_FOUND_MESSAGE,
                details={"requested": chip_id, "available": self.ids},
            )
        return self._chips[chip_id]


def load_chip_catalog(path: Path | str) -> ChipCatalog:
    """Load and validate the chip configuration file.

    Args:
        path: Location of the JSON file.

    Returns:
        ChipCatalog built from the file's top-level object.

    Raises:
        ConfigurationAppError: If the file is missing, is not valid JSON, or
            its top level is not an object.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationAppError(
            code="chips_file_unreadable",
            message=f"Cannot read chip configuration file: {path}",
            details={"path": str(path), "hint": str(exc)},
        ) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationAppError(
            code="chips_file_invalid_json",
            message=f"Chip configuration file is not valid JSON: {path}",
            details={"path": str(path), "hint": f"line {exc.lineno}, column {exc.colno}: {exc.msg}"},
        ) from exc

    if not isinstance(data, dict):
        raise ConfigurationAppError(
            code="chips_file_not_object",
            message="Chip configuration must be a JSON object keyed by chip id",
            details={"path": str(path), "hint": f"top-level type is {type(data).__name__}"},
        )

    catalog = ChipCatalog(data, source=path)
    logger.info("catalog.loaded", extra={"chip_count": len(catalog), "source": str(path)})
    return catalog
