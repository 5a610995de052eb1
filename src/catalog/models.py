from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class Dataset:
    """One input file of the report and the headers it must carry."""

    id: str
    name: str
    required_columns: Tuple[str, ...]

    def missing_columns(self, present: Iterable[str]) -> List[str]:
        present_set = {str(name).strip() for name in present}
        return [name for name in self.required_columns if name not in present_set]

    def require_columns(self, present: Iterable[str]) -> None:
        """Raise ValueError when any required column is absent from `present`."""
        missing = self.missing_columns(present)
        if missing:
            raise ValueError(
                f"Source {self.id!r} ({self.name}) is missing required columns: {missing}",
            )
