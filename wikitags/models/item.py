# wikitags/models/item.py

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedItem:
    name: str
    id: int

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ValueError(f"item id must be >= 0, got {self.id}")
