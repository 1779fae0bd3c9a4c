"""Page of query results with the metadata list endpoints report."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    content: list[T] = field(default_factory=list)
    total_elements: int = 0
    page_number: int = 0
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_elements / self.page_size)

    @property
    def first(self) -> bool:
        return self.page_number == 0

    @property
    def last(self) -> bool:
        # an empty result is a single page that is both first and last
        return self.page_number >= self.total_pages - 1

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size
