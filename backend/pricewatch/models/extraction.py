from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pricewatch.core.errors import PriceWatchError


@dataclass(frozen=True)
class ExtractionResult:
    title: str
    current_price: float


@dataclass(frozen=True)
class ExtractionFailure:
    kind: str
    reason: str
    url: str
    site: str | None = None
    selector: str | None = None

    @classmethod
    def from_error(cls, error: PriceWatchError, url: str) -> "ExtractionFailure":
        return cls(
            kind=error.kind,
            reason=error.reason,
            url=error.url or url,
            site=error.site,
            selector=error.selector,
        )


Extraction = Union[ExtractionResult, ExtractionFailure]
