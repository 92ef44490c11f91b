from dataclasses import dataclass, field
from typing import Dict

from app.domain.models.address import NormalizedAddress


@dataclass
class LookupResult:
    """Outcome of one address race: the winner and who dropped out before it."""

    address: NormalizedAddress
    elapsed_ms: float
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def provider(self) -> str:
        return self.address.source
