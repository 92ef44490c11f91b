from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class NormalizedAddress:
    """Provider independent address, tagged with the provider it came from."""

    postal_code: str
    city: str
    state: str
    street: str
    neighborhood: str
    source: str

    def describe(self) -> str:
        """Renders the one-line human readable summary of the address."""
        return (
            f"Fonte {self.source} >>> CEP:{self.postal_code}, "
            f"Cidade:{self.city}-{self.state}, "
            f"Logradouro:{self.street} - Bairro:{self.neighborhood}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the address, including its description."""
        data = asdict(self)
        data["description"] = self.describe()
        return data

    def __str__(self) -> str:
        return self.describe()
