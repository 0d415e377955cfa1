from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from crpt.exceptions import InvalidArgumentError


def _drop_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(v) for v in value]
    return value


@dataclass(frozen=True)
class DocumentId:
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise InvalidArgumentError("DocumentId value must be a non-empty string")

    def __str__(self) -> str:
        return self.value


@dataclass
class Product:
    certificate_document: Optional[str] = None
    certificate_document_date: Optional[str] = None
    certificate_document_number: Optional[str] = None
    owner_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[str] = None
    tnved_code: Optional[str] = None
    uit_code: Optional[str] = None
    uitu_code: Optional[str] = None


@dataclass
class Document:
    participant_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[str] = None
    production_type: Optional[str] = None
    products: List[Product] = field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        """
        Build the JSON-ready dict sent to the remote API.

        Fields that are None are omitted rather than emitted as null.

        :return: Dict with snake_case keys mirroring the dataclass fields
        """
        if self.products is None:
            raise InvalidArgumentError("products must not be None")
        return _drop_none(asdict(self))
