"""Settings and per document type mappings applied to every new generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from repocatalog.domain.model import DocumentType

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class IndexSchema:
    mappings: Mapping[DocumentType, Mapping[str, object]]
    settings: Mapping[str, object] = field(default_factory=dict["str", "object"])

    def __post_init__(self) -> None:
        missing = [kind for kind in DocumentType if kind not in self.mappings]
        if missing:
            raise ValueError(f"Index schema has no mapping for: {', '.join(missing)}")

    def mapping_for(self, document_type: DocumentType) -> Mapping[str, object]:
        return self.mappings[document_type]

    @property
    def document_types(self) -> tuple[DocumentType, ...]:
        return tuple(DocumentType)
