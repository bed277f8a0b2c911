from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pgen.models.enums import DeclarationKind


class Declaration(BaseModel):
    """One top-level document entry, classified but not yet validated.

    ``attributes`` keeps the entry's mapping in declaration order, including
    the leading ``type`` discriminator.
    """

    name: str
    kind: DeclarationKind
    position: int = Field(ge=0)
    attributes: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def body(self) -> list[tuple[str, Any]]:
        """Attributes after the ``type`` discriminator, in declaration order."""
        return list(self.attributes.items())[1:]
