from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Order(BaseModel):
    """
    An incoming order. Fields beyond the ones the service touches are accepted
    and stored as-is.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    status: Optional[str] = None
    source: Optional[str] = None
    product: Optional[str] = None

    def to_document(self) -> dict:
        """Serialise for insertion; an unset id is left for the store to assign."""
        return self.model_dump(by_alias=True, exclude_none=True)
