"""Trade domain model, embedded in snapshots."""

from pydantic import BaseModel, ConfigDict, Field


class Trade(BaseModel):
    """Latest executed trade for a symbol."""

    price: float = Field(description="Executed trade price")
    size: int | float = Field(description="Trade size")
    timestamp: str = Field(description="Execution time as ISO-8601 string")

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> float:
        """Calculate trade value (price * size)."""
        return self.price * self.size
