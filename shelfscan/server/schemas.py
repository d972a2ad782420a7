from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlatformDetectionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    headers: list[str] = Field(
        ...,
        examples=[["Product Title", "Desc", "Price", "ASIN"]],
        description="Spreadsheet header row, 1 to 100 non-empty names.",
    )
    sample_data: list[list[Any]] = Field(
        default_factory=list,
        alias="sampleData",
        description="Up to 50 sample rows, one cell per header.",
    )
    language: str = Field(default="en", examples=["en"])
    user_id: str | None = Field(default=None, alias="userId")

    @model_validator(mode="before")
    @classmethod
    def _null_sample_data(cls, data: Any) -> Any:
        """Treat an explicit ``sampleData: null`` as no sample."""
        if isinstance(data, dict) and data.get("sampleData", []) is None:
            data = {**data, "sampleData": []}
        return data
