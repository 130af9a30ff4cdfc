"""Pydantic models for the tile service wire format.

A tile on the wire is ``{x, y, z, value}``. The spawn index is assigned
by the client and never transmitted.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from hex2048.models.hex import DataHex, Hex


class HexData(BaseModel):
    x: int
    y: int
    z: int
    value: int = Field(gt=0)

    @model_validator(mode="after")
    def _check_plane(self) -> HexData:
        if self.x + self.y + self.z != 0:
            raise ValueError(f"x + y + z must be 0, got ({self.x}, {self.y}, {self.z})")
        return self

    def to_data_hex(self, index: int) -> DataHex:
        return DataHex(Hex(self.x, self.y, self.z), self.value, index)


HexDataList = TypeAdapter(List[HexData])
"""Validator for a whole board or spawn response."""
