"""
Pydantic models for hunt results
"""

from typing import List
from pydantic import BaseModel, Field, field_validator

class HuntStats(BaseModel):
    files_total: int = Field(..., ge=0)
    keys_total: int = Field(..., ge=0)
    unused_keys_count: int = Field(..., ge=0)
    duration: float = Field(..., ge=0, description="Seconds")

    def formatted_duration(self) -> str:
        """``512ms`` below one second, ``1.25s`` otherwise"""
        millis = int(self.duration * 1000)
        if millis < 1000:
            return f"{millis}ms"
        return f"{millis / 1000:.2f}s"

class HuntReport(BaseModel):
    translation_path: str
    source_dirs: List[str]
    unused_keys: List[str] = []
    cleared: bool = False
    stats: HuntStats

    @field_validator('unused_keys')
    @classmethod
    def sort_keys(cls, v):
        return sorted(v)

    @property
    def has_unused(self) -> bool:
        return bool(self.unused_keys)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2) + "\n"
