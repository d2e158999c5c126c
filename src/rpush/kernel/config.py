"""Simulation configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SimConfig(BaseModel):
    """Configuration shared by a design and its clock."""

    fifo_depth: int = Field(default=2, ge=1)
    trace: bool = False
    validate_elements: bool = True
