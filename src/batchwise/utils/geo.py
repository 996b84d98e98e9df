"""Coordinate and map tile value types."""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class NormaliseMode(IntEnum):
    """Height normalisation strategy for tile data."""
    OFF = 0
    REGULAR = 1
    SMART = 2
    SMART_WINDOW = 3
    FIXED = 4


class TileCoords(BaseModel):
    """Slippy-map tile address."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: int
    y: int
    z: NonNegativeInt


class LatLng(BaseModel):
    """Geographic position in degrees."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: Annotated[float, Field(ge=-90.0, le=90.0)]
    longitude: Annotated[float, Field(ge=-180.0, le=180.0)]


class LatLngZoom(LatLng):
    zoom: Annotated[float, Field(ge=0.0)]
