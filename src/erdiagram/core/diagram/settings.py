"""Typed settings for the diagram engine, read from the ``diagram`` config section."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Type, TypeVar

from erdiagram.utils.config import Config, get_config

S = TypeVar("S")

_SCALARS = {"int": int, "float": float}


def _from_dict(cls: Type[S], data: Optional[Dict[str, Any]]) -> S:
    known = {f.name: _SCALARS[str(f.type)] for f in fields(cls)}
    kwargs = {}
    for key, value in (data or {}).items():
        if key in known:
            kwargs[key] = known[key](value)
    return cls(**kwargs)


@dataclass(frozen=True)
class NodeSettings:
    """Table box sizing."""

    header_height: float = 36
    row_height: float = 26
    min_width: float = 260
    char_width: float = 8
    width_padding: float = 64
    height_padding: float = 8
    primary_key_bonus: int = 5

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> NodeSettings:
        return _from_dict(cls, data)

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> NodeSettings:
        return cls.from_dict((config or get_config()).section("diagram.node"))


@dataclass(frozen=True)
class LayoutSettings:
    """Separation constants for the layered and grid placements."""

    node_sep: float = 96
    rank_sep: float = 190
    edge_sep: float = 44
    ordering_passes: int = 24
    isolated_columns: int = 3
    isolated_column_gap: float = 180
    isolated_row_pitch: float = 220
    isolated_row_gap: float = 40
    isolated_top_gap: float = 120

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> LayoutSettings:
        return _from_dict(cls, data)

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> LayoutSettings:
        return cls.from_dict((config or get_config()).section("diagram.layout"))


@dataclass(frozen=True)
class RoutingSettings:
    """Orthogonal routing and path smoothing constants."""

    stub: float = 24
    arrow_tip: float = 8
    outer_gap: float = 70
    obstacle_padding: float = 12
    corridor_margin: float = 280
    bias_step: float = 28
    jitter_step: float = 8
    intersection_penalty: float = 7000
    bend_penalty: float = 22
    corner_radius: float = 10
    cache_size: int = 2048

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> RoutingSettings:
        return _from_dict(cls, data)

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> RoutingSettings:
        return cls.from_dict((config or get_config()).section("diagram.routing"))


@dataclass(frozen=True)
class ViewportSettings:
    """Camera framing constants."""

    focus_threshold: int = 8
    fit_padding: float = 0.26
    duration_ms: int = 260
    min_comfortable_zoom: float = 0.72
    min_zoom: float = 0.5
    max_zoom: float = 2.0
    canvas_width: float = 1280
    canvas_height: float = 800

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> ViewportSettings:
        return _from_dict(cls, data)

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> ViewportSettings:
        return cls.from_dict((config or get_config()).section("diagram.viewport"))
