import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _expand(v: str) -> str:
    return os.path.expandvars(os.path.expanduser(v))


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- GRAPH INPUTS ---------------------


class SourceModel(BaseModel):
    """GeoJSON FeatureCollection to build the graph from."""

    model_config = ConfigDict(extra="forbid")
    file: str
    oneway_key: str = "oneway"

    @field_validator("file")
    @classmethod
    def _expand_file(cls, v: str) -> str:
        return _expand(v)


class BuilderModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    lookup: Literal["hash", "linear"] = "hash"
    keep_edges: bool = True


class SnapshotModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file: str
    fmt: Literal["json", "pickle"] = "json"
    layout: Literal["nodes", "network"] = "network"
    must_exist: bool = False  # False => build from source and write the snapshot

    @field_validator("file")
    @classmethod
    def _expand_file(cls, v: str) -> str:
        return _expand(v)


# ----------------- SEARCH ---------------------


class SearchDiscoveryModel(BaseModel):
    """Visited-at-discovery A*, stops once the goal is discovered."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["discovery"] = "discovery"
    metric: Literal["reference", "parametric"] = "reference"


class SearchOptimalModel(BaseModel):
    """Textbook A* with re-opening; strictly optimal, may relax more edges."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["optimal"] = "optimal"
    metric: Literal["reference", "parametric"] = "reference"


SearchUnion = Annotated[
    SearchDiscoveryModel | SearchOptimalModel,
    Field(discriminator="kind"),
]


# ------------------------------------------------------------------


class AppModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "map-route"
    run_id: str = "local"
    source: SourceModel | None = None
    builder: BuilderModel = Field(default_factory=BuilderModel)
    snapshot: SnapshotModel | None = None
    search: SearchUnion = Field(default_factory=SearchDiscoveryModel)
    log: LogModel = Field(default_factory=LogModel)
