"""World generation configuration models."""

from pydantic import BaseModel, Field, model_validator


class TerrainThresholds(BaseModel):
    """Elevation/moisture bands used by the terrain classifier."""

    deep_water_level: float = Field(default=0.30, description="Below this is deep water")
    shallow_water_level: float = Field(
        default=0.38, description="Below this is shallow water"
    )
    coast_level: float = Field(default=0.42, description="Below this is coast")
    mountain_elevation: float = Field(
        default=0.86, description="Above this (and dry enough) is mountains"
    )
    mountain_max_moisture: float = Field(
        default=0.75, description="Mountains require moisture below this"
    )
    highland_elevation: float = Field(
        default=0.68, description="Above this is hills or forest"
    )
    highland_forest_moisture: float = Field(
        default=0.55, description="Highland moisture above this is forest"
    )
    midland_elevation: float = Field(
        default=0.45, description="Above this is plains or forest"
    )
    midland_forest_moisture: float = Field(
        default=0.70, description="Midland moisture above this is forest"
    )
    lowland_forest_moisture: float = Field(
        default=0.65, description="Lowland moisture above this is forest"
    )

    @model_validator(mode="after")
    def _check_water_bands(self) -> "TerrainThresholds":
        if not self.deep_water_level <= self.shallow_water_level <= self.coast_level:
            raise ValueError(
                "Water levels must satisfy deep_water_level <= shallow_water_level "
                "<= coast_level"
            )
        return self


class NoiseConfig(BaseModel):
    """Elevation and moisture field shaping."""

    elevation_scale: float = Field(
        default=0.0036, description="Elevation noise frequency per tile"
    )
    moisture_scale: float = Field(
        default=0.0044, description="Moisture noise frequency per tile"
    )
    moisture_offset: float = Field(
        default=100.0, description="Sample offset decorrelating moisture from elevation"
    )
    elevation_weight: float = Field(default=0.75, description="Weight of raw noise")
    continent_weight: float = Field(default=0.30, description="Weight of continent mask")
    elevation_bias: float = Field(
        default=-0.35, description="Negative = more water, positive = more land"
    )
    continent_inner_radius: float = Field(
        default=0.9, description="Normalized radius where the continent mask starts to fall"
    )
    continent_outer_radius: float = Field(
        default=1.4, description="Normalized radius where the continent mask reaches 0"
    )


class RiverConfig(BaseModel):
    """River source selection and walk scoring."""

    enabled: bool = Field(default=True, description="Carve rivers after classification")
    source_min_elevation: float = Field(
        default=0.65, description="Sources must be higher than this"
    )
    source_min_moisture: float = Field(
        default=0.55, description="Sources must be wetter than this"
    )
    tiles_per_river: int = Field(default=300, description="Map area per river")
    min_rivers: int = Field(default=4, description="Minimum number of rivers")
    max_rivers: int = Field(default=12, description="Maximum number of rivers")
    distance_weight: float = Field(
        default=2.0, description="Score weight of distance to water"
    )
    downhill_weight: float = Field(default=1.0, description="Score reward for descending")
    same_direction_penalty: float = Field(
        default=0.6, description="Penalty for repeating the previous step direction"
    )
    jitter: float = Field(default=0.4, description="Maximum random score wobble")


class SettlementConfig(BaseModel):
    """Settlement placement parameters."""

    count: int = Field(default=15, description="Target number of settlements")
    min_distance: int = Field(
        default=5, description="Minimum Euclidean spacing between settlements"
    )
    attempts_per_settlement: int = Field(
        default=40, description="Sampling budget per requested settlement"
    )


class ResourceConfig(BaseModel):
    """Resource node placement parameters."""

    count: int = Field(default=25, description="Target number of resource nodes")
    border_margin: int = Field(
        default=2, description="Nodes keep this many tiles clear of the map edge"
    )
    min_settlement_distance: int = Field(
        default=3, description="Minimum spacing from any settlement"
    )
    min_resource_distance: int = Field(
        default=5, description="Minimum spacing from other resource nodes"
    )
    attempts_per_resource: int = Field(
        default=120, description="Sampling budget per requested node"
    )
    richness_min: float = Field(default=0.4, description="Lowest richness drawn")
    richness_max: float = Field(default=1.0, description="Highest richness drawn")


class WorldGenConfig(BaseModel):
    """Complete world generation configuration."""

    seed: int | None = Field(
        default=None, description="Random seed (None = derived from the clock)"
    )
    width: int = Field(default=2000, gt=0, description="World width in tiles")
    height: int = Field(default=1000, gt=0, description="World height in tiles")

    thresholds: TerrainThresholds = Field(default_factory=TerrainThresholds)
    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    rivers: RiverConfig = Field(default_factory=RiverConfig)
    settlements: SettlementConfig = Field(default_factory=SettlementConfig)
    resources: ResourceConfig = Field(default_factory=ResourceConfig)

    seeded_resource_types: bool = Field(
        default=True,
        description="Draw resource types from the seeded stream (False = unseeded)",
    )
    seeded_river_jitter: bool = Field(
        default=True,
        description="Draw river wobble from the seeded stream (False = unseeded)",
    )
