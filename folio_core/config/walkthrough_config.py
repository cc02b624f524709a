"""
Run configuration models for Folio.

A walkthrough config captures everything needed to reproduce a post's
strategy backtest: where the prices come from, which strategy and
parameters, and the execution assumptions. Configs are plain YAML files
validated with Pydantic.
"""

import datetime as dt
import re
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from folio_core.utils.constants import (
    DEFAULT_COST_BPS,
    DEFAULT_EXECUTION_DELAY,
    DEFAULT_RANDOM_STATE,
)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DataConfig(BaseModel):
    """
    Price data source.

    Attributes:
        source: CSV path or ticker symbol
        start_date: Start date in YYYY-MM-DD format
        end_date: End date in YYYY-MM-DD format
    """

    source: str = Field(description="CSV path or ticker symbol")
    start_date: str = Field(description="Start date in YYYY-MM-DD format")
    end_date: str = Field(description="End date in YYYY-MM-DD format")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def validate_date_format(cls, v: Any) -> str:
        """Validate date format is YYYY-MM-DD (unquoted YAML dates arrive as date objects)."""
        if isinstance(v, dt.date):
            v = v.isoformat()
        if not isinstance(v, str) or not _DATE_RE.match(v):
            raise ValueError(f"Date must be in YYYY-MM-DD format, got: {v}")
        return v

    @model_validator(mode="after")
    def validate_date_order(self) -> "DataConfig":
        if self.start_date >= self.end_date:
            raise ValueError(
                f"start_date ({self.start_date}) must be before end_date ({self.end_date})"
            )
        return self

    model_config = ConfigDict(extra="forbid")


class StrategyConfig(BaseModel):
    """
    Strategy selection.

    Attributes:
        name: Registered strategy name
        params: Strategy parameters merged over the strategy's defaults
    """

    name: Literal["ma_cross", "trend", "meanrev"] = Field(
        default="ma_cross",
        description="Registered strategy name",
    )
    params: Dict[str, Any] = Field(
        default_factory=dict,
        description="Strategy-specific parameters (e.g., windows, thresholds)",
    )

    model_config = ConfigDict(extra="forbid")


class BacktestConfig(BaseModel):
    """
    Execution assumptions.

    Attributes:
        cost_bps: Cost per unit of position change in basis points
        execution_delay: Bars between signal and position
    """

    cost_bps: float = Field(default=DEFAULT_COST_BPS, ge=0.0, le=1000.0)
    execution_delay: int = Field(default=DEFAULT_EXECUTION_DELAY, ge=1, le=20)

    model_config = ConfigDict(extra="forbid")


class ClusteringConfig(BaseModel):
    """
    K-means run on a CSV table.

    Attributes:
        n_clusters: Number of clusters
        features: Numeric columns to cluster on (empty = all numeric)
        standardize: Scale features to zero mean, unit variance first
        random_state: Seed
    """

    n_clusters: int = Field(default=3, ge=1, le=50)
    features: List[str] = Field(default_factory=list)
    standardize: bool = Field(default=True)
    random_state: Optional[int] = Field(default=DEFAULT_RANDOM_STATE)

    model_config = ConfigDict(extra="forbid")


class WalkthroughConfig(BaseModel):
    """
    Complete configuration of a strategy walkthrough.

    Example:
        >>> cfg = WalkthroughConfig(
        ...     name="SPY golden cross",
        ...     data=DataConfig(source="SPY", start_date="2015-01-01", end_date="2020-12-31"),
        ...     strategy=StrategyConfig(name="ma_cross", params={"fast_window": 50}),
        ... )
    """

    name: str = Field(description="Human-readable run name")
    data: DataConfig
    strategy: StrategyConfig = Field(default_factory=StrategyConfig)
    backtest: BacktestConfig = Field(default_factory=BacktestConfig)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be blank")
        return v.strip()

    model_config = ConfigDict(extra="forbid")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (for serialization)."""
        return self.model_dump()

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WalkthroughConfig":
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "WalkthroughConfig":
        return cls.model_validate_json(json_str)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "WalkthroughConfig":
        """
        Load a config from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML is not a mapping
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        return cls.from_dict(data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
