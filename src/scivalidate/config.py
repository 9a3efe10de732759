"""Configuration schema for validation suite files.

A suite file is YAML describing the report to write and the entries to run.
Each entry names a registered validator type, the CSV file and columns that
hold the expected and found values, optional chart labels and the
validator's thresholds::

    name: Thermal model validation
    report: report.md
    entries:
      - title: Zone temperature
        description: Simulated against measured zone temperature.
        type: series
        data:
          file: data/zone.csv
          expected: 0
          found: measured
        labels:
          x_label: time step
          y_label: Zone Temperature
          y_units: C
        settings:
          allowed_root_mean_squared_error: 1.0

Relative paths are resolved against the directory of the YAML file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

# Import validators to trigger registration
import scivalidate.validators  # noqa: F401
from scivalidate.core.registry import ValidatorRegistry
from scivalidate.exceptions import ConfigError, ParseError
from scivalidate.ingest import from_csv
from scivalidate.suite import Suite
from scivalidate.validators import ChartLabels

logger = logging.getLogger(__name__)


class DataSource(BaseModel):
    """Where an entry's expected and found values come from.

    Attributes
    ----------
    file : Path
        CSV file holding both columns.
    expected : int or str
        Column of the reference values (position or header name).
    found : int or str
        Column of the computed values.
    delimiter : str
        Field separator. Default ",".
    header : bool
        Whether the first row holds column names. Default True.
    """

    file: Path
    expected: int | str
    found: int | str
    delimiter: str = ","
    header: bool = True

    @field_validator("file", mode="before")
    @classmethod
    def resolve_path(cls, v: str | Path) -> Path:
        """Convert string paths to Path objects."""
        return Path(v)

    def load(self):
        """Read the expected and found columns."""
        expected, found = from_csv(
            self.file,
            [self.expected, self.found],
            delimiter=self.delimiter,
            header=self.header,
        )
        return expected, found


class EntryConfig(BaseModel):
    """Configuration of one suite entry.

    Attributes
    ----------
    title : str
        Heading of the entry in the report.
    description : str, optional
        Markdown shown under the heading.
    type : str
        Registered validator type (e.g. "series", "scatter").
    data : DataSource
        Input columns.
    labels : ChartLabels
        Chart metadata.
    settings : dict
        Validator thresholds, checked against the validator's settings model.
    """

    title: str
    description: str | None = None
    type: str
    data: DataSource
    labels: ChartLabels = Field(default_factory=ChartLabels)
    settings: dict[str, Any] = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def check_registered(cls, v: str) -> str:
        """Reject validator types that are not registered."""
        if not ValidatorRegistry.is_registered(v):
            available = ", ".join(ValidatorRegistry.list_available())
            raise ValueError(f"Unknown validator type: '{v}'. Available: {available}")
        return v.lower()

    @field_validator("settings", "labels", mode="before")
    @classmethod
    def none_to_default(cls, v: Any) -> Any:
        return {} if v is None else v

    @model_validator(mode="after")
    def check_settings(self) -> "EntryConfig":
        """Validate ``settings`` against the validator's settings model."""
        settings_class = ValidatorRegistry.get(self.type).settings_class
        if settings_class is None:
            if self.settings:
                raise ValueError(f"Validator type '{self.type}' takes no settings")
        else:
            try:
                settings_class(**self.settings)
            except ValidationError as e:
                raise ValueError(f"Invalid settings for '{self.type}' entry: {e}") from e
        return self


class SuiteConfig(BaseModel):
    """Schema for validation suite YAML files.

    Attributes
    ----------
    name : str
        Suite name, used as the report title.
    report : Path
        Report file to write. Default "report.md".
    report_data_dir : Path, optional
        Directory for supporting report files.
    entries : list[EntryConfig]
        Entries in execution order.

    Examples
    --------
    >>> config = SuiteConfig.from_yaml("suite.yaml")
    >>> suite = config.build_suite()
    >>> result = suite.run()
    """

    name: str
    report: Path = Path("report.md")
    report_data_dir: Path | None = None
    entries: list[EntryConfig] = Field(default_factory=list)
    source_path: Path | None = Field(default=None, exclude=True)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "SuiteConfig":
        """Load suite config from YAML file.

        Raises
        ------
        FileNotFoundError
            If the config file doesn't exist.
        ConfigError
            If the file is not a YAML mapping.
        ValidationError
            If the config is invalid.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Suite config not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Suite config must be a mapping: {path}")

        # Resolve relative paths relative to the config file location
        config_dir = path.parent.resolve()
        for key in ("report", "report_data_dir"):
            if data.get(key) is not None and not Path(data[key]).is_absolute():
                data[key] = str(config_dir / data[key])
        if "report" not in data:
            data["report"] = str(config_dir / "report.md")
        for entry in data.get("entries") or []:
            source = entry.get("data") if isinstance(entry, dict) else None
            if isinstance(source, dict) and "file" in source:
                file_path = Path(source["file"])
                if not file_path.is_absolute():
                    source["file"] = str(config_dir / file_path)

        config = cls(**data)
        config.source_path = path.resolve()
        return config

    def to_yaml(self, path: Path | str) -> None:
        """Save suite config to YAML file."""
        path = Path(path)
        data = self.model_dump(mode="json")
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def validate_config(self) -> list[str]:
        """Check that every data file can be read.

        Returns
        -------
        list[str]
            Problems found (empty if the suite is ready to run).
        """
        errors = []
        if not self.entries:
            errors.append("Suite has no entries")
        for entry in self.entries:
            try:
                expected, found = entry.data.load()
            except ParseError as e:
                errors.append(f"{entry.title}: {e}")
                continue
            if expected.size != found.size:
                errors.append(
                    f"{entry.title}: expected and found columns have different "
                    f"lengths ({expected.size} vs {found.size})"
                )
        return errors

    def build_suite(self) -> Suite:
        """Load all data and return a populated :class:`Suite`.

        Raises
        ------
        ParseError
            If a data file cannot be read.
        """
        suite = Suite(self.report, title=self.name, report_data_dir=self.report_data_dir)
        for entry in self.entries:
            expected, found = entry.data.load()
            validator = ValidatorRegistry.create(
                entry.type,
                expected,
                found,
                settings=entry.settings,
                labels=entry.labels.model_dump(),
            )
            suite.push(validator, title=entry.title, description=entry.description)
        logger.info(f"Built suite '{self.name}' with {len(suite)} entries")
        return suite


def generate_suite_template(name: str) -> str:
    """Generate a template suite.yaml file.

    Parameters
    ----------
    name : str
        Name of the validation suite.

    Returns
    -------
    str
        YAML template content.
    """
    return f"""\
# Validation suite: {name}
#
# Run with:  scivalidate run -f suite.yaml

name: "{name}"

# Markdown report to write (relative to this file)
report: "report.md"

# Directory for supporting report files (defaults to the report's directory)
# report_data_dir: "report_data"

entries:
  # Time series: fails when RMSE or |MBE| exceed the allowed values
  - title: "Time series comparison"
    description: |
      Describe what is being compared and where the reference data come from.
    type: series
    data:
      file: "data/series.csv"
      expected: 0          # column position or header name
      found: 1
    labels:
      x_label: "time step"
      y_label: "Value"
      # y_units: "C"
    settings:
      allowed_root_mean_squared_error: null
      allowed_mean_bias_error: null

  # Scatter: fits found = intercept + slope * expected
  # - title: "Scatter comparison"
  #   type: scatter
  #   data:
  #     file: "data/scatter.csv"
  #     expected: "expected"
  #     found: "found"
  #   settings:
  #     min_r_squared: 0.9
  #     allowed_slope_delta: 0.1
  #     allowed_intercept_delta: 0.5
"""
