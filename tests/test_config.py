"""Tests for suite configuration files (config.py)."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from scivalidate.config import DataSource, EntryConfig, SuiteConfig, generate_suite_template
from scivalidate.exceptions import ConfigError, ParseError
from scivalidate.suite import SuiteState
from scivalidate.validators import ScatterValidator, SeriesValidator

SERIES_CSV = "expected,found\n1,5\n2,6\n3,6\n"
SCATTER_CSV = "x,y\n0,0\n1,1\n2,2\n3,3\n"


def write_project(tmp_path, config: dict) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir(exist_ok=True)
    (data_dir / "series.csv").write_text(SERIES_CSV)
    (data_dir / "scatter.csv").write_text(SCATTER_CSV)
    path = tmp_path / "suite.yaml"
    path.write_text(yaml.safe_dump(config, sort_keys=False))
    return path


def basic_config(**overrides) -> dict:
    config = {
        "name": "Thermal model",
        "entries": [
            {
                "title": "Zone temperature",
                "description": "Simulated against measured.",
                "type": "series",
                "data": {"file": "data/series.csv", "expected": 0, "found": "found"},
                "labels": {"y_label": "Temperature", "y_units": "C"},
                "settings": {"allowed_root_mean_squared_error": 5.0},
            },
            {
                "title": "Scatter",
                "type": "scatter",
                "data": {"file": "data/scatter.csv", "expected": "x", "found": "y"},
                "settings": {"min_r_squared": 0.9},
            },
        ],
    }
    config.update(overrides)
    return config


class TestSuiteConfigLoading:
    """Tests for SuiteConfig.from_yaml."""

    def test_paths_resolved_relative_to_config(self, tmp_path):
        config = SuiteConfig.from_yaml(write_project(tmp_path, basic_config()))

        assert config.name == "Thermal model"
        assert config.report == tmp_path.resolve() / "report.md"
        assert config.entries[0].data.file == tmp_path.resolve() / "data" / "series.csv"
        assert config.source_path == (tmp_path / "suite.yaml").resolve()

    def test_explicit_report_path(self, tmp_path):
        path = write_project(
            tmp_path, basic_config(report="out/validation.md", report_data_dir="out/data")
        )
        config = SuiteConfig.from_yaml(path)
        assert config.report == tmp_path.resolve() / "out" / "validation.md"
        assert config.report_data_dir == tmp_path.resolve() / "out" / "data"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SuiteConfig.from_yaml(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "suite.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            SuiteConfig.from_yaml(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "suite.yaml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            SuiteConfig.from_yaml(path)

    def test_unknown_validator_type(self, tmp_path):
        config = basic_config()
        config["entries"][0]["type"] = "histogram"
        with pytest.raises(ValidationError, match="Unknown validator type"):
            SuiteConfig.from_yaml(write_project(tmp_path, config))

    def test_invalid_settings(self, tmp_path):
        config = basic_config()
        config["entries"][0]["settings"] = {"allowed_root_mean_squared_error": -1}
        with pytest.raises(ValidationError):
            SuiteConfig.from_yaml(write_project(tmp_path, config))

    def test_wrong_setting_type(self, tmp_path):
        config = basic_config()
        config["entries"][1]["settings"] = {"min_r_squared": "not a number"}
        with pytest.raises(ValidationError):
            SuiteConfig.from_yaml(write_project(tmp_path, config))

    def test_null_settings_and_labels(self, tmp_path):
        config = basic_config()
        config["entries"][0]["settings"] = None
        config["entries"][0]["labels"] = None
        loaded = SuiteConfig.from_yaml(write_project(tmp_path, config))
        assert loaded.entries[0].settings == {}
        assert loaded.entries[0].labels.y_label is None

    def test_type_is_case_insensitive(self):
        entry = EntryConfig(
            title="t",
            type="Series",
            data=DataSource(file="data.csv", expected=0, found=1),
        )
        assert entry.type == "series"

    def test_yaml_roundtrip(self, tmp_path):
        config = SuiteConfig.from_yaml(write_project(tmp_path, basic_config()))
        out = tmp_path / "copy.yaml"
        config.to_yaml(out)
        reloaded = SuiteConfig.from_yaml(out)
        assert reloaded.name == config.name
        assert [e.title for e in reloaded.entries] == [e.title for e in config.entries]


class TestSuiteConfigUse:
    """Tests for validate_config and build_suite."""

    def test_validate_ok(self, tmp_path):
        config = SuiteConfig.from_yaml(write_project(tmp_path, basic_config()))
        assert config.validate_config() == []

    def test_validate_reports_problems(self, tmp_path):
        config = basic_config()
        config["entries"][0]["data"]["file"] = "data/missing.csv"
        config["entries"][1]["data"]["found"] = "no_such_column"
        loaded = SuiteConfig.from_yaml(write_project(tmp_path, config))

        errors = loaded.validate_config()
        assert len(errors) == 2
        assert errors[0].startswith("Zone temperature:")
        assert errors[1].startswith("Scatter:")

    def test_validate_empty_suite(self, tmp_path):
        loaded = SuiteConfig.from_yaml(write_project(tmp_path, basic_config(entries=[])))
        assert loaded.validate_config() == ["Suite has no entries"]

    def test_build_suite(self, tmp_path):
        config = SuiteConfig.from_yaml(write_project(tmp_path, basic_config()))
        suite = config.build_suite()

        assert suite.state is SuiteState.POPULATED
        assert suite.title == "Thermal model"
        entries = suite.entries
        assert [e.title for e in entries] == ["Zone temperature", "Scatter"]
        assert isinstance(entries[0].validator, SeriesValidator)
        assert isinstance(entries[1].validator, ScatterValidator)
        assert entries[0].description == "Simulated against measured."
        assert entries[0].validator.labels.y_units == "C"

        result = suite.run()
        assert result.success
        assert (tmp_path / "report.md").exists()

    def test_build_suite_missing_data(self, tmp_path):
        config = basic_config()
        config["entries"][0]["data"]["file"] = "data/missing.csv"
        loaded = SuiteConfig.from_yaml(write_project(tmp_path, config))
        with pytest.raises(ParseError):
            loaded.build_suite()


class TestTemplate:
    """Tests for generate_suite_template."""

    def test_template_is_valid_yaml(self):
        data = yaml.safe_load(generate_suite_template("demo"))
        assert data["name"] == "demo"
        assert data["entries"][0]["type"] == "series"

    def test_template_loads(self, tmp_path):
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "series.csv").write_text(SERIES_CSV)
        path = tmp_path / "suite.yaml"
        path.write_text(generate_suite_template("demo"))

        config = SuiteConfig.from_yaml(path)
        assert config.validate_config() == []
        assert config.build_suite().run().success
