import json

import pytest
import yaml

from mathkit.core.base.exceptions import ConfigurationError
from mathkit.core.config.loader import (
    JSONConfigLoader,
    YAMLConfigLoader,
    get_config_loader,
    load_config_file,
)
from mathkit.core.config.settings import FittingConfig, GeometryConfig


@pytest.fixture
def config_data():
    return {
        "fitting": {"max_evaluations": 200, "decomposition": "cholesky"},
        "geometry": {"tolerance": 1e-8},
    }


class TestLoaderSelection:
    @pytest.mark.parametrize("name, loader_type", [
        ("config.json", JSONConfigLoader),
        ("config.yaml", YAMLConfigLoader),
        ("config.YML", YAMLConfigLoader),
    ])
    def test_by_extension(self, name, loader_type):
        assert isinstance(get_config_loader(name), loader_type)

    def test_unsupported(self):
        with pytest.raises(ConfigurationError, match="Unsupported configuration file format"):
            get_config_loader("config.toml")

    def test_loader_metadata(self):
        assert JSONConfigLoader().format_name == "JSON"
        assert ".yml" in YAMLConfigLoader().supported_extensions


class TestJSONConfigLoader:
    def test_save_and_load(self, tmp_path, config_data):
        path = tmp_path / "nested" / "config.json"
        loader = JSONConfigLoader()
        loader.save(config_data, path)
        assert loader.load(path) == config_data

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            JSONConfigLoader().load(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(ConfigurationError, match="object/dictionary"):
            JSONConfigLoader().load(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            JSONConfigLoader().load(tmp_path / "absent.json")

    def test_save_rejects_non_dict(self, tmp_path):
        with pytest.raises(ConfigurationError):
            JSONConfigLoader().save([1, 2], tmp_path / "out.json")


class TestYAMLConfigLoader:
    def test_save_and_load(self, tmp_path, config_data):
        path = tmp_path / "config.yaml"
        loader = YAMLConfigLoader()
        loader.save(config_data, path)
        assert loader.load(path) == config_data

    def test_paths_are_stringified(self, tmp_path):
        path = tmp_path / "config.yaml"
        YAMLConfigLoader().save({"fitting": {"log_file": tmp_path / "fit.log"}}, path)
        assert yaml.safe_load(path.read_text())["fitting"]["log_file"] == str(tmp_path / "fit.log")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert YAMLConfigLoader().load(path) == {}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("fitting: [unclosed")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            YAMLConfigLoader().load(path)


class TestLoadConfigFile:
    def test_yaml_file(self, tmp_path, config_data):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(config_data))
        fitting, geometry = load_config_file(path)
        assert isinstance(fitting, FittingConfig)
        assert fitting.max_evaluations == 200
        assert fitting.decomposition == "CHOLESKY"
        assert fitting.max_iterations == 1000
        assert isinstance(geometry, GeometryConfig)
        assert geometry.tolerance == 1e-8

    def test_json_file_with_missing_sections(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({}))
        fitting, geometry = load_config_file(path)
        assert fitting == FittingConfig()
        assert geometry == GeometryConfig()

    def test_unknown_section(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"plotting": {}}))
        with pytest.raises(ConfigurationError, match="Unknown configuration sections"):
            load_config_file(path)

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"fitting": {"max_iterations": -3}}))
        with pytest.raises(ConfigurationError) as info:
            load_config_file(path)
        assert info.value.config_file == str(path)
