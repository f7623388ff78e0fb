import pytest

from almanac import (
    AIRY_1830,
    NAD27,
    WGS84,
    Algorithm,
    ConfigError,
    EngineConfig,
    GeoConfig,
    load_config,
)
from almanac.config import apply_environment, config_from_dict


class TestDefaults:
    """Test default configuration values."""

    def test_engine_defaults(self):
        config = EngineConfig()
        assert config.geo == GeoConfig(Algorithm.VINCENTY, WGS84, False)
        assert config.twilight_depression_deg == 18.0
        assert config.event_tolerance_days == 1e-6
        assert config.event_max_iterations == 20
        assert config.strict is False

    def test_no_file(self):
        assert load_config(environ={}) == EngineConfig()

    def test_empty_mapping(self):
        assert config_from_dict({}) == EngineConfig()
        assert config_from_dict(None) == EngineConfig()


class TestYaml:
    """Test loading configuration from YAML files."""

    def test_full_file(self, tmp_path):
        path = tmp_path / "almanac.yaml"
        path.write_text(
            "geodesy:\n"
            "  algorithm: Andoyer\n"
            "  ellipsoid: nad27\n"
            "events:\n"
            "  twilight_depression_deg: 12\n"
            "  tolerance_days: 1.0e-7\n"
            "  max_iterations: 50\n"
            "strict: true\n"
        )
        config = load_config(path, environ={})

        assert config.geo.algorithm is Algorithm.ANDOYER
        assert config.geo.ellipsoid == NAD27
        assert config.geo.strict is True
        assert config.twilight_depression_deg == 12.0
        assert config.event_tolerance_days == 1e-7
        assert config.event_max_iterations == 50
        assert config.strict is True

    def test_partial_file(self, tmp_path):
        path = tmp_path / "almanac.yaml"
        path.write_text("geodesy:\n  algorithm: haversine\n")
        config = load_config(str(path), environ={})

        assert config.geo.algorithm is Algorithm.HAVERSINE
        assert config.geo.ellipsoid == WGS84
        assert config.twilight_depression_deg == 18.0

    def test_geodesy_strict_overrides_top_level(self):
        config = config_from_dict({"strict": True, "geodesy": {"strict": False}})
        assert config.strict is True
        assert config.geo.strict is False

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path, environ={}) == EngineConfig()

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- vincenty\n- wgs84\n")
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml", environ={})


class TestInvalidValues:
    """Test that uninterpretable values raise ConfigError."""

    def test_bad_algorithm(self):
        with pytest.raises(ConfigError) as info:
            config_from_dict({"geodesy": {"algorithm": "karney"}})
        assert "vincenty" in str(info.value)

    def test_bad_ellipsoid(self):
        with pytest.raises(ConfigError) as info:
            config_from_dict({"geodesy": {"ellipsoid": "flat"}})
        assert "WGS84" in str(info.value)

    def test_bad_iterations(self):
        with pytest.raises(ConfigError):
            config_from_dict({"events": {"max_iterations": 0}})

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            config_from_dict({"geodesy": {"algorithm": "karney"}})


class TestEnvironment:
    """Test environment variable overrides."""

    def test_algorithm_override(self):
        config = apply_environment(EngineConfig(), {"ALMANAC_GEO_ALGORITHM": "andoyer"})
        assert config.geo.algorithm is Algorithm.ANDOYER

    def test_ellipsoid_override(self):
        config = apply_environment(EngineConfig(), {"ALMANAC_ELLIPSOID": "airy_1830"})
        assert config.geo.ellipsoid == AIRY_1830

    def test_environment_beats_file(self, tmp_path):
        path = tmp_path / "almanac.yaml"
        path.write_text("geodesy:\n  algorithm: vincenty\n")
        config = load_config(path, environ={"ALMANAC_GEO_ALGORITHM": "haversine"})
        assert config.geo.algorithm is Algorithm.HAVERSINE

    def test_empty_variables_ignored(self):
        environ = {"ALMANAC_GEO_ALGORITHM": "", "ALMANAC_ELLIPSOID": ""}
        assert apply_environment(EngineConfig(), environ) == EngineConfig()

    def test_bad_override(self):
        with pytest.raises(ConfigError):
            apply_environment(EngineConfig(), {"ALMANAC_ELLIPSOID": "sphere"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("ALMANAC_GEO_ALGORITHM", "haversine")
        assert load_config().geo.algorithm is Algorithm.HAVERSINE
