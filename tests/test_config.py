"""
Tests for source configuration.
"""

import pytest

from sharedrand.config import (
    DEFAULT_RESEED_THRESHOLD,
    SUPPORTED_BIT_GENERATORS,
    SourceConfig,
)
from sharedrand.exceptions import ConfigurationError
from sharedrand.source import SharedSource


class TestSourceConfig:
    """Test SourceConfig validation and conversion."""

    def test_defaults(self):
        config = SourceConfig()
        assert config.bit_generator == "PCG64"
        assert config.reseed_threshold == DEFAULT_RESEED_THRESHOLD
        assert config.validate() is config

    def test_no_seed_field(self):
        assert "seed" not in SourceConfig().to_dict()

    @pytest.mark.parametrize("name", SUPPORTED_BIT_GENERATORS)
    def test_supported_bit_generators(self, name):
        SourceConfig(bit_generator=name).validate()

    def test_unknown_bit_generator(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SourceConfig(bit_generator="RandU").validate()
        assert exc_info.value.details["bit_generator"] == "RandU"

    @pytest.mark.parametrize("threshold", [0, -1, 2**64, 1.5, "100", True])
    def test_invalid_threshold(self, threshold):
        with pytest.raises(ConfigurationError):
            SourceConfig(reseed_threshold=threshold).validate()

    def test_round_trip(self):
        config = SourceConfig(bit_generator="SFC64", reseed_threshold=1000)
        assert SourceConfig.from_dict(config.to_dict()) == config

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SourceConfig.from_dict({"seed": 42})
        assert exc_info.value.details["unknown_keys"] == ["seed"]

    def test_from_dict_validates(self):
        with pytest.raises(ConfigurationError):
            SourceConfig.from_dict({"reseed_threshold": 0})

    def test_source_rejects_invalid_config(self):
        with pytest.raises(ConfigurationError):
            SharedSource(SourceConfig(bit_generator="nope"))

    def test_frozen(self):
        config = SourceConfig()
        with pytest.raises(AttributeError):
            config.reseed_threshold = 1
