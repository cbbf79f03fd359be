"""
Tests for PipelineConfig loading.
"""

from __future__ import annotations

import pytest

from caps.pipeline.config import CapnpConfig, DisambiguationMode, MsgpConfig, PipelineConfig


class TestPipelineConfig:
    """Tests for PipelineConfig."""

    def test_defaults(self):
        config = PipelineConfig()
        assert config.output_dir == "."
        assert config.has_custom_output_dir is False
        assert config.disambiguation == DisambiguationMode.SEQUENTIAL
        assert config.suffix == "Capn"
        assert config.capnp == CapnpConfig()
        assert config.msgp.generate_tests is False

    def test_from_dict(self):
        config = PipelineConfig.from_dict(
            {
                "output_dir": "gen",
                "verbose": True,
                "disambiguation": "token_boundary",
                "capnp": {"command": "/opt/capnp/bin/capnp", "schema_dir": "/opt/caps"},
                "msgp": {"generate_tests": True},
            }
        )

        assert config.output_dir == "gen"
        assert config.has_custom_output_dir is True
        assert config.verbose is True
        assert config.disambiguation == DisambiguationMode.TOKEN_BOUNDARY
        assert config.capnp.command == "/opt/capnp/bin/capnp"
        assert config.capnp.schema_dir == "/opt/caps"
        assert config.capnp.go_capnp_dir == CapnpConfig().go_capnp_dir
        assert config.msgp == MsgpConfig(command="msgp", generate_tests=True)

    def test_from_dict_ignores_unknown_keys(self):
        config = PipelineConfig.from_dict({"unknown": 1})
        assert config == PipelineConfig()

    def test_from_dict_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            PipelineConfig.from_dict({"disambiguation": "fuzzy"})

    def test_to_dict_loads_back(self):
        config = PipelineConfig(output_dir="out", suffix="Wire")
        config.capnp.go_capnp_dir = "/src/go-capnproto"

        assert PipelineConfig.from_dict(config.to_dict()) == config
        assert config.to_dict()["disambiguation"] == "sequential"


if __name__ == "__main__":
    pytest.main([__file__])
