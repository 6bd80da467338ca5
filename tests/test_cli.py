"""
Unit Tests for the Command Line Interface

Author: storeconf Project
License: MIT
"""

import pytest
import yaml

from storeconf.cli import MASKED, main, parse_overrides, render
from storeconf.config.certificates import create_store
from storeconf.config.durations import days
from storeconf.config.exceptions import ConfigurationError


class TestParseOverrides:
    """Test suite for --set parsing."""

    def test_values_are_typed(self):
        """Test that override values are parsed like YAML scalars."""
        overrides = parse_overrides([
            "global.vardir=/srv/data",
            "command-processing.threads=4",
            "web-server.ssl-client-auth=true",
        ])

        assert overrides == {
            "global": {"vardir": "/srv/data"},
            "command-processing": {"threads": 4},
            "web-server": {"ssl-client-auth": True},
        }

    @pytest.mark.parametrize("item", ["novalue", "nosection=1", ".key=1", "section.=1"])
    def test_malformed(self, item):
        """Test that malformed overrides are rejected."""
        with pytest.raises(ConfigurationError):
            parse_overrides([item])


class TestRender:
    """Test suite for YAML rendering of resolved values."""

    def test_render_special_values(self):
        """Test durations, stores and the key password."""
        rendered = render({
            "database": {"report-ttl": days(14)},
            "web-server": {"truststore": create_store(), "key-password": "hunter2"},
        })

        assert rendered == {
            "database": {"report-ttl": "14d"},
            "web-server": {"truststore": {"aliases": []}, "key-password": MASKED},
        }

    def test_render_masks_trust_password(self):
        """Test that a configured trust password is never printed."""
        rendered = render({"web-server": {"trust-password": "s3cret", "port": 8080}})

        assert rendered == {"web-server": {"trust-password": MASKED, "port": 8080}}


class TestMain:
    """Test suite for the check command."""

    def test_check_success(self, tmp_path, vardir, capsys):
        """Test that a good config is printed as YAML."""
        ini = tmp_path / "config.ini"
        ini.write_text(f"[global]\nvardir = {vardir}\n[database]\nreport-ttl = 7d\n")

        exit_code = main(["check", str(ini)])

        assert exit_code == 0
        output = yaml.safe_load(capsys.readouterr().out)
        assert output["database"]["report-ttl"] == "7d"
        assert output["web-server"]["client-auth"] == "required"

    def test_check_with_override(self, tmp_path, vardir, capsys):
        """Test that --set provides initial settings."""
        ini = tmp_path / "config.ini"
        ini.write_text("[web-server]\nport = 8080\n")

        exit_code = main(["check", str(ini), "--set", f"global.vardir={vardir}"])

        assert exit_code == 0
        output = yaml.safe_load(capsys.readouterr().out)
        assert output["global"]["vardir"] == vardir

    def test_check_failure(self, tmp_path, capsys):
        """Test that configuration errors exit with status 1."""
        exit_code = main(["check", str(tmp_path / "missing.ini")])

        assert exit_code == 1
        assert "must exist and must be readable" in capsys.readouterr().err

    def test_check_duration_out_of_range(self, tmp_path, vardir, capsys):
        """Test that a duration too large to represent exits with status 1."""
        ini = tmp_path / "config.ini"
        ini.write_text(f"[global]\nvardir = {vardir}\n[database]\nnode-ttl = 99999999999d\n")

        exit_code = main(["check", str(ini)])

        assert exit_code == 1
        assert "node-ttl" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
