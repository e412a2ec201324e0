# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the PolicyGenerator exec plugin command and the umbrella CLI.
"""

import argparse
import logging

import pytest
import yaml

from policygenerator import __version__
from policygenerator.generator import main as generator_main
from policygenerator.main import main as cli_main


@pytest.fixture
def generator_config(tmp_path, config_factory):
    path = tmp_path / "generator.yaml"
    path.write_text(yaml.safe_dump(config_factory("policy-app-config")))
    return path


@pytest.fixture
def invalid_config(tmp_path):
    path = tmp_path / "invalid.yaml"
    path.write_text(yaml.safe_dump({"policies": []}))
    return path


def _parse(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    generator_main.configure_parser(parser)
    return parser.parse_args(argv)


class TestArgumentParsing:
    """Test the exec plugin calling convention."""

    def test_kustomize_cached_manifest_is_skipped(self):
        args = _parse(["cached-manifest", "a.yaml", "b.yaml"])

        assert generator_main.config_paths_from_args(args) == ["a.yaml", "b.yaml"]

    def test_standalone_uses_every_path(self):
        args = _parse(["--standalone", "a.yaml", "b.yaml"])

        assert generator_main.config_paths_from_args(args) == ["a.yaml", "b.yaml"]

    def test_defaults(self):
        args = _parse([])

        assert args.debug is False
        assert args.standalone is False
        assert args.output is None
        assert generator_main.config_paths_from_args(args) == []


class TestGeneratorMain:
    """Test the PolicyGenerator command end to end."""

    def test_standalone_writes_stdout(self, generator_config, capsys):
        with pytest.raises(SystemExit) as exc:
            generator_main.main(["--standalone", str(generator_config)])

        assert exc.value.code == 0
        documents = list(yaml.safe_load_all(capsys.readouterr().out))
        assert [doc["kind"] for doc in documents] == ["Policy", "PlacementRule", "PlacementBinding"]

    def test_kustomize_mode(self, generator_config, capsys):
        with pytest.raises(SystemExit) as exc:
            generator_main.main(["/tmp/kustomize-cached-manifest", str(generator_config)])

        assert exc.value.code == 0
        assert "kind: PlacementBinding" in capsys.readouterr().out

    def test_output_file(self, generator_config, tmp_path):
        output = tmp_path / "out" / "policies.yaml"

        with pytest.raises(SystemExit) as exc:
            generator_main.main(["--standalone", "-o", str(output), str(generator_config)])

        assert exc.value.code == 0
        assert len(list(yaml.safe_load_all(output.read_text()))) == 3

    def test_error_exits_with_status_1(self, invalid_config, capsys, caplog):
        with caplog.at_level(logging.ERROR), pytest.raises(SystemExit) as exc:
            generator_main.main(["--standalone", str(invalid_config)])

        assert exc.value.code == 1
        assert capsys.readouterr().out == ""
        assert "policyDefaults.namespace is empty" in caplog.text

    def test_debug_logs_traceback(self, invalid_config, caplog):
        args = _parse(["--debug", "--standalone", str(invalid_config)])

        with caplog.at_level(logging.ERROR):
            assert generator_main.run(args) == 1

        assert "Policy generation failed" in caplog.text
        assert caplog.records[-1].exc_info is not None


class TestUmbrellaCLI:
    """Test the policygenerator command."""

    def test_version(self, capsys):
        cli_main(["version"])

        assert capsys.readouterr().out.strip() == f"policygenerator {__version__}"

    def test_help_yaml(self, capsys):
        cli_main(["help", "--format", "yaml"])

        keys = [entry["key"] for entry in yaml.safe_load(capsys.readouterr().out)]
        assert "placementBindingDefaults.name" in keys

    def test_generate(self, generator_config, capsys):
        with pytest.raises(SystemExit) as exc:
            cli_main(["generate", "--standalone", str(generator_config)])

        assert exc.value.code == 0
        assert capsys.readouterr().out.startswith("---\n")


class TestLogFormat:
    """Both entry points configure logging the same way."""

    @pytest.fixture
    def basic_config_calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        return calls

    def test_plugin_entry_point(self, generator_config, basic_config_calls):
        with pytest.raises(SystemExit):
            generator_main.main(["--standalone", str(generator_config)])

        assert basic_config_calls == [{"level": logging.INFO, "format": generator_main.LOG_FORMAT}]

    def test_generate_subcommand(self, generator_config, basic_config_calls):
        with pytest.raises(SystemExit):
            cli_main(["generate", "--debug", "--standalone", str(generator_config)])

        assert basic_config_calls == [{"level": logging.DEBUG, "format": generator_main.LOG_FORMAT}]
