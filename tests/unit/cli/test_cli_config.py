"""Unit tests for rxmd CLI configuration loading.

This module tests configuration file discovery, loading of each supported
format, and turning configuration into a configured parser.
"""

import json

import pytest
import yaml

from rxmd.cli.config import (
    build_parser_from_config,
    discover_config_file,
    find_config_in_parents,
    import_render_function,
    load_config_file,
    options_from_config,
    resolve_config,
)
from rxmd.constants import CONFIG_ENV_VAR
from rxmd.exceptions import ConfigurationError, PatternError


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery."""

    def test_no_config(self, isolated_dir):
        """Nothing is found in an empty tree."""
        assert discover_config_file() is None

    def test_found_in_cwd(self, isolated_dir):
        """A dotfile in the working directory is found."""
        config = isolated_dir / ".rxmd.toml"
        config.write_text('display_mode = "plain"\n', encoding="utf-8")
        assert discover_config_file() == config.resolve()

    def test_found_in_parent(self, isolated_dir):
        """The search walks up to parent directories."""
        config = isolated_dir / ".rxmd.json"
        config.write_text("{}", encoding="utf-8")
        nested = isolated_dir / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_toml_preferred_over_yaml(self, isolated_dir):
        """Dotfiles are checked in a fixed order."""
        (isolated_dir / ".rxmd.yaml").write_text("{}", encoding="utf-8")
        (isolated_dir / ".rxmd.toml").write_text("", encoding="utf-8")
        assert discover_config_file().name == ".rxmd.toml"

    def test_pyproject_with_section(self, isolated_dir):
        """A pyproject.toml with [tool.rxmd] counts as config."""
        pyproject = isolated_dir / "pyproject.toml"
        pyproject.write_text('[tool.rxmd]\ndisable = ["bold"]\n', encoding="utf-8")
        assert discover_config_file() == pyproject.resolve()

    def test_pyproject_without_section_ignored(self, isolated_dir):
        """A pyproject.toml without [tool.rxmd] is skipped."""
        (isolated_dir / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert discover_config_file() is None

    def test_broken_pyproject_ignored(self, isolated_dir):
        """A malformed pyproject.toml does not stop discovery."""
        (isolated_dir / "pyproject.toml").write_text("[tool.rxmd\n", encoding="utf-8")
        assert discover_config_file() is None

    def test_home_fallback(self, isolated_dir, tmp_path):
        """The home directory is checked last."""
        config = tmp_path / "home" / ".rxmd.yml"
        config.write_text("display_mode: terminal\n", encoding="utf-8")
        assert discover_config_file() == config


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Test loading each configuration format."""

    def test_toml(self, tmp_path):
        """TOML files load as dicts."""
        path = tmp_path / ".rxmd.toml"
        path.write_text('disable = ["strikethrough"]\n', encoding="utf-8")
        assert load_config_file(path) == {"disable": ["strikethrough"]}

    def test_yaml(self, tmp_path):
        """YAML files load as dicts."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"display_mode": "terminal"}), encoding="utf-8")
        assert load_config_file(str(path)) == {"display_mode": "terminal"}

    def test_empty_yaml(self, tmp_path):
        """An empty YAML file is an empty config."""
        path = tmp_path / "config.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        """JSON files load as dicts."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"disable": ["bold"]}), encoding="utf-8")
        assert load_config_file(path) == {"disable": ["bold"]}

    def test_pyproject_section(self, tmp_path):
        """Only the [tool.rxmd] table is returned from pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.rxmd]\ndisplay_mode = "terminal"\n', encoding="utf-8")
        assert load_config_file(path) == {"display_mode": "terminal"}

    def test_missing_file(self, tmp_path):
        """A missing file is a ConfigurationError."""
        with pytest.raises(ConfigurationError, match="does not exist"):
            load_config_file(tmp_path / "absent.toml")

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("bad.toml", "disable = [\n"),
            ("bad.json", "{not json"),
            ("bad.yaml", "a: [unclosed\n"),
        ],
    )
    def test_malformed(self, tmp_path, filename, content):
        """Syntax errors are reported with the file path."""
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(path)
        assert exc_info.value.config_path == str(path)
        assert exc_info.value.original_error is not None

    def test_non_mapping_root(self, tmp_path):
        """The root value must be a mapping."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping at root level"):
            load_config_file(path)

    def test_unsupported_extension(self, tmp_path):
        """Unknown extensions are rejected."""
        path = tmp_path / "config.ini"
        path.write_text("[x]\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Unsupported config file format"):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestResolveConfig:
    """Test choosing the configuration source."""

    def test_explicit_path_wins_over_env(self, isolated_dir, monkeypatch, tmp_path):
        """--config takes precedence over RXMD_CONFIG."""
        explicit = tmp_path / "explicit.json"
        explicit.write_text(json.dumps({"disable": ["bold"]}), encoding="utf-8")
        env = tmp_path / "env.json"
        env.write_text(json.dumps({"disable": ["italic"]}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env))

        assert resolve_config(str(explicit)) == {"disable": ["bold"]}

    def test_env_wins_over_discovery(self, isolated_dir, monkeypatch, tmp_path):
        """RXMD_CONFIG takes precedence over discovered files."""
        (isolated_dir / ".rxmd.toml").write_text('disable = ["headers"]\n', encoding="utf-8")
        env = tmp_path / "env.yaml"
        env.write_text("disable: [italic]\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env))

        assert resolve_config() == {"disable": ["italic"]}

    def test_discovery(self, isolated_dir):
        """Without a path or RXMD_CONFIG the discovered file is used."""
        (isolated_dir / ".rxmd.toml").write_text('disable = ["headers"]\n', encoding="utf-8")
        assert resolve_config() == {"disable": ["headers"]}

    def test_nothing_found(self, isolated_dir):
        """No source yields an empty configuration."""
        assert resolve_config() == {}

    def test_no_config(self, isolated_dir, monkeypatch, tmp_path):
        """no_config skips every source."""
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert resolve_config("also-missing.toml", no_config=True) == {}


@pytest.mark.unit
@pytest.mark.cli
class TestImportRenderFunction:
    """Test resolving render functions from import paths."""

    def test_import(self, render_module):
        """module:function paths resolve to the function."""
        render = import_render_function(f"{render_module}:highlight")
        assert render({"text": "x"}) == "<mark>x</mark>"

    def test_dotted_attribute(self):
        """Attributes after the colon may be dotted."""
        render = import_render_function("rxmd.transforms.builtin:BOLD_DEFINITION.render")
        assert render({"text": "x"}) == "<strong>x</strong>"

    @pytest.mark.parametrize("path", ["no_colon", ":func", "module:"])
    def test_malformed_path(self, path):
        """Paths without both parts are rejected."""
        with pytest.raises(ConfigurationError, match="module:function"):
            import_render_function(path)

    def test_missing_module(self):
        """Import failures become ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Cannot import"):
            import_render_function("rxmd_no_such_module:render")

    def test_not_callable(self, render_module):
        """Targets must be callable."""
        with pytest.raises(ConfigurationError, match="not callable"):
            import_render_function(f"{render_module}:NOT_CALLABLE")


@pytest.mark.unit
@pytest.mark.cli
class TestBuildParserFromConfig:
    """Test applying configuration to a parser."""

    def test_empty_config(self):
        """An empty config gives the default parser."""
        md = build_parser_from_config({})
        assert md.parse("# Hi") == "<h1>Hi</h1>"

    def test_display_mode_and_disable(self):
        """display_mode and disable are applied."""
        md = build_parser_from_config({"display_mode": "terminal", "disable": ["bold"]}, disable=["italic"])
        assert md.tty is True
        assert "bold" not in md.list()
        assert "italic" not in md.list()

    def test_custom_transform(self, render_module):
        """Configured transforms are registered and placed."""
        config = {
            "transforms": [
                {
                    "name": "highlight",
                    "pattern": "==(?<text>[^=]+)==",
                    "render": f"{render_module}:highlight",
                    "tags": ["inline"],
                    "before": "paragraphs",
                }
            ]
        }
        md = build_parser_from_config(config)

        names = md.list()
        assert names.index("highlight") == names.index("paragraphs") - 1
        assert md.lookup("highlight").tags == ("inline",)
        assert md.parse("a ==b==") == "<p>a <mark>b</mark></p>"

    def test_unknown_key(self):
        """Unknown top-level keys are rejected."""
        with pytest.raises(ConfigurationError, match="Unknown configuration key"):
            options_from_config({"colour": "red"})

    def test_disable_must_be_list(self):
        """disable must be a list of names."""
        with pytest.raises(ConfigurationError, match="'disable'"):
            options_from_config({"disable": "bold"})

    def test_invalid_display_mode(self):
        """Option validation errors surface as ConfigurationError."""
        with pytest.raises(ConfigurationError, match="display_mode"):
            options_from_config({"display_mode": "html"})

    def test_transforms_must_be_list(self):
        """transforms must be a list."""
        with pytest.raises(ConfigurationError, match="'transforms'"):
            build_parser_from_config({"transforms": {"name": "x"}})

    def test_transform_entry_must_be_table(self):
        """Each transform entry must be a table."""
        with pytest.raises(ConfigurationError, match=r"transforms\[0\]"):
            build_parser_from_config({"transforms": ["x"]})

    def test_bad_transform_pattern(self, render_module):
        """Bad patterns in config raise PatternError."""
        config = {"transforms": [{"name": "bad", "pattern": "(", "render": f"{render_module}:highlight"}]}
        with pytest.raises(PatternError):
            build_parser_from_config(config)
