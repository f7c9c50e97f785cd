"""Unit tests for config.py and chain construction from settings"""

import pytest

from mdremark.config import PluginSpec, Settings, load_config
from mdremark.core.plugins.registry import DEFAULT_ORDER, build_chain, make_step
from mdremark.errors import ConfigError


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray config.yaml is read."""
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults(monkeypatch):
    """Defaults apply when no config.yaml, env var, or CLI override exists."""
    monkeypatch.delenv("MDREMARK_PARSER_CONFIG", raising=False)
    settings = load_config()
    assert settings.parser_config == "gfm-like"
    assert settings.anchor_class_name == "icon icon-link"
    assert settings.plugins is None


def test_load_config_reads_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text(
        "external_links_target: _self\n"
        "frontmatter:\n  excerpt: true\n"
        "plugins:\n  - name: slug\n    options: {prefix: 'h-'}\n"
    )
    settings = load_config()
    assert settings.external_links_target == "_self"
    assert settings.frontmatter.excerpt is True
    assert settings.plugins == [PluginSpec(name="slug", options={"prefix": "h-"})]


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDREMARK_* env vars take precedence over config.yaml."""
    (tmp_path / "config.yaml").write_text("parser_config: commonmark\n")
    monkeypatch.setenv("MDREMARK_PARSER_CONFIG", "zero")
    assert load_config().parser_config == "zero"


def test_load_config_env_workers(monkeypatch):
    """MDREMARK_WORKERS env var is coerced to int."""
    monkeypatch.setenv("MDREMARK_WORKERS", "8")
    assert load_config().workers == 8


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var."""
    monkeypatch.setenv("MDREMARK_WORKERS", "8")
    settings = load_config(overrides={"workers": 2, "output_dir": None})
    assert settings.workers == 2
    assert settings.output_dir == "dist"


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_invalid_log_level():
    with pytest.raises(ValueError):
        Settings(log_level="LOUD")


# --- chain construction ---

def test_default_chain_order():
    assert [step.name for step in build_chain(Settings())] == DEFAULT_ORDER


def test_default_chain_uses_top_level_options():
    settings = Settings(external_links_target="_top", external_links_rel="nofollow", anchor_class_name="anchor")
    steps = {step.name: step for step in build_chain(settings)}
    assert steps["external-links"].options.target == "_top"
    assert steps["external-links"].options.rel == "nofollow"
    assert steps["autolink-headings"].options.class_name == "anchor"


def test_explicit_chain_order():
    settings = Settings(plugins=[PluginSpec(name="external-links"), PluginSpec(name="slug")])
    assert [step.name for step in build_chain(settings)] == ["external-links", "slug"]


def test_explicit_options_override_defaults():
    settings = Settings(plugins=[PluginSpec(name="autolink-headings", options={"behavior": "wrap"})])
    step = build_chain(settings)[0]
    assert step.options.behavior == "wrap"
    assert step.options.class_name == "icon icon-link"


def test_unknown_step():
    with pytest.raises(ConfigError, match="Unknown transform step"):
        make_step("no-such-step")


def test_invalid_step_options():
    with pytest.raises(ConfigError, match="Invalid options"):
        make_step("autolink-headings", {"behavior": "sideways"})
