"""Tests for SvcatSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from svcat.config.settings import SvcatSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "SVCAT_CONFIG",
        "SVCAT_PROVISION__NAMESPACE",
        "SVCAT_KUBECTL__CONTEXT",
        "SVCAT_VERBOSE",
    ):
        monkeypatch.delenv(var, raising=False)


class TestSvcatSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = SvcatSettings.from_cli(cwd=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.provision.namespace == "default"
        assert settings.kubectl.binary == "kubectl"
        assert settings.kubectl.timeout_seconds is None

    def test_frozen(self, tmp_path: Path) -> None:
        settings = SvcatSettings.from_cli(cwd=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "svcat.toml"
        toml.write_text('[provision]\nnamespace = "team-a"\n[kubectl]\ncontext = "prod"\n')
        settings = SvcatSettings.from_cli(cwd=tmp_path)
        assert settings.config_path == toml
        assert settings.provision.namespace == "team-a"
        assert settings.kubectl.context == "prod"
        assert settings.kubectl.binary == "kubectl"  # default preserved

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        toml = tmp_path / "elsewhere.toml"
        toml.write_text('[provision]\nnamespace = "explicit"\n')
        settings = SvcatSettings.from_cli(config_path=str(toml))
        assert settings.provision.namespace == "explicit"

    def test_missing_explicit_config_uses_defaults(self, tmp_path: Path) -> None:
        settings = SvcatSettings.from_cli(config_path=str(tmp_path / "nope.toml"))
        assert settings.config_path is None
        assert settings.provision.namespace == "default"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "svcat.toml").write_text("[provision\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            SvcatSettings.from_cli(cwd=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "svcat.toml").write_text('[provision]\nnamespace = "from-toml"\n')
        monkeypatch.setenv("SVCAT_PROVISION__NAMESPACE", "from-env")
        settings = SvcatSettings.from_cli(cwd=tmp_path)
        assert settings.provision.namespace == "from-env"

    def test_cli_flags_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SVCAT_VERBOSE", "false")
        settings = SvcatSettings.from_cli(cwd=tmp_path, verbose=True)
        assert settings.verbose is True


class TestConfigPathIsolation:
    def test_consecutive_builds_do_not_share_toml(self, tmp_path: Path) -> None:
        team = tmp_path / "team"
        team.mkdir()
        (team / "svcat.toml").write_text('[provision]\nnamespace = "team-a"\n')
        bare = tmp_path / "bare"
        bare.mkdir()

        first = SvcatSettings.from_cli(cwd=team)
        second = SvcatSettings.from_cli(cwd=bare)

        assert first.provision.namespace == "team-a"
        assert second.config_path is None
        assert second.provision.namespace == "default"

    def test_direct_construction_reads_config_path(self, tmp_path: Path) -> None:
        toml = tmp_path / "svcat.toml"
        toml.write_text('[kubectl]\nbinary = "/usr/local/bin/kubectl"\n')
        settings = SvcatSettings(config_path=toml)
        assert settings.kubectl.binary == "/usr/local/bin/kubectl"

    def test_no_config_path_ignores_toml_in_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "svcat.toml").write_text('[provision]\nnamespace = "team-a"\n')
        monkeypatch.chdir(tmp_path)
        assert SvcatSettings().provision.namespace == "default"
