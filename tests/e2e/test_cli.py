"""CLI coverage for ``start``, ``render`` and ``info`` via Click's runner."""

from __future__ import annotations

from pathlib import Path

import lib_cli_exit_tools
from click.testing import CliRunner

from guacamole_bootstrap import cli
from guacamole_bootstrap.adapters.launcher import default as launcher_module

GUACD = {"GUACD_PORT_4822_TCP_ADDR": "172.17.0.2", "GUACD_PORT_4822_TCP_PORT": "4822"}


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def _start_args(layout, plugin_root: Path, *extra: str) -> list[str]:
    return ["start", "--home", str(layout.home), "--plugin-root", str(plugin_root), *extra]


def test_start_without_guacd_prints_banner_and_exits_1(layout, plugin_root) -> None:
    result = _runner().invoke(cli.cli, _start_args(layout, plugin_root, "--no-launch"), env={"HMAC_SECRET": "k"})
    assert result.exit_code == 1
    lines = result.output.splitlines()
    assert lines[0] == 'FATAL: Missing "guacd" link.'
    assert set(lines[1]) == {"-"}
    assert not layout.properties.exists()


def test_start_without_backend_exits_1(layout, plugin_root) -> None:
    result = _runner().invoke(cli.cli, _start_args(layout, plugin_root, "--no-launch"), env=GUACD)
    assert result.exit_code == 1
    assert result.output.startswith("FATAL: No authentication configured")


def test_start_no_launch_writes_configuration(layout, plugin_root) -> None:
    env = {**GUACD, "HMAC_SECRET": "k", "NOAUTH_HOSTNAMES": "rdp1 rdp2"}
    result = _runner().invoke(cli.cli, _start_args(layout, plugin_root, "--no-launch"), env=env)
    assert result.exit_code == 0, result.output
    assert "hmac, noauth" in result.output
    text = layout.properties.read_text(encoding="utf-8")
    assert "secret-key: k" in text
    assert layout.noauth_config.exists()


def test_start_launches_tomcat(layout, plugin_root, tmp_path, monkeypatch) -> None:
    calls: list[list[str]] = []

    def fake_execvp(file: str, args: list[str]) -> None:
        calls.append(args)
        raise SystemExit(0)

    monkeypatch.setattr(launcher_module.os, "execvp", fake_execvp)
    monkeypatch.setattr(launcher_module.os, "chdir", lambda path: None)
    env = {**GUACD, "HMAC_SECRET": "k"}
    result = _runner().invoke(
        cli.cli,
        _start_args(layout, plugin_root, "--server-home", str(tmp_path)),
        env=env,
    )
    assert result.exit_code == 0, result.output
    assert calls == [["catalina.sh", "run"]]


def test_start_reads_locations_from_environment(layout, plugin_root) -> None:
    env = {
        **GUACD,
        "HMAC_SECRET": "k",
        "GUACAMOLE_HOME": str(layout.home),
        "GUACAMOLE_PLUGIN_ROOT": str(plugin_root),
    }
    result = _runner().invoke(cli.cli, ["start", "--no-launch"], env=env)
    assert result.exit_code == 0, result.output
    assert layout.properties.exists()


def test_render_prints_properties_without_writing(layout) -> None:
    env = {**GUACD, "NOAUTH_HOSTNAMES": "a,b", "NOAUTH_USERNAMES": "u1"}
    result = _runner().invoke(cli.cli, ["render", "--home", str(layout.home), "--connections"], env=env)
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("# guacamole.properties - generated ")
    assert lines[1:4] == ["guacd-hostname: 172.17.0.2", "guacd-port: 4822", f"noauth-config: {layout.noauth_config}"]
    assert lines[4] == "<configs>"
    assert not layout.home.exists()


def test_render_reports_missing_fields(layout) -> None:
    env = {**GUACD, "LDAP_HOSTNAME": "ldap"}
    result = _runner().invoke(cli.cli, ["render", "--home", str(layout.home)], env=env)
    assert result.exit_code == 1
    assert result.output.startswith("FATAL: Missing required environment variables")
    assert "LDAP_USER_BASE_DN" in result.output


def test_cli_info_command() -> None:
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "guacamole_bootstrap" in result.output


def test_cli_version_option() -> None:
    result = _runner().invoke(cli.cli, ["--version"])
    assert result.exit_code == 0
    assert "guacamole_bootstrap version" in result.output


def test_cli_info_handles_missing_metadata(monkeypatch) -> None:
    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_main_restores_traceback_flag(layout, monkeypatch) -> None:
    for name, value in {**GUACD, "HMAC_SECRET": "k"}.items():
        monkeypatch.setenv(name, value)
    previous = lib_cli_exit_tools.config.traceback
    exit_code = cli.main(["--traceback", "render", "--home", str(layout.home)])
    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback == previous


def test_main_returns_fatal_status(layout, monkeypatch) -> None:
    for name in GUACD:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HMAC_SECRET", "k")
    assert cli.main(["render", "--home", str(layout.home)]) == 1
