"""End-to-end CLI tests with typer's CliRunner and a fake controller."""

import pytest
from rich.console import Console
from typer.testing import CliRunner

from conftest import FakeController
from kontroll import __version__
from kontroll.cli import main as cli_main
from kontroll.core.domain.models import KeyboardDescriptor
from kontroll.core.errors import DaemonRejected, DaemonUnreachable

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("KONTROLL_SOCKET_PATH", str(tmp_path / "daemon.sock"))
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.setattr(cli_main, "_err_console", Console(stderr=True, force_terminal=False))


@pytest.fixture
def fake(monkeypatch, keyboards):
    controller = FakeController(keyboards)
    created = []

    def factory(settings):
        created.append(settings)
        return controller

    monkeypatch.setattr(cli_main, "build_controller", factory)
    controller.created = created
    return controller


class TestCommands:

    def test_list(self, fake):
        fake.keyboards = [
            KeyboardDescriptor(id=0, friendly_name="A", is_connected=False),
            KeyboardDescriptor(id=1, friendly_name="B", is_connected=True),
        ]
        result = runner.invoke(cli_main.app, ["list"])
        assert result.exit_code == 0
        assert result.stdout == "0: A \n1: B (connected)\n"

    def test_list_empty(self, fake):
        fake.keyboards = []
        result = runner.invoke(cli_main.app, ["list"])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_connect(self, fake):
        result = runner.invoke(cli_main.app, ["connect", "--index", "2"])
        assert result.exit_code == 0
        assert result.stdout == "Connected to keyboard 2\n"
        assert fake.calls == [("bind", 2)]
        assert fake.entered and fake.exited

    def test_connect_unknown_reports_error_and_exits_normally(self, fake):
        result = runner.invoke(cli_main.app, ["connect", "-i", "5"])
        assert result.exit_code == 0
        assert "Keyboard 5 not found" in result.output
        assert "Connected to keyboard" not in result.output

    def test_connect_rejects_negative_index(self, fake):
        result = runner.invoke(cli_main.app, ["connect", "--index", "-1"])
        assert result.exit_code != 0
        assert fake.calls == []

    def test_connect_any_and_disconnect(self, fake):
        assert runner.invoke(cli_main.app, ["connect-any"]).exit_code == 0
        assert runner.invoke(cli_main.app, ["disconnect"]).exit_code == 0
        assert fake.calls == [("bind_any",), ("unbind",)]

    def test_set_rgb(self, fake):
        fake.bound = True
        result = runner.invoke(cli_main.app, ["set-rgb", "-l", "3", "-c", "FF00FF"])
        assert result.exit_code == 0
        assert result.stdout == "LED 3 set to color FF00FF\n"
        assert fake.calls == [("set_led_color", 3, 255, 0, 255, 0)]

    def test_set_rgb_invalid_color(self, fake):
        fake.bound = True
        result = runner.invoke(cli_main.app, ["set-rgb", "--led", "3", "--color", "zz00ff"])
        assert result.exit_code == 0
        assert "zz00ff is not a valid hex color" in result.output
        assert fake.calls == []

    def test_set_rgb_all_with_negative_sustain(self, fake):
        fake.bound = True
        result = runner.invoke(cli_main.app, ["set-rgb-all", "--color", "#0000ff", "--sustain=-5"])
        assert result.exit_code == 0
        assert result.stdout == "All LEDs set to color #0000ff\n"
        assert fake.calls == [("set_all_led_color", 0, 0, 255, -5)]

    @pytest.mark.parametrize("args, on, state", [([], True, "on"), (["--off"], False, "off")])
    def test_set_status_led(self, fake, args, on, state):
        fake.bound = True
        result = runner.invoke(cli_main.app, ["set-status-led", "--led", "1", "-s", "100", *args])
        assert result.exit_code == 0
        assert result.stdout == f"Status LED 1 turned {state}\n"
        assert fake.calls == [("set_status_led", 1, on, 100)]

    def test_set_layer(self, fake):
        fake.bound = True
        result = runner.invoke(cli_main.app, ["set-layer", "-i", "4"])
        assert result.stdout == "Layer set to 4\n"

    def test_brightness(self, fake):
        fake.bound = True
        up = runner.invoke(cli_main.app, ["increase-brightness"])
        down = runner.invoke(cli_main.app, ["decrease-brightness"])
        assert up.stdout == "Brightness increased\n"
        assert down.stdout == "Brightness decreased\n"
        assert fake.calls == [("step_brightness", True), ("step_brightness", False)]

    def test_no_binding_is_reported(self, fake):
        result = runner.invoke(cli_main.app, ["increase-brightness"])
        assert result.exit_code == 0
        assert "No keyboard connected" in result.output

    def test_unreachable_daemon(self, fake):
        fake.fail_with = DaemonUnreachable("Cannot reach the controller daemon")
        result = runner.invoke(cli_main.app, ["list"])
        assert result.exit_code == 0
        assert "Cannot reach the controller daemon" in result.output


class TestFailureLines:

    @pytest.mark.parametrize("color", [":red_circle:", "[bold]zz[/bold]", "12:x:34"])
    def test_invalid_color_is_echoed_as_typed(self, fake, color):
        fake.bound = True
        result = runner.invoke(cli_main.app, ["set-rgb-all", "-c", color])
        assert result.exit_code == 0
        assert result.output == f"{color} is not a valid hex color\n"
        assert fake.calls == []

    @pytest.mark.parametrize("message", ["LED :x: rejected", "layer [3] locked", "Keyboard 5 not found"])
    def test_daemon_message_is_printed_verbatim(self, fake, message):
        fake.bound = True
        fake.fail_with = DaemonRejected(message)
        result = runner.invoke(cli_main.app, ["set-layer", "-i", "3"])
        assert result.exit_code == 0
        assert result.output == f"{message}\n"


class TestGlobalOptions:

    def test_version(self):
        result = runner.invoke(cli_main.app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_socket_and_timeout_override(self, fake, tmp_path):
        sock = tmp_path / "other.sock"
        result = runner.invoke(
            cli_main.app, ["--socket", str(sock), "--timeout", "2.5", "disconnect"]
        )
        assert result.exit_code == 0
        settings = fake.created[0]
        assert settings.socket_path == sock
        assert settings.timeout_seconds == 2.5

    def test_settings_from_environment(self, fake, tmp_path):
        runner.invoke(cli_main.app, ["disconnect"])
        assert fake.created[0].socket_path == tmp_path / "daemon.sock"

    def test_real_client_without_daemon(self):
        result = runner.invoke(cli_main.app, ["list"])
        assert result.exit_code == 0
        assert "socket not found" in result.output


class TestDoctor:

    def test_run_lists_keyboards(self, fake):
        result = runner.invoke(cli_main.app, ["doctor", "run"])
        assert result.exit_code == 0
        assert "3 keyboard(s) discovered" in result.output
        assert "Moonlander" in result.output

    def test_setup_writes_user_env(self, tmp_path):
        sock = tmp_path / "k.sock"
        result = runner.invoke(cli_main.app, ["doctor", "setup"], input=f"{sock}\n3\n")
        assert result.exit_code == 0
        env_file = tmp_path / "config" / "kontroll" / ".env"
        content = env_file.read_text(encoding="utf-8")
        assert f"KONTROLL_SOCKET_PATH={sock}" in content
        assert "KONTROLL_TIMEOUT_SECONDS=3" in content

    def test_setup_rejects_bad_timeout(self):
        result = runner.invoke(cli_main.app, ["doctor", "setup"], input="/tmp/x.sock\nabc\n")
        assert result.exit_code != 0
