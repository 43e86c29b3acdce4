"""Unit tests for the command line interface."""

import pytest

from proton_call import __version__
from proton_call.cli import main, split_program_args


@pytest.fixture
def config_home(temp_dir, config, monkeypatch):
    """Write a proton.conf for ``config`` and point XDG_CONFIG_HOME at it."""
    home = temp_dir / "xdg"
    home.mkdir()
    (home / "proton.conf").write_text(
        f'data = "{config.data}"\nsteam = "{config.steam}"\ncommon = "{config.common}"\n'
    )
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    monkeypatch.delenv("FAKE_PROTON_EXIT", raising=False)
    return home


class TestSplitProgramArgs:
    """Test separating program arguments from proton-call's own."""

    def test_everything_after_exe(self):
        own, extra = split_program_args(["-p", "5.13", "-r", "foo.exe", "--goes", "-p", "x"])
        assert own == ["-p", "5.13", "-r", "foo.exe"]
        assert extra == ["--goes", "-p", "x"]

    def test_attached_forms(self):
        assert split_program_args(["--run=foo.exe", "a"]) == (["--run=foo.exe"], ["a"])
        assert split_program_args(["-rfoo.exe", "a"]) == (["-rfoo.exe"], ["a"])

    def test_grouped_short_flags(self):
        assert split_program_args(["-lr", "game.exe", "--fullscreen"]) == (
            ["-lr", "game.exe"],
            ["--fullscreen"],
        )
        assert split_program_args(["-lVrgame.exe", "-x"]) == (["-lVrgame.exe"], ["-x"])

    def test_double_dash(self):
        assert split_program_args(["-l", "--", "-r"]) == (["-l"], ["-r"])

    def test_no_program(self):
        assert split_program_args(["-i"]) == (["-i"], [])


class TestMain:
    """Test end to end runs of main()."""

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_index_listing(self, config_home, config, capsys):
        assert main(["--index"]) == 0

        out = capsys.readouterr().out
        assert "Indexed 2 Proton versions:" in out
        assert out.index("Proton 5.13") < out.index("Proton 6.3")

    def test_run_success(self, config_home, config):
        assert main(["-l", "-p", "5.13", "-r", "game.exe", "--fullscreen"]) == 0

        argv = (config.data / "argv.txt").read_text().splitlines()
        assert argv == ["run", "game.exe", "--fullscreen"]
        env = (config.data / "env.txt").read_text().splitlines()
        assert "PROTON_LOG=1" in env

    def test_child_failure(self, config_home, monkeypatch, capsys):
        monkeypatch.setenv("FAKE_PROTON_EXIT", "7")

        assert main(["-r", "game.exe"]) == 4
        err = capsys.readouterr().err
        assert err.startswith("proton-call: ")
        assert "7" in err

    def test_version_not_installed(self, config_home, capsys):
        assert main(["-p", "7.0", "-r", "game.exe"]) == 3
        assert "Proton 7.0 does not exist" in capsys.readouterr().err

    def test_bad_version_is_usage_error(self, config_home, capsys):
        assert main(["-p", "seven", "-r", "game.exe"]) == 2
        assert "invalid Proton version: 'seven'" in capsys.readouterr().err

    def test_bad_option_is_usage_error(self, config_home, capsys):
        assert main(["-o", "turbo", "-r", "game.exe"]) == 2
        assert "unknown runtime option" in capsys.readouterr().err

    def test_missing_program(self, config_home, capsys):
        assert main([]) == 2
        assert "no program to run" in capsys.readouterr().err

    def test_usage_checked_before_config(self, temp_dir, monkeypatch, capsys):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "nowhere"))

        assert main(["-p", "bad", "-r", "game.exe"]) == 2

    def test_missing_config(self, temp_dir, monkeypatch, capsys):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "nowhere"))

        assert main(["-r", "game.exe"]) == 1
        assert "failed to open config" in capsys.readouterr().err

    def test_custom_mode(self, config_home, temp_dir, proton_installer, config):
        custom = proton_installer(temp_dir / "GE-Proton7-20")

        assert main(["-c", str(custom), "-r", "game.exe", "x"]) == 0
        assert (config.data / "argv.txt").read_text().splitlines() == ["run", "game.exe", "x"]

    def test_grouped_log_and_run(self, config_home, config):
        assert main(["-lr", "game.exe", "--fullscreen"]) == 0

        argv = (config.data / "argv.txt").read_text().splitlines()
        assert argv == ["run", "game.exe", "--fullscreen"]
        assert "PROTON_LOG=1" in (config.data / "env.txt").read_text().splitlines()

    def test_abbreviated_long_option_rejected(self, config_home):
        with pytest.raises(SystemExit) as exc_info:
            main(["--ru", "game.exe"])
        assert exc_info.value.code == 2

    def test_non_utf8_config(self, config_home, capsys):
        (config_home / "proton.conf").write_bytes(b'data = "\xff\xfe"\n')

        assert main(["-r", "game.exe"]) == 1
        err = capsys.readouterr().err
        assert err.startswith("proton-call: failed to parse config")
        assert len(err.strip().splitlines()) == 1
