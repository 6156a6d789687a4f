import io

import pytest

from depgraph.modules.cli import main


@pytest.fixture
def conf_file(tmp_path):
    path = tmp_path / "depgraph.conf"
    path.write_text("[logging]\nlog_to_console = false\n")
    return path


@pytest.fixture
def commands(tmp_path):
    def write(*lines):
        path = tmp_path / "commands.txt"
        path.write_text("\n".join(lines) + "\n")
        return str(path)
    return write


def run(conf_file, *argv):
    return main(["--no-color", "--conf", str(conf_file), *argv])


def test_run_prints_commands_and_indented_results(conf_file, commands, capsys):
    path = commands(
        "DEPEND A B",
        "DEPEND B C",
        "INSTALL A",
        "REMOVE A",
        "LIST",
    )

    assert run(conf_file, "run", path) == 0

    assert capsys.readouterr().out.splitlines() == [
        "DEPEND A B",
        "DEPEND B C",
        "INSTALL A",
        "   Installing C",
        "   Installing B",
        "   Installing A",
        "REMOVE A",
        "   Removing A",
        "   Removing B",
        "   Removing C",
        "LIST",
    ]


def test_run_reports_rejected_commands(conf_file, commands, capsys):
    path = commands("REMOVE X", "INSTALL X", "LIST")

    assert run(conf_file, "run", path) == 1

    assert capsys.readouterr().out.splitlines() == [
        "REMOVE X",
        "   error: Unknown component: X",
        "INSTALL X",
        "   Installing X",
        "LIST",
        "   X",
    ]


def test_run_reads_stdin(conf_file, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("INSTALL A\nINSTALL A\n"))

    assert run(conf_file, "run", "-") == 0

    assert capsys.readouterr().out.splitlines() == [
        "INSTALL A",
        "   Installing A",
        "INSTALL A",
        "   A is already installed",
    ]


def test_run_missing_file(conf_file, tmp_path, capsys):
    missing = tmp_path / "missing.txt"

    assert run(conf_file, "run", str(missing)) == 2
    assert f"File {missing} not found" in capsys.readouterr().out


def test_output_options_from_config(tmp_path, commands, capsys):
    conf_file = tmp_path / "custom.conf"
    conf_file.write_text("[logging]\nlog_to_console = false\n[output]\nindent = 1\necho_commands = false\n")
    path = commands("DEPEND A B", "INSTALL A")

    assert run(conf_file, "run", path) == 0

    assert capsys.readouterr().out.splitlines() == [" Installing B", " Installing A"]


def test_quiet_suppresses_output(conf_file, commands, capsys):
    path = commands("INSTALL A")

    assert main(["--quiet", "--conf", str(conf_file), "run", path]) == 0
    assert capsys.readouterr().out == ""


def test_missing_conf_file(tmp_path, commands, capsys):
    assert main(["--no-color", "--conf", str(tmp_path / "nope.conf"), "run", commands("LIST")]) == 2
    assert "No configuration file found" in capsys.readouterr().out


def test_info_shows_component_table(conf_file, commands, capsys):
    path = commands("DEPEND WEB TCPIP DNS", "DEPEND FTP TCPIP", "INSTALL WEB")

    assert run(conf_file, "info", path, "TCPIP") == 0

    out = capsys.readouterr().out
    assert "TCPIP" in out
    assert "yes" in out
    assert "FTP, WEB" in out
    assert "Installing" not in out


def test_info_unknown_component(conf_file, commands, capsys):
    assert run(conf_file, "info", commands("INSTALL A"), "B") == 1
    assert "Unknown component: B" in capsys.readouterr().out


@pytest.fixture
def loud_conf(tmp_path):
    path = tmp_path / "loud.conf"
    path.write_text("[logging]\nlevel = warning\n")
    return path


def test_quiet_silences_logger_too(loud_conf, commands, capsys):
    path = commands("REMOVE GHOST")

    assert main(["--quiet", "--no-color", "--conf", str(loud_conf), "run", path]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_no_color_applies_to_log_messages(loud_conf, commands, capsys):
    path = commands("REMOVE GHOST")

    assert main(["--no-color", "--conf", str(loud_conf), "run", path]) == 1

    err = capsys.readouterr().err
    assert "[WARNING] line 1: Unknown component: GHOST" in err
    assert "\033[" not in err


def test_malformed_conf_file(tmp_path, commands, capsys):
    conf_file = tmp_path / "broken.conf"
    conf_file.write_text("indent = 3\n")

    assert main(["--no-color", "--conf", str(conf_file), "run", commands("LIST")]) == 2
    assert "no section headers" in capsys.readouterr().out


@pytest.mark.parametrize("name", ["[/x]", "[red]"])
def test_info_prints_bracketed_names_literally(conf_file, commands, capsys, name):
    path = commands(f"DEPEND {name} B", f"INSTALL {name}")

    assert run(conf_file, "info", path, "B") == 0
    assert name in capsys.readouterr().out

    assert run(conf_file, "info", path, name) == 0
    assert name in capsys.readouterr().out
