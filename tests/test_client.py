import io
import os
import socket
import threading

import pytest

from remoteshell.client import (
    RemoteShellClient,
    change_directory,
    command_loop,
    format_prompt,
    is_remote_command,
    local_command,
    main,
    run_local,
)
from remoteshell.server import create_listener, handle_connection


@pytest.fixture
def fake_server():
    calls = []
    listener = create_listener("127.0.0.1", 0)
    port = listener.getsockname()[1]

    def accept_one():
        try:
            conn, _ = listener.accept()
        except OSError:
            return
        handle_connection(conn, runner=lambda argv: calls.append(list(argv)))

    thread = threading.Thread(target=accept_one, daemon=True)
    thread.start()
    yield "127.0.0.1", port, calls
    listener.close()


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.mark.parametrize(
    "tokens, expected",
    [
        (["lls", "-l"], ["ls", "-l"]),
        (["lcd", "/tmp"], ["cd", "/tmp"]),
        (["lmkdir", "dir"], ["mkdir", "dir"]),
        (["lrm", "file"], ["rm", "file"]),
    ],
)
def test_local_command_strips_prefix(tokens, expected):
    assert local_command(tokens) == expected


@pytest.mark.parametrize("tokens", [[], ["ls"], ["lecho", "x"], ["l"]])
def test_local_command_rejects_others(tokens):
    assert local_command(tokens) is None


@pytest.mark.parametrize("name", ["cat", "ls", "cd", "pwd", "mkdir", "rm"])
def test_is_remote_command_accepts_server_commands(name):
    assert is_remote_command([name, "arg"]) is True


@pytest.mark.parametrize("tokens", [[], ["lls"], ["echo"], ["rmdir"]])
def test_is_remote_command_rejects_others(tokens):
    assert is_remote_command(tokens) is False


def test_format_prompt():
    assert format_prompt("127.0.0.1", "/srv") == "\nclient:127.0.0.1:~/srv:"


def test_change_directory_to_path(tmp_path, monkeypatch):
    monkeypatch.chdir(os.getcwd())
    result = change_directory(str(tmp_path))
    assert os.path.realpath(result) == os.path.realpath(str(tmp_path))
    assert os.path.realpath(os.getcwd()) == os.path.realpath(str(tmp_path))


@pytest.mark.parametrize("argument", [None, "", "relative"])
def test_change_directory_without_path_goes_home(tmp_path, monkeypatch, argument):
    monkeypatch.chdir(os.getcwd())
    monkeypatch.setenv("HOME", str(tmp_path))
    result = change_directory(argument)
    assert os.path.realpath(result) == os.path.realpath(str(tmp_path))


def test_change_directory_missing_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(os.getcwd())
    with pytest.raises(OSError):
        change_directory(str(tmp_path / "missing"))


def test_run_local_success():
    assert run_local(["true"]) == 0


def test_run_local_unknown_command(capsys):
    assert run_local(["no-such-program-here"]) == 1
    assert '"no-such-program-here": command not found' in capsys.readouterr().out


def test_run_local_requires_command():
    with pytest.raises(ValueError):
        run_local([])


def test_unconnected_client_raises():
    client = RemoteShellClient("127.0.0.1", 1)
    with pytest.raises(ConnectionError):
        client.server_directory()


def test_connect_refused():
    client = RemoteShellClient("127.0.0.1", _free_port())
    with pytest.raises(OSError):
        client.connect()


def test_server_directory(fake_server, tmp_path, monkeypatch):
    host, port, _ = fake_server
    monkeypatch.chdir(tmp_path)
    with RemoteShellClient(host, port) as client:
        assert client.server_directory() == os.getcwd()


def test_execute_remote_echoes_and_runs(fake_server):
    host, port, calls = fake_server
    with RemoteShellClient(host, port) as client:
        assert client.execute_remote("ls -l") == "ls -l"
        assert client.server_directory() == os.getcwd()
    assert calls == [["ls", "-l"]]


def test_close_disconnects(fake_server):
    host, port, _ = fake_server
    client = RemoteShellClient(host, port)
    with client:
        assert client.local_address == "127.0.0.1"
    with pytest.raises(ConnectionError):
        client.execute_remote("ls")


def test_command_loop_sends_remote_commands(fake_server):
    host, port, calls = fake_server
    stdin = io.StringIO("ls -a\ncat notes\nfoo bar\n\n")
    stdout = io.StringIO()
    with RemoteShellClient(host, port) as client:
        assert command_loop(client, stdin, stdout) == 0
    assert calls == [["ls", "-a"], ["cat", "notes"]]
    output = stdout.getvalue()
    assert 'Executing command "ls -a" on server' in output
    assert "foo" not in output
    assert output.count("\nclient:127.0.0.1:~") == 4


def test_command_loop_stops_at_end_of_input(fake_server):
    host, port, calls = fake_server
    with RemoteShellClient(host, port) as client:
        assert command_loop(client, io.StringIO("pwd"), io.StringIO()) == 0
    assert calls == [["pwd"]]


def test_command_loop_local_cd(fake_server, tmp_path, monkeypatch):
    host, port, calls = fake_server
    monkeypatch.chdir(os.getcwd())
    stdin = io.StringIO(f"lcd {tmp_path}\n")
    stdout = io.StringIO()
    with RemoteShellClient(host, port) as client:
        command_loop(client, stdin, stdout)
    assert os.path.samefile(os.getcwd(), tmp_path)
    assert calls == []
    assert 'Executing command "cd" locally' in stdout.getvalue()


def test_main_reports_connection_failure(capsys):
    assert main(["--host", "127.0.0.1", "--port", str(_free_port())]) == 1
    assert "Error: failure in requesting a connection" in capsys.readouterr().out