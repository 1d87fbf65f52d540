"""Interactive client: runs l-prefixed commands locally and plain ones on the server."""

from __future__ import annotations

import argparse
import os
import socket
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from remoteshell.protocol import (
    SERVER_HOST,
    SERVER_INFO_REQUEST,
    SERVER_IP,
    SERVER_PORT,
    recv_message,
    send_message,
    tokenize,
)
from remoteshell.server import executable_path

LOCAL_COMMANDS = frozenset({"lcat", "lls", "lcd", "lpwd", "lmkdir", "lrm"})
REMOTE_COMMANDS = frozenset({"cat", "ls", "cd", "pwd", "mkdir", "rm"})


class RemoteShellClient:
    """A connection to a remote shell server."""

    def __init__(self, host: str = SERVER_IP, port: int = SERVER_PORT) -> None:
        self.host = host
        self.port = port
        self._sock: socket.socket | None = None

    def connect(self) -> RemoteShellClient:
        """Open the TCP connection to the server."""
        if self._sock is None:
            self._sock = socket.create_connection((self.host, self.port))
        return self

    def close(self) -> None:
        """Close the connection if it is open."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    @property
    def local_address(self) -> str:
        """The client's own IP address on this connection."""
        return self._connection().getsockname()[0]

    def _connection(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionError("not connected to a server")
        return self._sock

    def _exchange(self, text: str) -> str:
        sock = self._connection()
        send_message(sock, text)
        reply = recv_message(sock)
        if reply is None:
            raise ConnectionError("server closed the connection")
        return reply

    def server_directory(self) -> str:
        """Ask the server for its working directory."""
        fields = tokenize(self._exchange(SERVER_INFO_REQUEST), ":")
        return fields[1] if len(fields) > 1 else ""

    def execute_remote(self, line: str) -> str:
        """Have the server run ``line`` and return its acknowledgement."""
        return self._exchange(line)

    def __enter__(self) -> RemoteShellClient:
        return self.connect()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def local_command(tokens: Sequence[str]) -> list[str] | None:
    """Return the local form of an l-prefixed command, or ``None`` if it is not one."""
    if not tokens or tokens[0] not in LOCAL_COMMANDS:
        return None
    return [tokens[0][1:], *tokens[1:]]


def is_remote_command(tokens: Sequence[str]) -> bool:
    """Tell whether the tokens form a command the server runs."""
    return bool(tokens) and tokens[0] in REMOTE_COMMANDS


def change_directory(path: str | None = None) -> str:
    """Change to ``path`` if it looks like a path, otherwise to the home directory."""
    target = path if path and "/" in path else str(Path.home())
    os.chdir(target)
    return os.getcwd()


def run_local(argv: Sequence[str]) -> int:
    """Run ``argv[0]`` from /bin/ with an empty environment and wait for it."""
    if not argv:
        raise ValueError("no command given")
    sys.stdout.flush()
    try:
        completed = subprocess.run(
            list(argv), executable=executable_path(argv[0]), env={}, check=False
        )
    except OSError:
        print(f'"{argv[0]}": command not found')
        return 1
    return completed.returncode


def format_prompt(address: str, directory: str) -> str:
    """Build the prompt shown before each command."""
    return f"\nclient:{address}:~{directory}:"


def command_loop(
    client: RemoteShellClient,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Read commands until an empty line or end of input, dispatching each one."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    while True:
        directory = client.server_directory()
        stdout.write(format_prompt(client.local_address, directory))
        stdout.flush()
        line = stdin.readline()
        if line.endswith("\n"):
            line = line[:-1]
        if not line:
            return 0
        tokens = tokenize(line, " ")
        local = local_command(tokens)
        if local is not None:
            print(f'Executing command "{local[0]}" locally', file=stdout)
            if local[0] == "cd":
                try:
                    change_directory(local[1] if len(local) > 1 else None)
                except OSError as error:
                    print(f"cd: {error}", file=stdout)
            else:
                stdout.flush()
                run_local(local)
        elif is_remote_command(tokens):
            print(f'Executing command "{line}" on server', file=stdout)
            client.execute_remote(line)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point for the client."""
    parser = argparse.ArgumentParser(description="Connect to a remote shell server.")
    parser.add_argument("--host", default=SERVER_IP, help="server address")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="server port")
    args = parser.parse_args(argv)

    for key, value in os.environ.items():
        print(f'"{key}={value}"')

    print("------------Client Start------------")
    client = RemoteShellClient(args.host, args.port)
    try:
        client.connect()
    except OSError:
        print("Error: failure in requesting a connection")
        return 1
    host_name = SERVER_HOST if args.host == SERVER_IP else args.host
    print(f"Connection to IP: {host_name} on port: {args.port}")
    with client:
        try:
            return command_loop(client)
        except KeyboardInterrupt:
            return 0
        except ConnectionError as error:
            print(f"Error: {error}", file=sys.stderr)
            return 1