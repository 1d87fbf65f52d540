"""TCP server that runs the commands its clients send and reports its working directory."""

from __future__ import annotations

import argparse
import os
import socket
import subprocess
import sys
import threading
from collections.abc import Callable, Sequence

from remoteshell.protocol import (
    SERVER_HOST,
    SERVER_INFO_REQUEST,
    SERVER_PORT,
    recv_message,
    send_message,
    tokenize,
)

Runner = Callable[[Sequence[str]], object]

BIN_DIRECTORY = "/bin/"


def executable_path(name: str) -> str:
    """Return the path under /bin/ where the program ``name`` is looked up."""
    return BIN_DIRECTORY + name


def run_command(argv: Sequence[str]) -> int:
    """Run ``argv[0]`` from /bin/ with an empty environment and wait for it."""
    if not argv:
        raise ValueError("no command given")
    path = executable_path(argv[0])
    print(f"executable path: {path}")
    sys.stdout.flush()
    try:
        completed = subprocess.run(list(argv), executable=path, env={}, check=False)
    except OSError:
        print(f"{argv[0]}: command not found")
        return 1
    return completed.returncode


def server_information(cwd: str | None = None) -> str:
    """Build the reply to a filesystem information request."""
    return "server:" + (os.getcwd() if cwd is None else cwd)


def handle_message(line: str, runner: Runner = run_command) -> str:
    """Process one message from a client and return the reply to send back."""
    if line == SERVER_INFO_REQUEST:
        print("\tDetected request for server information")
        return server_information()
    tokens = tokenize(line, " ")
    if tokens:
        runner(tokens)
    return line


def handle_connection(conn: socket.socket, runner: Runner = run_command) -> None:
    """Serve one client until it disconnects."""
    with conn:
        while True:
            line = recv_message(conn)
            if line is None:
                print("Client died")
                return
            print(f'Message Recieved: "{line}"')
            reply = handle_message(line, runner)
            send_message(conn, reply)
            if line == SERVER_INFO_REQUEST:
                print("\tSent client server information\n")
            else:
                print(f'Sent message : "{reply}"')
                print("\nReady")


def create_listener(host: str = "", port: int = SERVER_PORT, backlog: int = 5) -> socket.socket:
    """Create a TCP socket bound to ``host``:``port`` and listening."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind((host, port))
        listener.listen(backlog)
    except OSError:
        listener.close()
        raise
    return listener


def serve(host: str = "", port: int = SERVER_PORT) -> None:
    """Accept clients forever, serving each on its own thread."""
    print("------------Starting Server------------")
    with create_listener(host, port) as listener:
        print(f"   Hostname = {SERVER_HOST} port = {listener.getsockname()[1]}")
        print("------------Server Ready------------")
        while True:
            conn, (address, client_port) = listener.accept()
            print(f"Connection accepted\nClinet: IP = {address} port = {client_port}\n")
            threading.Thread(target=handle_connection, args=(conn,), daemon=True).start()


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point for the server."""
    parser = argparse.ArgumentParser(description="Run the remote shell server.")
    parser.add_argument("--host", default="", help="address to bind (default: all interfaces)")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="port to listen on")
    args = parser.parse_args(argv)
    try:
        serve(args.host, args.port)
    except OSError as error:
        print(f"   Error: {error}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0