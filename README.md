# remoteshell

A small remote shell that works over TCP. A server listens on a port and
runs the commands it receives. A client connects to it and shows a prompt
with the server's working directory. Depending on the command, the client
sends it to the server or runs it on the local machine.

## Installation

```
pip install .
```

Python 3.10 or newer is needed. The package uses only the standard library.

## Running

Start the server. By default it listens on port 2000 on all interfaces.
Each client is served on its own thread:

```
remoteshell-server [--host HOST] [--port PORT]
```

In another terminal, start the client. By default it connects to
`127.0.0.1`, port 2000. At start-up it prints its environment variables:

```
remoteshell-client [--host HOST] [--port PORT]
```

Before each command the prompt shows the client's address and the server's
current directory:

```
client:127.0.0.1:~/home/user:
```

Enter an empty line, or end the input, to quit.

## Commands

The following commands are sent to the server and run there:

- `cat`, `ls`, `cd`, `pwd`, `mkdir`, `rm`

The same commands with an `l` in front run on the client's machine:

- `lcat`, `lls`, `lcd`, `lpwd`, `lmkdir`, `lrm`

The client ignores any other input line. A program is found by looking up
its name in `/bin`, and it runs with an empty environment. `lcd` changes the
client's working directory. If the argument contains a `/`, that path is
used. Otherwise it goes to the home directory.

## What it does not do

- The output of a command run on the server goes to the server's own
  terminal and is not sent back to the client. The server only echoes the
  command line back as an acknowledgement.
- `cd` on the server runs as a separate process, so it does not change the
  directory that the server reports.
- There is no authentication and no encryption. Anyone who can reach the
  port can run commands.

## Wire format

Each message is a fixed block of 256 bytes. It holds UTF-8 text, padded
with zero bytes, and at most 255 bytes of text fit in one block.
`remoteshell.protocol` provides `pack_message`, `unpack_message`,
`send_message` and `recv_message` for this format. It also provides
`tokenize`, which splits text on any of a set of delimiter characters and
drops empty fields. The text `returnServerFilesystemInformation` asks the
server for its directory. The server replies with `server:<cwd>`.

## Using it from Python

```python
from remoteshell.client import RemoteShellClient

with RemoteShellClient("127.0.0.1", 2000) as client:
    print(client.server_directory())
    client.execute_remote("mkdir demo")
```

`remoteshell.server.handle_message` processes one message and returns the
reply. It takes an optional runner callable in place of actually running
commands. `create_listener` and `serve` set up and run the server from code.