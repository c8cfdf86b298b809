# netclocksync

A small peer-to-peer node that talks over UDP. Each node keeps a list of the
peers it knows and can join an existing network through any one member. It
uses a fixed big-endian binary message format (HELLO, HELLO_REPLY, CONNECT,
ACK_CONNECT, SYNC_START, DELAY_REQUEST, DELAY_RESPONSE, LEADER, GET_TIME,
TIME) meant as the groundwork for clock synchronization between nodes.

## Installation

```
pip install .
```

## Running a node

Start the first node of a network on a chosen address and port:

```
netclocksync -b 127.0.0.1 -p 5000
```

To join an existing network, name one of its members with `-a` and `-r`:

```
netclocksync -b 127.0.0.1 -p 5001 -a 127.0.0.1 -r 5000
```

Options:

| Option | Meaning |
|--------|---------|
| `-b ADDRESS` | IPv4 address to bind to (all interfaces if left out) |
| `-p PORT` | port to bind to (the system picks one if left out) |
| `-a ADDRESS` | address of a peer already in the network |
| `-r PORT` | port of that peer |

Every option takes exactly one value. `-a` and `-r` must be given together
or not at all. Ports must be numbers from 1 to 65535. Bad arguments make the
command print the error and exit with status 1.

The joining node adds the named peer to its list and sends it HELLO. That
peer answers with HELLO_REPLY listing the other peers it knows, and adds the
newcomer to its own list. The new node then sends CONNECT to each listed
peer; each one records the sender and answers with ACK_CONNECT, upon which
the new node records it in turn.

While running, the node logs every message it sends and receives on
standard error. The socket has a receive timeout of 5 seconds; a timeout is
logged as `recvfrom fail or timeout` and the node keeps listening. Ctrl+C
closes the socket and exits with status 130. SIGQUIT (Ctrl+\\) prints every
known peer, closes the socket and exits with status 1.

A malformed datagram, or a SYNC_START, DELAY_REQUEST or DELAY_RESPONSE
message from a sender that is not a known peer, ends the node with an error
and exit status 1.

## What it does not do

The node does not yet synchronize any clocks. SYNC_START, DELAY_REQUEST,
DELAY_RESPONSE, LEADER, GET_TIME and TIME messages are decoded, logged and
move the node's expected-message state (`SyncManager`), but no delays are
measured, no offsets are computed and no time is ever sent. The receive
timeout stays fixed at 5 seconds; `SyncManager.receive_timeout` reports a
timeout for the current state but the node does not apply it.

## Using it as a library

- `netclocksync.messages` encodes and decodes the wire messages
  (`Message`, `MessageType`, `decode_message`, `message_size`,
  `message_name`, `allows_unknown_sender`).
- `netclocksync.peers` holds peer records and the peer list (`Peer`,
  `PeerRegistry`, `decode_peer`, `decode_peers`).
- `netclocksync.args` parses the command line (`parse_args`, `read_port`,
  `ProgramArgs`).
- `netclocksync.clock` offers millisecond clocks (`Clock`).
- `netclocksync.sync` tracks the synchronization state (`SyncManager`).
- `netclocksync.netutil` resolves addresses, opens the socket and validates
  received datagrams (`open_socket`, `validate_received_data`).
- `netclocksync.send` and `netclocksync.handler` send and react to
  messages (`Sender`, `Handler`).
- `netclocksync.node` runs a whole node (`Node`, `main`); `Node` can be used
  as a context manager that closes its socket on exit.

```python
from netclocksync.messages import Message, MessageType, decode_message

data = Message(MessageType.HELLO_REPLY, count=2).encode()
print(decode_message(data).describe())
```

## Running the tests

```
pip install .[test]
pytest
```