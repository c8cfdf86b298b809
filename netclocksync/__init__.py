"""Peer-to-peer UDP node that joins a network of peers using a binary clock synchronization message format."""

__version__ = "0.1.0"