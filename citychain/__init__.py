"""City chain game: protocol, thread-safe queue, matchmaking TCP server, match host and client."""

__version__ = "0.1.0"