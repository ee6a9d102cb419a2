"""A networked side-scrolling platformer: world model, ZeroMQ game server and pygame client."""

__version__ = "0.1.0"