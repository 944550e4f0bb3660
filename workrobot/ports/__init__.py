"""Port interfaces (Hexagonal Architecture)."""

from workrobot.ports.outbound import TransportPort, UploaderPort

__all__ = ["TransportPort", "UploaderPort"]
