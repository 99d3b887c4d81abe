"""Core protocols for dependency injection.

Domain-specific protocols (providers, identity resolvers) live in their
respective domains/ directories. This module keeps cross-cutting
infrastructure protocols only.
"""

from authflow.core.protocols.http import HttpTransport, TransportOptions, TransportResponse

__all__ = [
    "HttpTransport",
    "TransportOptions",
    "TransportResponse",
]
