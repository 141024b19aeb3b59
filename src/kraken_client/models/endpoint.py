"""
Endpoint descriptor models for Kraken client.

An EndpointDescriptor is the immutable product of a finalized request
builder and the only thing the transport needs to issue a call.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple
from urllib.parse import urlencode

from ..constants import API_VERSION, NONCE_PARAM


class MethodType(Enum):
    """Endpoint classification."""
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class EndpointDescriptor:
    """Immutable request descriptor handed to the transport."""
    method_type: MethodType
    endpoint_name: str
    parameters: Optional[Mapping[str, str]] = None

    def __post_init__(self):
        if self.parameters is not None and not isinstance(self.parameters, MappingProxyType):
            object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def is_private(self) -> bool:
        return self.method_type is MethodType.PRIVATE

    @property
    def http_method(self) -> str:
        return "POST" if self.is_private else "GET"

    @property
    def url_path(self) -> str:
        """Path component, e.g. ``/0/private/CancelOrder``."""
        return f"/{API_VERSION}/{self.method_type.value}/{self.endpoint_name}"

    @property
    def nonce(self) -> Optional[str]:
        if not self.parameters:
            return None
        return self.parameters.get(NONCE_PARAM) or None

    def url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}{self.url_path}"

    def wire_params(self) -> List[Tuple[str, str]]:
        """Parameters sent on the wire: non-empty values in insertion order."""
        if not self.parameters:
            return []
        return [(key, value) for key, value in self.parameters.items() if value != ""]

    def encoded_params(self) -> str:
        """URL-encoded parameters: the query string (public) or POST body (private)."""
        return urlencode(self.wire_params())
