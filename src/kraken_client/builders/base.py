"""
Request builder capability shared by every endpoint builder.

A builder owns one ParameterList. Endpoint-specific setters write into it
and ``finish`` / ``finish_clone`` turn it into an EndpointDescriptor,
injecting a fresh nonce for private endpoints. A finalized builder is
consumed: further use raises BuildError.
"""

import copy
import logging
from typing import Any, Iterable, Optional, Tuple, TypeVar

from ..auth import NonceSource, default_nonce_source
from ..constants import NONCE_PARAM
from ..exceptions import BuildError
from ..models.endpoint import EndpointDescriptor, MethodType
from ..params import ParameterList

logger = logging.getLogger(__name__)

B = TypeVar("B", bound="RequestBuilder")


class RequestBuilder:
    """Base request builder. Subclasses set ENDPOINT and METHOD_TYPE."""

    ENDPOINT: str = ""
    METHOD_TYPE: MethodType = MethodType.PRIVATE

    def __init__(self, nonce_source: Optional[NonceSource] = None):
        """
        Initialize an empty builder.

        Args:
            nonce_source: Nonce generator used at finalize time for private
                endpoints (default: the process-wide source)
        """
        self._params: Optional[ParameterList] = ParameterList()
        self._nonce_source = nonce_source

    @property
    def params(self) -> ParameterList:
        """The live parameter list. Raises BuildError once finalized."""
        if self._params is None:
            raise BuildError(f"{type(self).__name__} builder already finalized")
        return self._params

    @property
    def finalized(self) -> bool:
        return self._params is None

    def update_input(self: B, key: str, value: Any) -> B:
        """Set a parameter, replacing any previous value."""
        self.params.set(key, value)
        return self

    def finish(self) -> EndpointDescriptor:
        """Produce the endpoint descriptor and consume this builder."""
        params = self._take_params()
        return self._describe(params)

    def finish_clone(self: B) -> Tuple[EndpointDescriptor, B]:
        """
        Produce the endpoint descriptor plus a new builder holding a copy of
        the finalized parameters, for repeated requests such as polling.

        The nonce written into the copy is refreshed on the next finalize.
        This builder is consumed; use the returned one.
        """
        params = self._take_params()
        clone = copy.copy(self)
        clone._params = params.copy()
        return self._describe(params), clone

    def _take_params(self) -> ParameterList:
        params = self.params
        self._params = None
        if self.METHOD_TYPE is MethodType.PRIVATE:
            source = self._nonce_source or default_nonce_source()
            params.set(NONCE_PARAM, source.next())
        return params

    def _describe(self, params: ParameterList) -> EndpointDescriptor:
        logger.debug(f"Finalized {self.METHOD_TYPE.value} endpoint {self.ENDPOINT}")
        return EndpointDescriptor(
            method_type=self.METHOD_TYPE,
            endpoint_name=self.ENDPOINT,
            parameters=params.as_dict(),
        )


class ListParameterMixin:
    """Adds delimiter-joined list handling for the parameter named LIST_NAME."""

    LIST_NAME: str = ""

    def with_item(self, item: Any):
        """Append one item to the list parameter, skipping duplicates."""
        self.params.list_append(self.LIST_NAME, item)
        return self

    def with_item_list(self, items: Iterable[Any]):
        """Append every item of an iterable to the list parameter.

        All-or-nothing: a rejected item leaves the builder unchanged.
        """
        updated = self.params.copy()
        for item in items:
            updated.list_append(self.LIST_NAME, item)
        self._params = updated
        return self

    def replace_list(self, items: Iterable[Any]):
        """Replace the whole list parameter. A rejected item leaves the builder unchanged."""
        updated = self.params.copy()
        updated.set(self.LIST_NAME, "")
        for item in items:
            updated.list_append(self.LIST_NAME, item)
        self._params = updated
        return self

    def clear_list(self):
        """Blank the list parameter so it is left off the request."""
        self.params.set(self.LIST_NAME, "")
        return self
