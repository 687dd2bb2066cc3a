"""Two-phase action protocol shared by every API operation.

An action is a small value describing one operation ("read this document").
Executing it happens in two phases:

1. ``make_request(transport)`` consumes the action and asks the transport to
   build exactly one request. It returns the request plus whatever state the
   second phase needs that the response won't contain (for example the
   database name a document was read from). No I/O happens here.

2. ``take_response(response, state)`` is a classmethod. It only sees the
   response and the carried state, never the action, and turns them into the
   operation's output or raises a CouchError.

Splitting the phases lets request building be tested by comparing requests
from the mock transport, and response handling be tested by feeding in a
hand-built response.

Usage:
    action = ReadDocument("/baseball/babe-ruth")
    document = run_action(action, transport)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .exceptions import CouchActionConsumedError
from .transport import CouchResponse, CouchTransport

logger = logging.getLogger("couch-tools")

Output = TypeVar("Output")
State = TypeVar("State")


class Action(ABC, Generic[Output, State]):
    """Base class for API operations.

    Subclasses implement ``_build_request`` and ``take_response``. An action
    can build its request only once; afterwards it is spent and any further
    use raises CouchActionConsumedError.
    """

    def __init__(self):
        self._consumed = False

    @property
    def consumed(self) -> bool:
        """Whether the request has already been built."""
        return self._consumed

    def _check_not_consumed(self) -> None:
        if self._consumed:
            raise CouchActionConsumedError(
                f"{type(self).__name__} was already executed and cannot be reused"
            )

    def make_request(self, transport: CouchTransport) -> tuple[Any, State]:
        """Build the request for this action.

        The action is marked consumed before anything else, so a failed build
        still spends it.

        Args:
            transport: Transport used to construct the request

        Returns:
            Tuple of (transport-native request, state for take_response)

        Raises:
            CouchActionConsumedError: If called a second time
            CouchConstructionError: If the action's parameters are invalid
        """
        self._check_not_consumed()
        self._consumed = True
        return self._build_request(transport)

    @abstractmethod
    def _build_request(self, transport: CouchTransport) -> tuple[Any, State]:
        """Encode the action's parameters into exactly one transport call."""
        pass

    @classmethod
    @abstractmethod
    def take_response(cls, response: CouchResponse, state: State) -> Output:
        """Interpret a response using the state carried from make_request."""
        pass


def run_action(action: Action[Output, Any], transport: CouchTransport) -> Output:
    """Execute both phases of an action against a transport.

    Args:
        action: Action to execute (consumed by this call)
        transport: Transport that builds and sends the request

    Returns:
        The action's output

    Raises:
        CouchError: Any construction, transport, protocol, or decoding error
    """
    action_name = type(action).__name__
    request, state = action.make_request(transport)
    logger.debug(f"{action_name}: sending {request!r}")
    response = transport.send(request)
    logger.debug(f"{action_name}: received HTTP {response.status_code}")
    return type(action).take_response(response, state)
