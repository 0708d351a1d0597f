"""
Module: response.py
Description: Expected shapes of decoded server responses.

Each model describes one endpoint's response body. Fields use strict
types so a body of the wrong shape fails validation instead of being
coerced; unknown fields are ignored to tolerate newer servers.
"""

from typing import Annotated, Any, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBytes, StrictInt, StrictStr, ValidationError

from queued_client.errors import QueuedResponseValidationError

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class _Response(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class PolledMessageBody(_Response):
    contents: StrictBytes
    id: StrictInt = Field(..., ge=0)
    poll_tag: StrictInt = Field(..., ge=0)


class PollResponse(_Response):
    """Body of POST /queue/{name}/messages/poll."""

    messages: List[PolledMessageBody]


class PushResponse(_Response):
    """Body of POST /queue/{name}/messages/push; ids follow input order."""

    ids: List[Annotated[StrictInt, Field(ge=0)]]


class UpdateResponse(_Response):
    """Body of POST /queue/{name}/messages/update."""

    new_poll_tag: StrictInt = Field(..., ge=0)


class QueueInfo(_Response):
    """A queue as listed by the server."""

    name: StrictStr


class ListQueuesResponse(_Response):
    """Body of GET /queues."""

    queues: List[QueueInfo]


class HealthStatus(_Response):
    """Body of GET /healthz."""

    version: StrictStr


def parse_response(model: Type[ResponseT], raw: Any) -> ResponseT:
    """
    Validate a decoded response body against its expected shape.

    Args:
        model: Response model for the endpoint
        raw: Decoded response body

    Returns:
        Validated model instance

    Raises:
        QueuedResponseValidationError: If the body does not match
    """
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise QueuedResponseValidationError(
            f"Unexpected {model.__name__} body from queued: {e}"
        ) from e
