# 📄 File: authhub/api/responder.py
# 🧭 Purpose (Layman Explanation):
# Turns the single answer an operation gave ("user not found", "success"...) into the matching
# web response with the right status code.
#
# 🧪 Purpose (Technical Summary):
# ChannelResponder maps every declared output channel of one operation class to one HTTP status
# and renders the emitted payload as JSON. The mapping is checked when the router module is
# imported, so an unmapped channel fails application startup rather than a live request.
#
# 🔗 Dependencies:
# FastAPI (JSONResponse, jsonable_encoder), authhub.shared.core.operation
#
# 🔄 Connected Modules / Calls From:
# user_management presentation routers (users, auth)

from typing import Any, Dict, Mapping, Optional, Type

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from authhub.shared.core.exceptions import OperationError
from authhub.shared.core.operation import SUCCESS, Operation, OperationOutcome
from authhub.shared.utils.logging import get_request_id

# Status shared by every operation for its framework channels
DEFAULT_STATUSES: Dict[str, int] = {
    "ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "VALIDATION_ERROR": 422,
}


class ChannelResponder:
    """
    HTTP rendering of one operation class's outcomes.

    Args:
        operation: Operation class whose ``Output`` enum is being mapped
        statuses: Channel name to HTTP status for the operation specific channels
            (``SUCCESS`` included); ``ERROR`` and ``VALIDATION_ERROR`` default
            to 500 and 422
        success_model: Response schema documented for ``SUCCESS``
        error_model: Response schema documented for every other channel

    Raises:
        ValueError: If a declared channel has no status, or a status is given
            for a channel the operation does not declare
    """

    def __init__(
        self,
        operation: Type[Operation],
        statuses: Mapping[str, int],
        success_model: Optional[type] = None,
        error_model: Optional[type] = None,
    ):
        declared = [member.value for member in operation.Output] if operation.Output else []
        mapping = {name: code for name, code in DEFAULT_STATUSES.items() if name in declared}
        mapping.update(statuses)

        unknown = set(mapping) - set(declared)
        if unknown:
            raise ValueError(f"{operation.__name__} does not declare channels {sorted(unknown)}")
        missing = [name for name in declared if name not in mapping]
        if missing:
            raise ValueError(f"{operation.__name__} channels without an HTTP status: {missing}")

        self.operation = operation
        self.statuses = mapping
        self.success_model = success_model
        self.error_model = error_model

    def status_for(self, channel: str) -> int:
        return self.statuses[channel]

    def responses(self) -> Dict[int, Dict[str, Any]]:
        """OpenAPI ``responses`` documentation derived from the mapping."""
        docs: Dict[int, Dict[str, Any]] = {}
        for channel, code in self.statuses.items():
            entry = docs.setdefault(code, {"description": ""})
            entry["description"] = ", ".join(filter(None, [entry["description"], channel]))
            model = self.success_model if channel == SUCCESS else self.error_model
            if model is not None:
                entry["model"] = model
        return docs

    def body(self, outcome: OperationOutcome) -> Any:
        payload = outcome.payload
        if outcome.channel == SUCCESS:
            return jsonable_encoder(payload)

        if isinstance(payload, OperationError):
            error = {"code": payload.code, "message": payload.message}
        elif isinstance(payload, Mapping):
            details = {k: v for k, v in payload.items() if k != "message"}
            error = {"code": outcome.channel, "message": payload.get("message", outcome.channel)}
            if details:
                error["details"] = details
        else:
            error = {"code": outcome.channel, "message": str(payload) if payload is not None else outcome.channel}

        error["request_id"] = get_request_id()
        return {"error": jsonable_encoder(error)}

    def respond(self, outcome: OperationOutcome) -> JSONResponse:
        return JSONResponse(status_code=self.status_for(outcome.channel), content=self.body(outcome))
