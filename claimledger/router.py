"""
Claim Router

Init, invoke and query hooks that route named operations with string
arguments to the lifecycle engine. Failures come back as structured
results; nothing raised by the engine escapes a router call.
"""
import json
import logging
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel

from claimledger.core.errors import ClaimLedgerError, InvalidArgumentCount, UnknownOperation
from claimledger.core.models import PolicyHolder, encode_stage, new_policy_holder
from claimledger.lifecycle.engine import ClaimLifecycleEngine, require_args

logger = logging.getLogger(__name__)

Handler = Callable[[Sequence[str]], Optional[bytes]]


class OperationResult(BaseModel):
    """Outcome of a routed operation."""
    ok: bool
    payload: Optional[bytes] = None
    error_kind: Optional[str] = None
    message: str = ""

    @classmethod
    def success(cls, payload: Optional[bytes] = None) -> "OperationResult":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, error: ClaimLedgerError) -> "OperationResult":
        return cls(ok=False, error_kind=error.kind, message=error.message)


def _log_payload(log: str) -> bytes:
    return json.dumps(log).encode("utf-8")


class ClaimRouter:
    """
    Dispatches ledger operations by name.

    ``verify*`` operations only check the stored claim. ``inspect*`` and
    ``settle`` check and then move the claim one stage forward. There is no
    operation that moves a claim without its check.
    ``identity_source`` supplies the candidate policyholder when
    ``verifyIdentity`` or ``inspectIdentity`` is invoked without arguments.
    """

    def __init__(
        self,
        engine: ClaimLifecycleEngine,
        identity_source: Optional[Callable[[], PolicyHolder]] = None
    ):
        self.engine = engine
        self.identity_source = identity_source
        self.policy_version: Optional[str] = None

        self._invoke_handlers: Dict[str, Handler] = {
            "init": self._init,
            "submitClaim": self._submit_claim,
            "verifyIdentity": self._verify_identity,
            "verifyVehicle": self._verify_vehicle,
            "verifyClaim": self._verify_claim,
            "inspectIdentity": self._inspect_identity,
            "inspectVehicle": self._inspect_vehicle,
            "inspectClaim": self._inspect_claim,
            "settle": self._settle,
        }
        self._query_handlers: Dict[str, Handler] = {
            "getClaim": self._fetch_claim,
            "fetchClaim": self._fetch_claim,
            "currentStage": self._current_stage,
            "currentStateMarker": self._current_state_marker,
        }

    @property
    def invoke_operations(self) -> List[str]:
        return list(self._invoke_handlers)

    @property
    def query_operations(self) -> List[str]:
        return list(self._query_handlers)

    def init(self, args: Sequence[str]) -> OperationResult:
        logger.info("Init..")
        return self._run("init", self._init, args)

    def invoke(self, function: str, args: Sequence[str]) -> OperationResult:
        logger.info(f"Invoke {function}")
        return self._dispatch(self._invoke_handlers, function, args)

    def query(self, function: str, args: Sequence[str]) -> OperationResult:
        logger.info(f"Query {function}")
        return self._dispatch(self._query_handlers, function, args)

    def _dispatch(
        self,
        handlers: Dict[str, Handler],
        function: str,
        args: Sequence[str]
    ) -> OperationResult:
        handler = handlers.get(function)
        if handler is None:
            logger.warning(f"Received unknown function: {function}")
            return OperationResult.failure(UnknownOperation(function))
        return self._run(function, handler, args)

    def _run(self, function: str, handler: Handler, args: Sequence[str]) -> OperationResult:
        try:
            return OperationResult.success(handler(list(args)))
        except ClaimLedgerError as e:
            logger.warning(f"{function} failed with {e.kind}: {e.message}")
            return OperationResult.failure(e)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _init(self, args: Sequence[str]) -> None:
        require_args("init", args, 1)
        self.policy_version = args[0]
        logger.info(f"Ledger initialised with policy version {self.policy_version}")

    def _submit_claim(self, args: Sequence[str]) -> None:
        self.engine.submit_claim(args)

    def _fetch_claim(self, args: Sequence[str]) -> bytes:
        return self.engine.fetch_claim(args)

    def _current_stage(self, args: Sequence[str]) -> bytes:
        require_args("currentStage", args, 0)
        return encode_stage(self.engine.current_stage())

    def _current_state_marker(self, args: Sequence[str]) -> bytes:
        require_args("currentStateMarker", args, 0)
        return self.engine.current_state_marker()

    def _candidate(self, args: Sequence[str]) -> PolicyHolder:
        if len(args) == 8:
            return new_policy_holder(*args)
        if not args and self.identity_source is not None:
            return self.identity_source()
        raise InvalidArgumentCount("verifyIdentity", 8, len(args))

    def _verify_identity(self, args: Sequence[str]) -> bytes:
        return _log_payload(self.engine.verify_identity(self._candidate(args)))

    def _verify_vehicle(self, args: Sequence[str]) -> bytes:
        require_args("verifyVehicle", args, 2)
        return _log_payload(self.engine.verify_vehicle(args[0], args[1]))

    def _verify_claim(self, args: Sequence[str]) -> bytes:
        require_args("verifyClaim", args, 2)
        return _log_payload(self.engine.verify_claim_details(args[0], args[1]))

    def _inspect_identity(self, args: Sequence[str]) -> bytes:
        return _log_payload(self.engine.inspect_identity(self._candidate(args)))

    def _inspect_vehicle(self, args: Sequence[str]) -> bytes:
        require_args("inspectVehicle", args, 2)
        return _log_payload(self.engine.inspect_vehicle(args[0], args[1]))

    def _inspect_claim(self, args: Sequence[str]) -> bytes:
        require_args("inspectClaim", args, 2)
        return _log_payload(self.engine.inspect_claim(args[0], args[1]))

    def _settle(self, args: Sequence[str]) -> bytes:
        require_args("settle", args, 0)
        return encode_stage(self.engine.settle().status)
