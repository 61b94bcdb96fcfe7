"""Selection of the execution data source."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ExecutionModeKind(enum.Enum):
    """Kind of execution endpoint."""

    RPC = "rpc"
    VERIFIABLE_API = "verifiable_api"


@dataclass(frozen=True)
class ExecutionMode:
    """An execution endpoint together with its kind."""

    kind: ExecutionModeKind
    url: str

    @classmethod
    def from_urls(cls, rpc: str | None, verifiable_api: str | None) -> ExecutionMode:
        """Pick the execution mode, preferring the verifiable API over plain RPC."""
        if verifiable_api is not None:
            return cls(ExecutionModeKind.VERIFIABLE_API, verifiable_api)
        if rpc is not None:
            return cls(ExecutionModeKind.RPC, rpc)
        raise ValueError("Must specify either execution_rpc or execution_verifiable_api")