import pytest

from helios.execution_mode import ExecutionMode, ExecutionModeKind


def test_rpc_only_selects_rpc():
    mode = ExecutionMode.from_urls("http://localhost:8545", None)
    assert mode.kind is ExecutionModeKind.RPC
    assert mode.url == "http://localhost:8545"


def test_verifiable_api_only():
    mode = ExecutionMode.from_urls(None, "http://localhost:3000")
    assert mode.kind is ExecutionModeKind.VERIFIABLE_API
    assert mode.url == "http://localhost:3000"


def test_verifiable_api_is_preferred_over_rpc():
    mode = ExecutionMode.from_urls("http://localhost:8545", "http://localhost:3000")
    assert mode == ExecutionMode(ExecutionModeKind.VERIFIABLE_API, "http://localhost:3000")


def test_neither_url_raises():
    with pytest.raises(ValueError, match="Must specify either execution_rpc"):
        ExecutionMode.from_urls(None, None)