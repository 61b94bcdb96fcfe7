import ipaddress
from pathlib import Path

import pytest

from helios.cli import (
    EthereumCliConfig,
    LineaCliConfig,
    ShutdownCounter,
    build_parser,
    config_path,
    ethereum_cli_config,
    linea_cli_config,
    opstack_provider,
    parse_checkpoint,
    parse_url,
    true_or_none,
)

CHECKPOINT = "c7fc7b2f4b548bfc9305fa80bc1865ddc6eea4557f0a80507af5dc34db7bd9ce"
CONSENSUS = "https://www.lightclientdata.org"

ENV_NAMES = [
    "RPC_BIND_IP",
    "RPC_PORT",
    "CHECKPOINT",
    "EXECUTION_RPC",
    "EXECUTION_VERIFIABLE_API",
    "CONSENSUS_RPC",
    "DATA_DIR",
    "FALLBACK",
    "LOAD_EXTERNAL_FALLBACK",
    "STRICT_CHECKPOINT_AGE",
    "ETHEREUM_CHECKPOINT",
    "ETHEREUM_LOAD_EXTERNAL_FALLBACK",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_true_or_none():
    assert true_or_none(True) is True
    assert true_or_none(False) is None


def test_config_path():
    assert config_path("/home/someone") == Path("/home/someone/.helios/helios.toml")


def test_parse_url_requires_scheme():
    with pytest.raises(ValueError, match="relative URL"):
        parse_url("lightclientdata.org")


def test_parse_url_normalises_path():
    assert parse_url(CONSENSUS) == CONSENSUS + "/"


def test_parse_url_idempotent():
    once = parse_url("HTTP://LocalHost:8545/rpc?x=1")
    assert parse_url(once) == once


def test_parse_checkpoint_with_and_without_prefix():
    assert parse_checkpoint(CHECKPOINT) == bytes.fromhex(CHECKPOINT)
    assert parse_checkpoint("0x" + CHECKPOINT) == bytes.fromhex(CHECKPOINT)


def test_parse_checkpoint_wrong_length():
    with pytest.raises(ValueError):
        parse_checkpoint(CHECKPOINT[:-2])


def test_ethereum_defaults():
    args = build_parser().parse_args(["ethereum"])
    assert args.network == "mainnet"
    assert ethereum_cli_config(args) == EthereumCliConfig()


def test_ethereum_flags():
    args = build_parser().parse_args(
        ["ethereum", "-l", "-s", "-d", "/tmp/helios", "-w", CHECKPOINT, "-c", CONSENSUS]
    )
    config = ethereum_cli_config(args)
    assert config.load_external_fallback is True
    assert config.strict_checkpoint_age is True
    assert config.data_dir == Path("/tmp/helios")
    assert config.checkpoint == bytes.fromhex(CHECKPOINT)
    assert config.consensus_rpc == parse_url(CONSENSUS)


def test_ethereum_env_flag_false(monkeypatch):
    monkeypatch.setenv("LOAD_EXTERNAL_FALLBACK", "false")
    args = build_parser().parse_args(["ethereum"])
    assert ethereum_cli_config(args).load_external_fallback is None


def test_opstack_requires_network():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["opstack"])


def test_opstack_provider_defaults():
    args = build_parser().parse_args(["opstack", "-n", "op-mainnet", "-w", CHECKPOINT])
    provider = opstack_provider(args)
    settings = provider["op-mainnet"]
    assert settings["rpc_socket"] == "127.0.0.1:8545"
    assert settings["rpc_bind_ip"] == "127.0.0.1"
    assert settings["rpc_port"] == 8545
    assert settings["checkpoint"] == CHECKPOINT
    assert "load_external_fallback" not in settings


def test_opstack_provider_ipv6_socket():
    args = build_parser().parse_args(["opstack", "-n", "base", "-b", "::1", "-l"])
    settings = opstack_provider(args)["base"]
    assert settings["rpc_socket"] == "[::1]:8545"
    assert settings["load_external_fallback"] is True


def test_linea_env(monkeypatch):
    monkeypatch.setenv("EXECUTION_RPC", CONSENSUS)
    args = build_parser().parse_args(["linea", "-p", "8545", "-b", "127.0.0.1"])
    assert args.network == "linea"
    assert linea_cli_config(args) == LineaCliConfig(
        execution_rpc=parse_url(CONSENSUS),
        rpc_bind_ip=ipaddress.ip_address("127.0.0.1"),
        rpc_port=8545,
    )


@pytest.mark.parametrize("port", ["70000", "abc", "-1"])
def test_invalid_port_rejected(port):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["linea", "-p", port])


def test_shutdown_counter_sequence():
    counter = ShutdownCounter()
    assert [counter.press() for _ in range(3)] == [2, 1, 0]