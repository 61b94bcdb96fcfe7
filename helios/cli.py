"""Command-line argument handling for the light client runner."""

from __future__ import annotations

import argparse
import ipaddress
import logging
import os
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger("helios.runner")

IpAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_SPECIAL_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
_FALSEY = {"n", "no", "f", "false", "off", "0"}
_FORCE_QUIT_PRESSES = 3


@dataclass(frozen=True)
class EthereumCliConfig:
    checkpoint: bytes | None = None
    execution_rpc: str | None = None
    execution_verifiable_api: str | None = None
    consensus_rpc: str | None = None
    data_dir: Path | None = None
    rpc_bind_ip: IpAddress | None = None
    rpc_port: int | None = None
    fallback: str | None = None
    load_external_fallback: bool | None = None
    strict_checkpoint_age: bool | None = None


@dataclass(frozen=True)
class LineaCliConfig:
    execution_rpc: str | None = None
    rpc_bind_ip: IpAddress | None = None
    rpc_port: int | None = None


class ShutdownCounter:
    """Counts interrupt presses; the third forces the process to quit."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    def press(self) -> int:
        """Record a press and return how many more force a quit.

        A result of 2 means a graceful shutdown should begin; 0 means quit now.
        """
        with self._lock:
            self._count += 1
            remaining = _FORCE_QUIT_PRESSES - self._count
        if remaining <= 0:
            logger.info("forced shutdown")
        else:
            logger.info(
                "shutting down... press ctrl-c %d more times to force quit", remaining
            )
        return remaining


def parse_url(text: str) -> str:
    """Validate an absolute URL and return it in normalised form."""
    text = text.strip()
    scheme, sep, _ = text.partition(":")
    if not sep or not _SCHEME.fullmatch(scheme):
        raise ValueError("relative URL without a base")
    parts = urlsplit(text)
    scheme = parts.scheme.lower()
    if scheme not in _SPECIAL_PORTS:
        return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))
    host = parts.hostname
    if not host:
        raise ValueError("empty host")
    try:
        port = parts.port
    except ValueError:
        raise ValueError("invalid port number") from None
    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != _SPECIAL_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    userinfo, at, _ = parts.netloc.rpartition("@")
    if at:
        netloc = f"{userinfo}@{netloc}"
    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))


def parse_checkpoint(text: str) -> bytes:
    """Parse a 32-byte hash written as 64 hex digits, with or without 0x."""
    digits = text[2:] if text.startswith(("0x", "0X")) else text
    if not re.fullmatch(r"[0-9a-fA-F]{64}", digits):
        raise ValueError(f"invalid checkpoint: {text!r}")
    return bytes.fromhex(digits)


def _parse_ip(text: str) -> IpAddress:
    return ipaddress.ip_address(text)


def _parse_port(text: str) -> int:
    if not re.fullmatch(r"\+?[0-9]+", text):
        raise ValueError(f"invalid port: {text!r}")
    port = int(text)
    if port > 65535:
        raise ValueError(f"port out of range: {text!r}")
    return port


def true_or_none(flag: bool) -> bool | None:
    """Return True for a set flag and None for an unset one.

    An unset flag then leaves the setting to the configuration file.
    """
    if flag:
        return True
    return None


def config_path(home: str | os.PathLike[str]) -> Path:
    """Return the location of the user's configuration file."""
    return Path(home) / ".helios" / "helios.toml"


def _env(name: str, default: str | None = None) -> str | None:
    value = os.environ.get(name)
    return value if value else default


def _env_flag(name: str) -> bool:
    value = _env(name)
    return value is not None and value.lower() not in _FALSEY


def _add_url(parser: argparse.ArgumentParser, *flags: str, env: str) -> None:
    parser.add_argument(*flags, type=parse_url, default=_env(env))


def _add_ethereum(subparsers: Any) -> None:
    parser = subparsers.add_parser("ethereum")
    parser.add_argument("-n", "--network", default="mainnet")
    parser.add_argument("-b", "--rpc-bind-ip", type=_parse_ip, default=_env("RPC_BIND_IP"))
    parser.add_argument("-p", "--rpc-port", type=_parse_port, default=_env("RPC_PORT"))
    parser.add_argument(
        "-w", "--checkpoint", type=parse_checkpoint, default=_env("CHECKPOINT")
    )
    _add_url(parser, "-e", "--execution-rpc", env="EXECUTION_RPC")
    _add_url(parser, "--execution-verifiable-api", env="EXECUTION_VERIFIABLE_API")
    _add_url(parser, "-c", "--consensus-rpc", env="CONSENSUS_RPC")
    parser.add_argument("-d", "--data-dir", default=_env("DATA_DIR"))
    parser.add_argument("-f", "--fallback", default=_env("FALLBACK"))
    parser.add_argument(
        "-l",
        "--load-external-fallback",
        action="store_true",
        default=_env_flag("LOAD_EXTERNAL_FALLBACK"),
    )
    parser.add_argument(
        "-s",
        "--strict-checkpoint-age",
        action="store_true",
        default=_env_flag("STRICT_CHECKPOINT_AGE"),
    )


def _add_opstack(subparsers: Any) -> None:
    parser = subparsers.add_parser("opstack")
    parser.add_argument("-n", "--network", required=True)
    parser.add_argument(
        "-b", "--rpc-bind-ip", type=_parse_ip, default=_env("RPC_BIND_IP", "127.0.0.1")
    )
    parser.add_argument(
        "-p", "--rpc-port", type=_parse_port, default=_env("RPC_PORT", "8545")
    )
    _add_url(parser, "-e", "--execution-rpc", env="EXECUTION_RPC")
    _add_url(parser, "--execution-verifiable-api", env="EXECUTION_VERIFIABLE_API")
    _add_url(parser, "-c", "--consensus-rpc", env="CONSENSUS_RPC")
    parser.add_argument(
        "-w",
        "--ethereum-checkpoint",
        dest="checkpoint",
        type=parse_checkpoint,
        default=_env("ETHEREUM_CHECKPOINT"),
        help=(
            "Set custom weak subjectivity checkpoint for chosen Ethereum network. "
            "Used to sync and trustlessly fetch the correct unsafe signer address "
            "used by <NETWORK>"
        ),
    )
    parser.add_argument(
        "-l",
        "--ethereum-load-external-fallback",
        dest="load_external_fallback",
        action="store_true",
        default=_env_flag("ETHEREUM_LOAD_EXTERNAL_FALLBACK"),
        help="Enable fallback for weak subjectivity checkpoint. "
        "Use if --ethereum-checkpoint fails.",
    )


def _add_linea(subparsers: Any) -> None:
    parser = subparsers.add_parser("linea")
    parser.add_argument("-n", "--network", default="linea")
    parser.add_argument("-b", "--rpc-bind-ip", type=_parse_ip, default=_env("RPC_BIND_IP"))
    parser.add_argument("-p", "--rpc-port", type=_parse_port, default=_env("RPC_PORT"))
    _add_url(parser, "-e", "--execution-rpc", env="EXECUTION_RPC")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; environment defaults are read now."""
    parser = argparse.ArgumentParser(
        prog="helios",
        description="Helios is a fast, secure, and portable multichain light client",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ethereum(subparsers)
    _add_opstack(subparsers)
    _add_linea(subparsers)
    return parser


def ethereum_cli_config(args: argparse.Namespace) -> EthereumCliConfig:
    return EthereumCliConfig(
        checkpoint=args.checkpoint,
        execution_rpc=args.execution_rpc,
        execution_verifiable_api=args.execution_verifiable_api,
        consensus_rpc=args.consensus_rpc,
        data_dir=None if args.data_dir is None else Path(args.data_dir),
        rpc_bind_ip=args.rpc_bind_ip,
        rpc_port=args.rpc_port,
        fallback=args.fallback,
        load_external_fallback=true_or_none(args.load_external_fallback),
        strict_checkpoint_age=true_or_none(args.strict_checkpoint_age),
    )


def opstack_provider(args: argparse.Namespace) -> dict[str, dict[str, Any]]:
    """Return the user-supplied settings keyed by the chosen network."""
    settings: dict[str, Any] = {}
    if args.execution_rpc is not None:
        settings["execution_rpc"] = args.execution_rpc
    if args.execution_verifiable_api is not None:
        settings["execution_verifiable_api"] = args.execution_verifiable_api
    if args.consensus_rpc is not None:
        settings["consensus_rpc"] = args.consensus_rpc
    ip, port = args.rpc_bind_ip, args.rpc_port
    if ip is not None and port is not None:
        host = f"[{ip}]" if ip.version == 6 else str(ip)
        settings["rpc_socket"] = f"{host}:{port}"
    if ip is not None:
        settings["rpc_bind_ip"] = str(ip)
    if port is not None:
        settings["rpc_port"] = port
    if args.load_external_fallback:
        settings["load_external_fallback"] = True
    if args.checkpoint is not None:
        settings["checkpoint"] = args.checkpoint.hex()
    return {args.network: settings}


def linea_cli_config(args: argparse.Namespace) -> LineaCliConfig:
    return LineaCliConfig(
        execution_rpc=args.execution_rpc,
        rpc_bind_ip=args.rpc_bind_ip,
        rpc_port=args.rpc_port,
    )