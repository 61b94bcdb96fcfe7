# helios

Building blocks for a multichain light client: the value types the client
passes around, and the command-line argument handling for its Ethereum,
OP Stack and Linea front ends.

## Modules

### `helios.execution_mode`

`ExecutionMode` is a frozen dataclass with a `kind` (`ExecutionModeKind.RPC`
or `ExecutionModeKind.VERIFIABLE_API`) and a `url`.
`ExecutionMode.from_urls(rpc, verifiable_api)` picks one: a verifiable API URL
always wins over a plain RPC URL, and passing neither raises `ValueError`.

### `helios.fork_schedule`

`ForkSchedule` holds `prague_timestamp`, the time at which the Prague fork
activates (zero by default). It must be an unsigned 64-bit integer, otherwise
`TypeError` or `ValueError` is raised. `to_dict()` and
`ForkSchedule.from_dict(data)` convert to and from a plain dictionary;
`from_dict` raises `ValueError` when the field is missing.

### `helios.types`

- `BlockTag` with `BlockTagKind`: `latest`, `finalized` or a block number.
  - `BlockTag.LATEST`, `BlockTag.FINALIZED` and `BlockTag.number(value)` build
    tags; numbers must fit in an unsigned 64-bit integer.
  - `BlockTag.parse(text)` accepts `"latest"`, `"finalized"`, a decimal number
    or a `0x`-prefixed hexadecimal number, and raises `ValueError` otherwise.
  - `BlockTag.from_number_or_tag(value)` accepts an integer, `"latest"` or
    `"finalized"`; any other tag (such as `"pending"`) and any block hash given
    as bytes raise `ValueError`.
  - `to_block_id()` returns the JSON-RPC identifier: `"latest"`,
    `"finalized"` or a hex quantity such as `"0x10"`. `str()` gives the tag
    name or the decimal number.
- `Account` and `StorageProof`: an account's nonce, balance, storage root,
  code hash, optional code, and its Merkle proofs.
  `Account.get_storage_value(slot)` returns the proven value of a storage slot
  (slot given as bytes or an integer), or `None` when the slot is not among
  the proofs. Both round-trip through `to_dict()` / `from_dict(data)` using
  camelCase keys and `0x`-hex strings; `code` is left out when it is `None`.
- `SubscriptionType`: `newHeads`, `newPendingTransactions` and `logs`.

### `helios.cli`

- `build_parser()` returns an `argparse` parser with three subcommands,
  `ethereum`, `opstack` and `linea`. Options fall back to environment
  variables read when the parser is built (for example `EXECUTION_RPC`,
  `CONSENSUS_RPC`, `RPC_BIND_IP`, `RPC_PORT`, `CHECKPOINT`,
  `ETHEREUM_CHECKPOINT`). `opstack` requires `--network` and defaults its bind
  address to `127.0.0.1` and its port to `8545`.
- `ethereum_cli_config(args)` and `linea_cli_config(args)` turn parsed
  arguments into `EthereumCliConfig` and `LineaCliConfig`.
  `opstack_provider(args)` returns the settings the user gave, keyed by the
  chosen network.
- `parse_url(text)` validates and normalises an absolute URL;
  `parse_checkpoint(text)` parses a 32-byte hash of 64 hex digits, with or
  without `0x`; `true_or_none(flag)` maps an unset flag to `None`;
  `config_path(home)` returns `<home>/.helios/helios.toml`.
- `ShutdownCounter.press()` records an interrupt and returns how many more
  presses force a quit: `2` after the first press (begin a graceful shutdown),
  `0` on the third (quit now).

## Example

```python
from helios.cli import build_parser, ethereum_cli_config
from helios.execution_mode import ExecutionMode, ExecutionModeKind
from helios.fork_schedule import ForkSchedule
from helios.types import BlockTag

mode = ExecutionMode.from_urls(None, "http://localhost:8080")
assert mode.kind is ExecutionModeKind.VERIFIABLE_API

schedule = ForkSchedule.from_dict({"prague_timestamp": 1746612311})
assert schedule.to_dict() == {"prague_timestamp": 1746612311}

tag = BlockTag.parse("0x10")
assert tag == BlockTag.number(16)
assert tag.to_block_id() == "0x10"
assert str(BlockTag.parse("latest")) == "latest"

args = build_parser().parse_args(["ethereum", "--rpc-port", "8545"])
config = ethereum_cli_config(args)
assert config.rpc_port == 8545
```

## What this package does not do

It does not run a light client. There is no installed command and no entry
point that starts one: it does not sync with a consensus network, verify
execution data, serve JSON-RPC, or install an interrupt handler (the
`ShutdownCounter` only counts). `config_path` only names where the
configuration file lives; nothing here reads that file or merges it with the
command-line settings.