"""Shared account, block-tag and subscription types."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping

_U64_MAX = 2**64 - 1

EMPTY_ROOT_HASH = bytes.fromhex(
    "56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421"
)
KECCAK_EMPTY = bytes.fromhex(
    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
)


def _to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def _from_hex(text: str) -> bytes:
    if not isinstance(text, str):
        raise ValueError("expected a hex string")
    digits = text[2:] if text.startswith(("0x", "0X")) else text
    try:
        return bytes.fromhex(digits)
    except ValueError:
        raise ValueError(f"invalid hex data: {text!r}") from None


def _b256(value: bytes | int | str) -> bytes:
    """Normalise a 32-byte word, left-padding shorter input."""
    if isinstance(value, str):
        value = _from_hex(value)
    if isinstance(value, int):
        if value < 0 or value >= 2**256:
            raise ValueError("value does not fit in 32 bytes")
        return value.to_bytes(32, "big")
    raw = bytes(value)
    if len(raw) > 32:
        raise ValueError("value does not fit in 32 bytes")
    return raw.rjust(32, b"\x00")


def _quantity(value: int) -> str:
    return hex(value)


def _parse_quantity(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("expected a quantity")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"0[xX][0-9a-fA-F]+", value):
        return int(value, 16)
    raise ValueError(f"invalid quantity: {value!r}")


@dataclass
class StorageProof:
    """Proof of a single storage slot value."""

    key: bytes
    value: int
    proof: list[bytes] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.key = _b256(self.key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": _to_hex(self.key),
            "value": _quantity(self.value),
            "proof": [_to_hex(node) for node in self.proof],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StorageProof:
        return cls(
            key=_b256(data["key"]),
            value=_parse_quantity(data["value"]),
            proof=[_from_hex(node) for node in data["proof"]],
        )


@dataclass
class Account:
    """An account's state together with its Merkle proofs."""

    nonce: int = 0
    balance: int = 0
    storage_root: bytes = EMPTY_ROOT_HASH
    code_hash: bytes = KECCAK_EMPTY
    code: bytes | None = None
    account_proof: list[bytes] = field(default_factory=list)
    storage_proof: list[StorageProof] = field(default_factory=list)

    def get_storage_value(self, slot: bytes | int) -> int | None:
        """Return the proven value at the given storage slot, if present."""
        wanted = _b256(slot)
        return next(
            (proof.value for proof in self.storage_proof if proof.key == wanted), None
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "account": {
                "nonce": _quantity(self.nonce),
                "balance": _quantity(self.balance),
                "storageRoot": _to_hex(self.storage_root),
                "codeHash": _to_hex(self.code_hash),
            }
        }
        if self.code is not None:
            data["code"] = _to_hex(self.code)
        data["accountProof"] = [_to_hex(node) for node in self.account_proof]
        data["storageProof"] = [proof.to_dict() for proof in self.storage_proof]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Account:
        trie = data["account"]
        code = data.get("code")
        return cls(
            nonce=_parse_quantity(trie["nonce"]),
            balance=_parse_quantity(trie["balance"]),
            storage_root=_b256(trie["storageRoot"]),
            code_hash=_b256(trie["codeHash"]),
            code=None if code is None else _from_hex(code),
            account_proof=[_from_hex(node) for node in data["accountProof"]],
            storage_proof=[StorageProof.from_dict(p) for p in data["storageProof"]],
        )


class BlockTagKind(enum.Enum):
    LATEST = "latest"
    FINALIZED = "finalized"
    NUMBER = "number"


@dataclass(frozen=True)
class BlockTag:
    """A block selector: latest, finalized, or a specific number."""

    kind: BlockTagKind
    value: int | None = None

    LATEST: ClassVar[BlockTag]
    FINALIZED: ClassVar[BlockTag]

    def __post_init__(self) -> None:
        if self.kind is BlockTagKind.NUMBER:
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                raise TypeError("block number must be an integer")
            if not 0 <= self.value <= _U64_MAX:
                raise ValueError("block number out of range for u64")
        elif self.value is not None:
            raise ValueError(f"{self.kind.value} tag carries no number")

    @classmethod
    def number(cls, value: int) -> BlockTag:
        return cls(BlockTagKind.NUMBER, value)

    @classmethod
    def parse(cls, text: str) -> BlockTag:
        """Parse "latest", "finalized", a 0x-prefixed hex number or a decimal number."""
        if text == "latest":
            return cls.LATEST
        if text == "finalized":
            return cls.FINALIZED
        if text.startswith("0x"):
            digits, base, pattern = text[2:], 16, r"\+?[0-9a-fA-F]+"
        else:
            digits, base, pattern = text, 10, r"\+?[0-9]+"
        if not re.fullmatch(pattern, digits):
            raise ValueError("could not parse block tag")
        num = int(digits, base)
        if num > _U64_MAX:
            raise ValueError("could not parse block tag")
        return cls.number(num)

    @classmethod
    def from_number_or_tag(cls, value: int | str | bytes) -> BlockTag:
        """Convert a block number, a tag name or a block hash; only some are supported."""
        if isinstance(value, (bytes, bytearray)):
            raise ValueError("block hash is not supported")
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.number(value)
        if value == "latest":
            return cls.LATEST
        if value == "finalized":
            return cls.FINALIZED
        raise ValueError(f"block tag {value} is not supported")

    def to_block_id(self) -> str:
        """Return the JSON-RPC block identifier."""
        if self.kind is BlockTagKind.NUMBER:
            return hex(self.value)
        return self.kind.value

    def __str__(self) -> str:
        if self.kind is BlockTagKind.NUMBER:
            return str(self.value)
        return self.kind.value


BlockTag.LATEST = BlockTag(BlockTagKind.LATEST)
BlockTag.FINALIZED = BlockTag(BlockTagKind.FINALIZED)


class SubscriptionType(enum.Enum):
    NEW_HEADS = "newHeads"
    NEW_PENDING_TRANSACTIONS = "newPendingTransactions"
    LOGS = "logs"