"""
Proof schemas.

A proof is an ordered sequence of steps from the leaf layer up toward the
root. Each step carries the sibling hash and the side it sits on relative
to the node being proved.

JSON form:
    {"steps": [{"position": "right", "data": "0x..."}, ...]}
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from merkletree.crypto.hashing import from_hex, to_hex
from .errors import ProofFormatException


class ProofPosition(str, Enum):
    """Side the sibling hash occupies at a given layer."""

    LEFT = "left"
    RIGHT = "right"


class ProofStep(BaseModel):
    """
    A single (position, sibling hash) pair.

    ``data`` accepts bytes or a hex string and is stored as bytes.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    position: ProofPosition = Field(
        ...,
        description="Side of the sibling relative to the proved node",
    )
    data: bytes = Field(
        ...,
        description="Sibling hash",
    )

    @field_validator("data", mode="before")
    @classmethod
    def _decode_data(cls, value: Any) -> Any:
        if isinstance(value, str):
            return from_hex(value)
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        return value

    @field_serializer("data")
    def _encode_data(self, value: bytes) -> str:
        return to_hex(value)

    @property
    def is_left(self) -> bool:
        return self.position is ProofPosition.LEFT


class MerkleProof(BaseModel):
    """
    An inclusion proof: sibling steps ordered leaf-layer first.

    An empty proof means "not provable". It never proves membership,
    not even for a single-leaf tree whose root equals the leaf.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    steps: tuple[ProofStep, ...] = Field(
        default=(),
        description="Proof steps from the leaf layer toward the root",
    )

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> ProofStep:
        return self.steps[index]

    @property
    def is_empty(self) -> bool:
        return len(self.steps) == 0

    def to_hex_list(self) -> list[str]:
        """Sibling hashes as 0x-prefixed hex strings, in proof order."""
        return [to_hex(step.data) for step in self.steps]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_steps(cls, steps: Sequence[ProofStep]) -> "MerkleProof":
        return cls(steps=tuple(steps))

    @classmethod
    def from_dict(cls, data: Any) -> "MerkleProof":
        """
        Parse a proof from its JSON form.

        Accepts either {"steps": [...]} or a bare list of steps.

        Raises:
            ProofFormatException: If the data is not a well-formed proof
        """
        if isinstance(data, list):
            data = {"steps": data}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = e.errors()
            step_index = None
            if errors:
                loc = errors[0].get("loc", ())
                if len(loc) >= 2 and loc[0] == "steps" and isinstance(loc[1], int):
                    step_index = loc[1]
            raise ProofFormatException(
                f"Invalid proof: {errors[0]['msg'] if errors else e}",
                step_index=step_index,
            ) from e


__all__ = [
    "ProofPosition",
    "ProofStep",
    "MerkleProof",
]
