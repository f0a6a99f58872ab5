# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/lockstep/dv/sequence.py

"""Stimulus generation.

A ``SequenceGenerator`` is a finite, lazy, non-restartable iterator of
``Transaction`` objects. What it produces is decided by a policy object
selected by name from ``POLICIES``; every random choice comes from one
``random.Random`` seeded from the run configuration, so the same seed,
policy and configuration always give the same stream.

Registered policies:

    uniform_random      WRITE and READ equally likely
    all_write           WRITE only
    all_read            READ only
    mixed               WRITE/READ/IDLE/WRITE_READ, weighted
    address_wraparound  fill every address, then read each one back

Example:
    >>> gen = SequenceGenerator(make_policy("all_write"), length=4, seed=1)
    >>> [tr.kind.value for tr in gen]
    ['write', 'write', 'write', 'write']
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Mapping

from . import utils_dv
from .errors import ConfigurationError
from .item import OpKind, Transaction

Step = tuple[OpKind, int | None]


@dataclass(frozen=True)
class SequenceContext:
    """Device geometry a policy needs to shape its stimulus."""

    address_space_size: int = 16
    word_width_bits: int = 8

    @property
    def word_mask(self) -> int:
        return (1 << self.word_width_bits) - 1


class Policy:
    """Base stimulus policy.

    Subclasses implement ``steps()``, yielding (kind, payload) pairs. The
    generator stops at its configured length, so a step stream may be
    infinite.
    """

    name: str = "policy"

    def steps(self, rng: random.Random, ctx: SequenceContext) -> Iterator[Step]:
        raise NotImplementedError


class WeightedPolicy(Policy):
    """Pick each operation kind independently with the given weights."""

    def __init__(self, name: str, weights: Mapping[OpKind, float]) -> None:
        if not weights:
            raise ConfigurationError(f"{name}: no weights given")
        if any(w < 0 for w in weights.values()):
            raise ConfigurationError(f"{name}: weights must be non-negative")
        if sum(weights.values()) <= 0:
            raise ConfigurationError(f"{name}: at least one weight must be > 0")
        self.name = name
        self._kinds = list(weights)
        self._weights = [weights[k] for k in self._kinds]

    def steps(self, rng: random.Random, ctx: SequenceContext) -> Iterator[Step]:
        while True:
            kind = rng.choices(self._kinds, weights=self._weights)[0]
            payload = rng.getrandbits(ctx.word_width_bits) if kind.writes else None
            yield kind, payload


class WraparoundPolicy(Policy):
    """Write every address once, then read every address back.

    The pointer wraps between the two passes, so each read lands on the
    address written one full lap earlier. The pattern repeats with fresh
    data for sequences longer than two laps.
    """

    name = "address_wraparound"

    def steps(self, rng: random.Random, ctx: SequenceContext) -> Iterator[Step]:
        while True:
            for _ in range(ctx.address_space_size):
                yield OpKind.WRITE, rng.getrandbits(ctx.word_width_bits)
            for _ in range(ctx.address_space_size):
                yield OpKind.READ, None


class DirectedPolicy(Policy):
    """Replay an explicit list of steps, one per item, then stop.

    Steps are (kind, payload) pairs; kind may be an ``OpKind`` or its string
    value. Write steps without a payload write 0.
    """

    def __init__(
        self, steps: Iterable[tuple[OpKind | str, int | None]], name: str = "directed"
    ) -> None:
        self.name = name
        self._steps: list[Step] = []
        for kind, payload in steps:
            try:
                k = OpKind(kind)
            except ValueError as exc:
                raise ConfigurationError(f"{name}: unknown kind {kind!r}") from exc
            self._steps.append((k, (payload or 0) if k.writes else None))

    def __len__(self) -> int:
        return len(self._steps)

    def steps(self, rng: random.Random, ctx: SequenceContext) -> Iterator[Step]:
        for kind, payload in self._steps:
            yield kind, None if payload is None else payload & ctx.word_mask


PolicyFactory = Callable[[], Policy]

POLICIES: dict[str, PolicyFactory] = {
    "uniform_random": lambda: WeightedPolicy(
        "uniform_random", {OpKind.WRITE: 1.0, OpKind.READ: 1.0}
    ),
    "all_write": lambda: WeightedPolicy("all_write", {OpKind.WRITE: 1.0}),
    "all_read": lambda: WeightedPolicy("all_read", {OpKind.READ: 1.0}),
    "mixed": lambda: WeightedPolicy(
        "mixed",
        {
            OpKind.WRITE: 0.4,
            OpKind.READ: 0.4,
            OpKind.IDLE: 0.1,
            OpKind.WRITE_READ: 0.1,
        },
    ),
    "address_wraparound": WraparoundPolicy,
}


def register_policy(
    name: str, factory: PolicyFactory, *, replace: bool = False
) -> None:
    """Make a policy selectable by name."""
    if name in POLICIES and not replace:
        raise ConfigurationError(f"Policy {name!r} is already registered")
    POLICIES[name] = factory


def make_policy(name: str) -> Policy:
    """Build the policy registered as ``name``."""
    try:
        factory = POLICIES[name]
    except KeyError:
        known = ", ".join(sorted(POLICIES))
        raise ConfigurationError(
            f"Unknown generator policy {name!r} (known: {known})"
        ) from None
    return factory()


class SequenceGenerator:
    """Finite lazy stream of stimulus transactions.

    Iterating the generator a second time continues where the first
    iteration stopped; once exhausted it stays exhausted.
    """

    def __init__(
        self,
        policy: Policy,
        length: int = 10,
        seed: int = 42,
        ctx: SequenceContext | None = None,
    ) -> None:
        if length < 0:
            raise ConfigurationError("sequence length must be >= 0")
        self.logger = utils_dv.component_logger("sequence")
        self.policy = policy
        self.length = length
        self.seed = seed
        self.ctx = ctx or SequenceContext()
        self._rng = random.Random(seed)
        self._steps = policy.steps(self._rng, self.ctx)
        self.produced: int = 0

    def __iter__(self) -> Iterator[Transaction]:
        return self

    def __next__(self) -> Transaction:
        if self.produced >= self.length:
            raise StopIteration
        try:
            kind, payload = next(self._steps)
        except StopIteration:
            self.length = self.produced
            raise
        tr = Transaction(kind=kind, payload=payload, seq_id=self.produced)
        self.produced += 1
        self.logger.debug("generated %s", tr)
        return tr
