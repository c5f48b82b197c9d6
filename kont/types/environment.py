"""Lexical environments for kont.

An Environment is one frame plus an `outer` link. A frame binds a fixed list
of names to a fixed list of store addresses; it is built once and never grows.
Lookup yields an address, never a value, so every closure sharing a frame
observes assignments made through any of them.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional, Sequence

from kont import Address
from kont.errors import UnboundVariableError


class Environment:
    """One immutable frame of name -> address bindings with an outer link."""

    __slots__ = ("names", "addresses", "outer")

    def __init__(
        self,
        names: Sequence[str] = (),
        addresses: Sequence[Address] = (),
        outer: Optional[Environment] = None,
    ):
        if len(names) != len(addresses):
            raise ValueError(f"Frame needs one address per name: {names} / {addresses}")
        self.names: tuple[str, ...] = tuple(names)
        self.addresses: tuple[Address, ...] = tuple(addresses)
        self.outer: Environment | None = outer

    def extend(self, names: Sequence[str], addresses: Sequence[Address]) -> Environment:
        """Return a new environment with one more frame in front of this one."""
        return Environment(names, addresses, self)

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.names:
                return env
            env = env.outer
        return None

    def lookup(self, name: str) -> Address:
        """Return the address bound to `name`.

        Raises UnboundVariableError if no frame binds it.
        """
        env = self.find(name)
        if env is None:
            raise UnboundVariableError(name)
        # Last occurrence wins if a frame repeats a name
        for i in range(len(env.names) - 1, -1, -1):
            if env.names[i] == name:
                return env.addresses[i]
        raise UnboundVariableError(name)

    def _write_frame(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{n}: @{a}" for n, a in zip(self.names, self.addresses)))
        buffer.write("}")

    def __str__(self) -> str:
        """Single-frame view with an indicator for the parent."""
        with StringIO() as buffer:
            self._write_frame(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            chain = []
            while env is not None:
                with StringIO() as env_buf:
                    env._write_frame(env_buf)
                    chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
