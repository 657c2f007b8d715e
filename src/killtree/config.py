"""Per-invocation options for killing a process tree."""

from dataclasses import dataclass

DEFAULT_SIGNAL = "SIGKILL"


@dataclass(slots=True, frozen=True)
class Config:
    """
    Options read by the traversal and the terminator.

    Attributes:
        signal: Name of the POSIX signal sent to every process in the tree.
            Ignored on Windows, where termination is always forced.
        include_target: Whether the root process itself is killed and reported.
    """

    signal: str = DEFAULT_SIGNAL
    include_target: bool = True
