"""Two-slot holder for an optimistically updated ordering."""

from collections.abc import Hashable, Sequence


class OrderState:
    """Last server-confirmed order plus the working copy shown to the user.

    ``apply`` changes only the working copy; ``confirm`` promotes a sequence
    to the confirmed slot; ``revert`` throws the working copy away.

    Moves may overlap. ``begin`` records a move as pending and returns its
    token; ``succeed`` and ``fail`` settle it in any order. After each
    settle the working copy is the newest pending move that is newer than
    the confirmed one, or the confirmed order when there is none.
    """

    def __init__(self, items: Sequence[Hashable] = ()):
        self._confirmed: tuple[Hashable, ...] = tuple(items)
        self._working: tuple[Hashable, ...] = tuple(items)
        self._pending: dict[int, tuple[Hashable, ...]] = {}
        self._generation = 0
        self._confirmed_generation = 0

    @property
    def confirmed(self) -> tuple[Hashable, ...]:
        return self._confirmed

    @property
    def working(self) -> tuple[Hashable, ...]:
        return self._working

    @property
    def dirty(self) -> bool:
        return self._working != self._confirmed

    @property
    def in_flight(self) -> int:
        return len(self._pending)

    def apply(self, sequence: Sequence[Hashable]) -> None:
        self._working = tuple(sequence)

    def confirm(self, sequence: Sequence[Hashable] | None = None) -> None:
        self._confirmed = self._working if sequence is None else tuple(sequence)

    def revert(self) -> tuple[Hashable, ...]:
        self._working = self._confirmed
        return self._working

    def reset(self, sequence: Sequence[Hashable]) -> None:
        """Replace both slots, e.g. after reloading from the server."""
        self._confirmed = self._working = tuple(sequence)
        self._pending.clear()
        self._confirmed_generation = self._generation

    def begin(self, sequence: Sequence[Hashable]) -> int:
        """Show ``sequence`` and track it until the server answers."""
        self._generation += 1
        self._pending[self._generation] = tuple(sequence)
        self._working = tuple(sequence)
        return self._generation

    def succeed(self, token: int) -> None:
        sequence = self._pending.pop(token, None)
        # A late answer for an older move never overrides a newer confirmation
        if sequence is not None and token > self._confirmed_generation:
            self._confirmed = sequence
            self._confirmed_generation = token
        self._sync()

    def fail(self, token: int) -> None:
        self._pending.pop(token, None)
        self._sync()

    def _sync(self) -> None:
        newer = [token for token in self._pending if token > self._confirmed_generation]
        self._working = self._pending[max(newer)] if newer else self._confirmed
