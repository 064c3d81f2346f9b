"""!
@brief Registry of option descriptors and positional argument specs.
@details The registry enforces the global uniqueness rule: across every
registered option no short command character and no long command string may
appear twice. Single and batch insertion are both all-or-nothing; a rejected
insertion never mutates the registry.

Options are kept in insertion order keyed by their identifier. Callers keep
their own reference to the descriptor for later queries and can also resolve
an identifier through :meth:`OptionRegistry.get`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from . import logging_ext
from .option import ArgumentOption

__all__ = ["OptionRegistry", "PositionalSpec"]


@dataclass(frozen=True)
class PositionalSpec:
    """!
    @brief Help metadata for one positional argument.
    @details Specs only document the positional arguments; the parser does
    not bind values to them.
    """

    name: str
    description: str = ""
    syntax: str = ""

    @property
    def rendered_name(self) -> str:
        return self.syntax if self.syntax else f"[{self.name}]"


def _commands_overlap(first: ArgumentOption, second: ArgumentOption) -> bool:
    return bool(first.short_commands & second.short_commands or first.long_commands & second.long_commands)


class OptionRegistry:
    """!
    @brief Owns the registered options and positional specs of one parser.
    """

    def __init__(self) -> None:
        self._options: Dict[str, ArgumentOption] = {}
        self._positional: List[PositionalSpec] = []

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[ArgumentOption]:
        return iter(list(self._options.values()))

    def __contains__(self, option: object) -> bool:
        return any(registered is option for registered in self._options.values())

    @property
    def options(self) -> Tuple[ArgumentOption, ...]:
        return tuple(self._options.values())

    def get(self, handle: str) -> Optional[ArgumentOption]:
        """!
        @brief Resolve an option identifier to its descriptor.
        """

        return self._options.get(handle)

    # ------------------------------------------------------------------
    # Uniqueness
    # ------------------------------------------------------------------

    def check_if_argument_is_unique(self, candidate: ArgumentOption) -> bool:
        """!
        @brief Decide whether ``candidate`` may join the registry.
        @return False when it is already registered, has no commands, or shares
        any short or long command with a registered option.
        """

        return self._rejection_reason(candidate) is None

    def _rejection_reason(self, candidate: ArgumentOption) -> Optional[str]:
        if candidate in self:
            return "already registered"
        if not candidate.has_commands:
            return "no short or long command"
        for registered in self._options.values():
            if _commands_overlap(candidate, registered):
                return f"command collides with {registered!r}"
        return None

    def _insert(self, candidate: ArgumentOption) -> None:
        if candidate.id in self._options:
            candidate.regenerate_id(set(self._options))
        self._options[candidate.id] = candidate

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def add_option(self, candidate: ArgumentOption) -> bool:
        """!
        @brief Register one option if it passes the uniqueness check.
        @return True when inserted, False otherwise (no mutation).
        """

        reason = self._rejection_reason(candidate)
        if reason is not None:
            logging_ext.get_human_logger().debug("Rejected option %r: %s", candidate, reason)
            return False
        self._insert(candidate)
        return True

    def add_options(self, candidates: Iterable[ArgumentOption]) -> bool:
        """!
        @brief Register a batch of options atomically.
        @details Each candidate must pass :meth:`check_if_argument_is_unique`
        and the batch must be pairwise disjoint as well; a single failure
        rejects the whole batch. The same object listed twice counts once.
        @return True when every candidate was inserted, False otherwise.
        """

        batch: List[ArgumentOption] = []
        for candidate in candidates:
            if not any(candidate is seen for seen in batch):
                batch.append(candidate)
        log = logging_ext.get_human_logger()
        for candidate in batch:
            reason = self._rejection_reason(candidate)
            if reason is not None:
                log.debug("Rejected option batch, %r: %s", candidate, reason)
                return False
        for index, candidate in enumerate(batch):
            for other in batch[index + 1 :]:
                if _commands_overlap(candidate, other):
                    log.debug("Rejected option batch, %r collides with %r", candidate, other)
                    return False
        for candidate in batch:
            self._insert(candidate)
        return True

    def remove_option(self, option: ArgumentOption) -> bool:
        """!
        @brief Remove ``option`` from the registry.
        @return False when it was not registered.
        """

        for handle, registered in list(self._options.items()):
            if registered is option:
                del self._options[handle]
                return True
        return False

    def clear_options(self) -> None:
        self._options.clear()

    def find_short(self, command: str) -> Optional[ArgumentOption]:
        for option in self._options.values():
            if command in option.short_commands:
                return option
        return None

    def find_long(self, command: str) -> Optional[ArgumentOption]:
        for option in self._options.values():
            if command in option.long_commands:
                return option
        return None

    def reset_parse_state(self) -> None:
        for option in self._options.values():
            option.reset()

    # ------------------------------------------------------------------
    # Positional specs
    # ------------------------------------------------------------------

    @property
    def positional_specs(self) -> Tuple[PositionalSpec, ...]:
        return tuple(self._positional)

    def add_positional_argument(self, name: str, description: str = "", syntax: str = "") -> PositionalSpec:
        spec = PositionalSpec(name=name, description=description, syntax=syntax)
        self._positional.append(spec)
        return spec

    def clear_positional_arguments(self) -> None:
        self._positional.clear()
