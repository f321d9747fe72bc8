"""Choose which account the scheduler acts as.

If no account is found the caller is told so.  If only one account is
found it is used.  If several are found the previous choice (or a hint)
is reused, and only otherwise is the user asked to pick.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Sequence

from .models import Account, SelectionOutcome
from .prompt import ChoicePrompt

log = logging.getLogger(__name__)


class AccountSelector:
    """Remembers the account picked among several until :meth:`reset`.

    One instance is meant to be shared by everything that needs the active
    account; selections against it run one at a time.
    """

    def __init__(self, prompt: ChoicePrompt) -> None:
        self._prompt = prompt
        self._last_chosen: Account | None = None
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None
        self._in_flight = 0
        self._generation = 0

    @property
    def last_chosen(self) -> Account | None:
        return self._last_chosen

    def reset(self) -> None:
        """Forget the remembered account.

        A pick still awaited from the prompt when this is called resolves its
        own selection but is not remembered.
        """
        self._last_chosen = None
        self._generation += 1

    def _acquire_lock(self) -> asyncio.Lock:
        """The lock for the running loop, recreated when the loop changes.

        Only swapped while no selection holds or waits on the old one.
        """
        loop = asyncio.get_running_loop()
        if self._lock is None or (self._lock_loop is not loop and self._in_flight == 0):
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def select(
        self,
        candidates: Sequence[Account],
        hint_name: str | None = None,
    ) -> SelectionOutcome:
        """Resolve one account out of *candidates*.

        A single candidate is returned without being remembered.  Among
        several, the remembered account wins, then a candidate named exactly
        *hint_name*, then whatever the user picks.  A cancelled prompt gives
        a DECLINED outcome and leaves nothing remembered.
        """
        lock = self._acquire_lock()
        self._in_flight += 1
        try:
            async with lock:
                return await self._select_locked(candidates, hint_name)
        finally:
            self._in_flight -= 1

    async def _select_locked(
        self,
        candidates: Sequence[Account],
        hint_name: str | None,
    ) -> SelectionOutcome:
        if not candidates:
            log.error("No matching accounts found.")
            return SelectionOutcome.none_found()

        if len(candidates) == 1:
            return SelectionOutcome.resolved(candidates[0])

        if self._last_chosen is not None:
            log.debug("Reusing selected account %s", self._last_chosen.name)
            return SelectionOutcome.resolved(self._last_chosen)

        if hint_name:
            for account in candidates:
                if account.name == hint_name:
                    log.debug("Selected hinted account %s", account.name)
                    self._last_chosen = account
                    return SelectionOutcome.resolved(account)

        # Let the user choose.
        log.info("Multiple matching accounts found.")
        generation = self._generation
        index = await self._prompt.present_choices([a.name for a in candidates])
        if index is None:
            log.info("Account selection cancelled")
            return SelectionOutcome.declined()
        if not 0 <= index < len(candidates):
            log.warning("Choice index %d out of range, treating as cancelled", index)
            return SelectionOutcome.declined()

        chosen = candidates[index]
        if generation == self._generation:
            self._last_chosen = chosen
        else:
            log.info("Selector reset while prompting; not remembering %s", chosen.name)
        return SelectionOutcome.resolved(chosen)

    async def choose_account(
        self,
        account_source: Callable[[str], Sequence[Account]],
        account_type: str,
        hint_name: str | None = None,
    ) -> SelectionOutcome:
        """List accounts of *account_type* from *account_source* and select one."""
        candidates = list(account_source(account_type))
        return await self.select(candidates, hint_name)
