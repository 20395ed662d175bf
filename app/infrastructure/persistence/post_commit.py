"""Run callbacks once the session's current transaction commits.

Callbacks are kept in session.info and fired from the Session "after_commit"
event; a rollback discards them. Used to defer work that must not happen
unless the rows it depends on are really gone (e.g. physical file cleanup).
"""

import logging
from collections.abc import Callable

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_PENDING_KEY = "after_commit_callbacks"
_INSTALLED_KEY = "after_commit_listeners_installed"


def _on_after_commit(session: Session) -> None:
    callbacks: list[Callable[[], None]] = session.info.pop(_PENDING_KEY, [])
    for callback in callbacks:
        try:
            callback()
        except Exception:
            # The commit already happened; a failing callback must not turn it into an error.
            logger.exception("after-commit callback failed")


def _on_after_rollback(session: Session) -> None:
    session.info.pop(_PENDING_KEY, None)


def _install_listeners(session: Session) -> None:
    if session.info.get(_INSTALLED_KEY):
        return
    event.listen(session, "after_commit", _on_after_commit)
    event.listen(session, "after_rollback", _on_after_rollback)
    session.info[_INSTALLED_KEY] = True


def run_after_commit(session: AsyncSession, callback: Callable[[], None]) -> None:
    """Register callback to run after the session's transaction commits (never on rollback)."""
    sync_session = session.sync_session
    _install_listeners(sync_session)
    sync_session.info.setdefault(_PENDING_KEY, []).append(callback)
