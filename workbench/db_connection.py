"""Database connection utilities and transaction scope."""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

import mysql.connector
from mysql.connector.constants import ClientFlag

from workbench.config import get_mysql_config
from workbench.exceptions import DbConnectionError, StorageError, TransactionError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def get_db_connection():
    """Open a MySQL connection using the configured settings.

    ``FOUND_ROWS`` makes UPDATE report matched rows rather than changed
    rows, so rewriting a row with identical values still counts as a hit.
    """
    return mysql.connector.connect(
        **get_mysql_config(),
        client_flags=[ClientFlag.FOUND_ROWS],
    )


class ConnectionScope:
    """One connection and one transaction per ``with`` block.

    Usage:
        scope = ConnectionScope()
        with scope.transaction() as conn:
            cursor = conn.cursor(dictionary=True)
            cursor.execute("UPDATE project SET notes=%s WHERE project_id=%s", (notes, 1))
            # commit on success, rollback on any exception

    Auto-commit is switched off for the duration of the block and restored
    before the connection is closed. Scopes do not nest.
    """

    def __init__(self, connect: Callable[[], Any] = None):
        self._connect = connect or get_db_connection
        self._local = threading.local()

    def with_transaction(self, body: Callable[[Any], T]) -> T:
        """Run ``body(conn)`` inside a transaction and return its result."""
        with self.transaction() as conn:
            return body(conn)

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        if getattr(self._local, 'active', False):
            raise TransactionError("Nested transaction scopes are not supported")
        self._local.active = True
        try:
            conn = self._acquire()
            prior_autocommit = None
            ended = False
            try:
                prior_autocommit = self._begin(conn)
                try:
                    yield conn
                except Exception as e:
                    ended = self._rollback(conn)
                    if isinstance(e, StorageError):
                        raise
                    raise StorageError(f"Transaction rolled back: {e}", cause=e) from e

                try:
                    conn.commit()
                except Exception as e:
                    ended = self._rollback(conn)
                    raise TransactionError(f"Commit failed: {e}", cause=e) from e
                ended = True
            except BaseException:
                self._release(conn, prior_autocommit, ended, raise_errors=False)
                raise
            self._release(conn, prior_autocommit, ended, raise_errors=True)
        finally:
            self._local.active = False

    def _acquire(self):
        try:
            return self._connect()
        except Exception as e:
            raise DbConnectionError(f"Unable to get a database connection: {e}", cause=e) from e

    def _begin(self, conn) -> Optional[bool]:
        try:
            prior = conn.autocommit
            conn.autocommit = False
            conn.start_transaction()
            return prior
        except Exception as e:
            raise TransactionError(f"Unable to start transaction: {e}", cause=e) from e

    def _rollback(self, conn) -> bool:
        """Roll back; a failure here is logged so the original error wins."""
        try:
            conn.rollback()
            logger.warning("Transaction rolled back")
            return True
        except Exception:
            logger.exception("Rollback failed")
            return False

    def _release(self, conn, prior_autocommit: Optional[bool], ended: bool,
                 raise_errors: bool) -> None:
        # autocommit is only restored once the transaction has ended; turning
        # it back on with work pending would commit that work.
        errors = []
        if ended and prior_autocommit is not None:
            try:
                conn.autocommit = prior_autocommit
            except Exception as e:
                errors.append(e)
        try:
            conn.close()
        except Exception as e:
            errors.append(e)

        if not errors:
            return
        if raise_errors:
            raise DbConnectionError(
                f"Unable to release database connection: {errors[0]}", cause=errors[0]
            ) from errors[0]
        for error in errors:
            logger.error("Unable to release database connection: %s", error)
