"""Per-user symbol sets (wishlist, notification subscriptions)."""
import logging

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from borsa_dashboard.catalog import ReferenceCatalog
from borsa_dashboard.db import Database, NotificationEntry, WishlistEntry
from borsa_dashboard.errors import NotFound
from borsa_dashboard.schemas import ToggleOutcome

logger = logging.getLogger(__name__)

EntryModel = type[WishlistEntry] | type[NotificationEntry]


class UserContentStore:
    """Set semantics over (user_id, symbol) rows of one table.

    The table's unique constraint guarantees at most one row per pair; an
    insert that loses a race to a concurrent toggle counts as already present.
    """

    def __init__(self, db: Database, model: EntryModel, catalog: ReferenceCatalog) -> None:
        self._db = db
        self._model = model
        self._catalog = catalog

    @property
    def name(self) -> str:
        return self._model.__tablename__

    def _symbol(self, symbol: str) -> str:
        inst = self._catalog.get(symbol.strip())
        if inst is None:
            raise NotFound(f"Instrument '{symbol}' not found")
        return inst.symbol

    def contains(self, user_id: int, symbol: str) -> bool:
        symbol = self._symbol(symbol)
        with self._db.session() as session:
            row = session.exec(
                select(self._model.id).where(
                    self._model.user_id == user_id, self._model.symbol == symbol
                )
            ).first()
            return row is not None

    def list_symbols(self, user_id: int) -> list[str]:
        """Symbols for the user, oldest first."""
        with self._db.session() as session:
            rows = session.exec(
                select(self._model.symbol)
                .where(self._model.user_id == user_id)
                .order_by(self._model.created_at, self._model.id)
            ).all()
            return list(rows)

    def toggle(self, user_id: int, symbol: str) -> ToggleOutcome:
        """Delete the entry if present, insert it otherwise."""
        symbol = self._symbol(symbol)
        with self._db.session() as session:
            removed = session.connection().execute(
                delete(self._model).where(
                    self._model.user_id == user_id, self._model.symbol == symbol
                )
            )
            if removed.rowcount:
                logger.debug("%s: user %s removed %s", self.name, user_id, symbol)
                return ToggleOutcome.REMOVED
        try:
            with self._db.session() as session:
                session.add(self._model(user_id=user_id, symbol=symbol))
        except IntegrityError:
            logger.debug("%s: concurrent insert for user %s %s", self.name, user_id, symbol)
        logger.debug("%s: user %s added %s", self.name, user_id, symbol)
        return ToggleOutcome.ADDED
