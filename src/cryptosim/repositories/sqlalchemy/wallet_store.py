"""SQLAlchemy implementation of WalletStore."""

import json
import logging
from typing import Optional

from sqlalchemy.orm import Session

from cryptosim.domain.models import Wallet
from cryptosim.repositories.sqlalchemy.orm_models import LocalStorageORM

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "userWallet"


class SqlAlchemyWalletStore:
    """Wallet store keeping one JSON record under a fixed key."""

    def __init__(self, db: Session, storage_key: str = DEFAULT_STORAGE_KEY):
        self._db = db
        self._key = storage_key

    @property
    def storage_key(self) -> str:
        return self._key

    def load(self) -> Optional[Wallet]:
        """
        Return the stored wallet.

        Returns None when no record exists or the record cannot be parsed;
        a corrupt record is logged and left for the next save to overwrite.
        """
        orm = self._get_row()
        if orm is None:
            return None
        try:
            return Wallet.from_dict(json.loads(orm.value))
        except ValueError as e:
            logger.error(f"Error loading wallet from {self._key!r}: {e}")
            return None

    def save(self, wallet: Wallet) -> None:
        """Serialize and replace the whole wallet record."""
        payload = json.dumps(wallet.to_dict())
        orm = self._get_row()
        if orm:
            orm.value = payload
        else:
            orm = LocalStorageORM(key=self._key, value=payload)
            self._db.add(orm)
        self._db.commit()

    def _get_row(self) -> Optional[LocalStorageORM]:
        return (
            self._db.query(LocalStorageORM)
            .filter(LocalStorageORM.key == self._key)
            .first()
        )
