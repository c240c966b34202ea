from __future__ import annotations

from dataclasses import dataclass, field

from fintrack.domain.transaction import Transaction


@dataclass
class InMemoryTransactionRepository:
    """
    Repo en mémoire, propriétaire de la liste des transactions.
    - Déterministe
    - Facile à tester
    - Le moteur de recherche reçoit une copie de la liste à chaque requête
    """
    _items: list[Transaction] = field(default_factory=list)

    def add(self, tx: Transaction) -> None:
        if self.get(tx.id) is not None:
            raise ValueError(f"Transaction with id {tx.id} already exists")
        self._items.append(tx)

    def list(self) -> list[Transaction]:
        # Tri déterministe : date, created_at, id
        return sorted(self._items, key=lambda t: (t.date, t.created_at, t.id))

    def get(self, tx_id: str) -> Transaction | None:
        for t in self._items:
            if t.id == tx_id:
                return t
        return None

    def update(self, tx: Transaction) -> Transaction:
        for i, t in enumerate(self._items):
            if t.id == tx.id:
                self._items[i] = tx
                return tx
        raise KeyError(tx.id)

    def delete(self, tx_id: str) -> bool:
        before = len(self._items)
        self._items = [t for t in self._items if t.id != tx_id]
        return len(self._items) < before

    def clear(self) -> None:
        self._items.clear()
