# Overview: Repository layer; one keyed collection per entity type behind a constructed EntityStore.

"""
Entity Store

Every entity type gets a Repository with the same five verbs:

    create(fields)       -> entity        (assigns the next id for the type)
    get(id)              -> entity | None
    list(**scope)        -> [entity]      (equality filters; None means unscoped)
    update(id, partial)  -> entity | None (shallow merge)
    delete(id)           -> bool

Not-found is always a None/False result, never an exception. Ids come from
SQLite AUTOINCREMENT (or the database's sequence), so they grow monotonically
per table and are never handed out again after a delete.

EntityStore bundles the repositories around one SQLAlchemy session and is
passed explicitly to every service operation. `transaction()` groups several
writes into one commit/rollback unit; repository writes made with
commit=False inside it are staged until the block exits cleanly.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generic, Iterator, TypeVar

from sqlalchemy.orm import Session

from ..extensions import db
from ..models import (
    Customer,
    Employee,
    Inventory,
    Order,
    OrderItem,
    Product,
    ProductCategory,
    PurchaseOrder,
    PurchaseOrderItem,
    Store,
    User,
)

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    def __init__(self, session: Session, model: type[ModelT]):
        self.session = session
        self.model = model
        self._columns = {c.key for c in model.__mapper__.columns}

    def _assign(self, entity: ModelT, fields: dict) -> None:
        for key, value in fields.items():
            if key == "id" or key not in self._columns:
                continue
            setattr(entity, key, value)

    def _write(self, commit: bool) -> None:
        # flush assigns ids even when the commit is deferred to a transaction()
        try:
            self.session.flush()
            if commit:
                self.session.commit()
        except Exception:
            if commit:
                self.session.rollback()
            raise

    def create(self, fields: dict, *, commit: bool = True) -> ModelT:
        entity = self.model()
        self._assign(entity, fields)
        self.session.add(entity)
        self._write(commit)
        return entity

    def get(self, entity_id: int) -> ModelT | None:
        return self.session.get(self.model, entity_id)

    def list(self, *, order_by=None, **scope: Any) -> list[ModelT]:
        query = self.session.query(self.model)
        filters = {k: v for k, v in scope.items() if v is not None}
        if filters:
            query = query.filter_by(**filters)
        query = query.order_by(order_by if order_by is not None else self.model.id.asc())
        return query.all()

    def find_first(self, **criteria: Any) -> ModelT | None:
        return (
            self.session.query(self.model)
            .filter_by(**criteria)
            .order_by(self.model.id.asc())
            .first()
        )

    def update(self, entity_id: int, partial: dict, *, commit: bool = True) -> ModelT | None:
        entity = self.get(entity_id)
        if entity is None:
            return None
        # None never overwrites: omitted and null both leave the field alone
        self._assign(entity, {k: v for k, v in partial.items() if v is not None})
        self._write(commit)
        return entity

    def delete(self, entity_id: int, *, commit: bool = True) -> bool:
        entity = self.get(entity_id)
        if entity is None:
            return False
        self.session.delete(entity)
        self._write(commit)
        return True

    def count(self, **scope: Any) -> int:
        query = self.session.query(self.model)
        filters = {k: v for k, v in scope.items() if v is not None}
        if filters:
            query = query.filter_by(**filters)
        return query.count()


class EntityStore:
    """One repository per entity type, sharing a single session."""

    def __init__(self, session: Session):
        self.session = session
        self.categories: Repository[ProductCategory] = Repository(session, ProductCategory)
        self.products: Repository[Product] = Repository(session, Product)
        self.stores: Repository[Store] = Repository(session, Store)
        self.inventory: Repository[Inventory] = Repository(session, Inventory)
        self.employees: Repository[Employee] = Repository(session, Employee)
        self.customers: Repository[Customer] = Repository(session, Customer)
        self.orders: Repository[Order] = Repository(session, Order)
        self.order_items: Repository[OrderItem] = Repository(session, OrderItem)
        self.users: Repository[User] = Repository(session, User)
        self.purchase_orders: Repository[PurchaseOrder] = Repository(session, PurchaseOrder)
        self.purchase_order_items: Repository[PurchaseOrderItem] = Repository(session, PurchaseOrderItem)

    @contextmanager
    def transaction(self) -> Iterator["EntityStore"]:
        """
        Commit everything staged inside the block, or roll all of it back.

        Repository writes inside the block must pass commit=False.
        """
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise


def get_entity_store() -> EntityStore:
    """EntityStore bound to the request-scoped Flask-SQLAlchemy session."""
    return EntityStore(db.session)
