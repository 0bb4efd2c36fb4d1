"""Generic repository base for SQLAlchemy 2.x aggregates.

Persistence-only concerns shared by every repository:

- Primary-key and equality lookups with opt-in filter whitelists.
- Soft-delete aware reads (``is_deleted`` rows hidden unless asked for).
- Safe sorting through a per-repository whitelist with a PK tiebreaker.
- No business rules and no commit/rollback; the Unit of Work owns the
  transaction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from fleetbook.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Parse public sort tokens into ``(field, is_desc)`` tuples.

    :param raw: Public tokens like ``["-created_at", "make"]``.
    :type raw: Iterable[str]
    :returns: List of ``(field_name, is_desc)`` tokens.
    :rtype: list[tuple[str, bool]]
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        field = (token[1:] if is_desc else token).strip()
        if field:
            parsed.append((field, is_desc))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply whitelisted ``ORDER BY`` clauses; unknown tokens are ignored.

    The primary key is appended last so listings are deterministic.
    """
    orders: list[Any] = []
    for field, is_desc in parse_sort_tokens(tokens):
        col = sortable_fields.get(field)
        if isinstance(col, InstrumentedAttribute):
            orders.append(col.desc() if is_desc else col.asc())
    if orders:
        stmt = stmt.order_by(*orders)
    if pk_attr is not None:
        stmt = stmt.order_by(pk_attr.asc())
    return stmt


class BaseRepository(Generic[E]):
    """Persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``. They MAY override
    ``_sortable_fields``, ``_filterable_fields`` and ``_default_eagerload``.

    Models carrying an ``is_deleted`` column are treated as soft-deletable:
    :meth:`delete` flags the row instead of removing it and
    :meth:`get_active` skips flagged rows.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session shared across the Unit of Work scope. Falls
            back to the Flask-scoped session when omitted.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Attach eager-loading options to generic reads (none by default)."""
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist mapping of public sort keys to model attributes."""
        return {}

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist of equality-filterable fields; unknown keys are ignored."""
        return {}

    @property
    def soft_deletable(self) -> bool:
        return hasattr(self.model, "is_deleted")

    def _active_clause(self) -> Any:
        return getattr(self.model, "is_deleted").is_(False)

    # ------------------------------ Internals --------------------------------

    def _apply_equality_filters(
        self, stmt: Select[Any], filters: Mapping[str, Any] | None
    ) -> Select[Any]:
        if not filters:
            return stmt
        allowed = self._filterable_fields()
        clauses = [allowed[k] == v for k, v in filters.items() if k in allowed]
        return stmt.where(and_(*clauses)) if clauses else stmt

    # --------------------------------- Reads ---------------------------------

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, deleted or not.

        :param entity_id: Primary-key value.
        :returns: Entity or ``None``.
        :rtype: E | None
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def get_active(self, entity_id: Any) -> E | None:
        """Like :meth:`get` but returns ``None`` for soft-deleted rows."""
        entity = self.get(entity_id)
        if entity is not None and self.soft_deletable and getattr(entity, "is_deleted"):
            return None
        return entity

    def exists(self, **filters: Any) -> bool:
        """Return ``True`` when at least one row matches the equality filters."""
        stmt: Select[Any] = select(func.count()).select_from(self.model)
        stmt = self._apply_equality_filters(stmt, filters)
        return bool(self.session.execute(stmt).scalar_one())

    def count(self, *, include_deleted: bool = False, **filters: Any) -> int:
        """Count rows matching the equality filters."""
        stmt: Select[Any] = select(func.count()).select_from(self.model)
        stmt = self._apply_equality_filters(stmt, filters)
        if self.soft_deletable and not include_deleted:
            stmt = stmt.where(self._active_clause())
        return int(self.session.execute(stmt).scalar_one())

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] | None = None,
        include_deleted: bool = False,
        limit: int | None = None,
    ) -> list[E]:
        """List entities with whitelisted filters and sorting.

        :param filters: Equality filters (public keys).
        :param sort: Public sort tokens (e.g., ``["-created_at"]``).
        :param include_deleted: Also return soft-deleted rows.
        :param limit: Optional row cap.
        :returns: List of entities.
        :rtype: list[E]
        """
        stmt: Select[Any] = select(self.model)
        stmt = self._apply_equality_filters(stmt, filters)
        if self.soft_deletable and not include_deleted:
            stmt = stmt.where(self._active_clause())
        stmt = self._default_eagerload(stmt)
        stmt = apply_sorting(stmt, self._sortable_fields(), sort or [], pk_attr=self._pk_attr())
        if limit is not None:
            stmt = stmt.limit(int(limit))
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))

    # --------------------------------- Writes --------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize the PK."""
        self.session.add(instance)
        self.flush()
        return instance

    def delete(self, instance: E) -> None:
        """Soft-delete when supported, hard-delete otherwise, then flush."""
        if self.soft_deletable:
            setattr(instance, "is_deleted", True)
        else:
            self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()
