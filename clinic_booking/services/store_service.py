"""Constrained entity store for the clinic booking tables.

Every mutation runs under a single writer lock in one session. All checks
(payload, named checks, unique keys, references, restrict policies) are
evaluated before the first write, so a rejected operation leaves the store
unchanged; cascades are planned in full before any row is touched.
"""

import logging
import threading
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Set, Tuple, Union

from pydantic import BaseModel, ValidationError
from sqlalchemy import Enum, String, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_booking.config import settings
from clinic_booking.constraints import EntityRules, ReferentialAction, get_rules
from clinic_booking.database import SessionLocal
from clinic_booking.exceptions import (
    ConstraintViolation,
    RecordNotFound,
    ReferenceViolation,
    StoreError,
    UniquenessViolation,
)
from clinic_booking.schemas import SCHEMAS

logger = logging.getLogger(__name__)

Identity = Union[int, Tuple[int, ...]]
Predicate = Callable[[BaseModel], bool]


@dataclass
class DeletePlan:
    """Rows a delete will touch, children before parents."""
    keys: Set[Tuple[str, Any]] = field(default_factory=set)
    rows: List[Tuple[EntityRules, Any]] = field(default_factory=list)
    cleared: List[Tuple[EntityRules, Any, str]] = field(default_factory=list)


class QueryResult:
    """Lazy, restartable query result.

    Nothing runs until iteration; every iteration opens its own session and
    streams snapshots from a single SELECT.
    """

    def __init__(self, store: "ClinicStore", rules: EntityRules, criteria, filters, predicate, order_by):
        self._store = store
        self._rules = rules
        self._criteria = criteria
        self._filters = filters
        self._predicate = predicate
        self._order_by = order_by

    def __iter__(self) -> Iterator[BaseModel]:
        read_schema = SCHEMAS[self._rules.table].read
        with self._store._read_guard():
            db = self._store.session_factory()
            try:
                query = db.query(self._rules.model)
                if self._criteria:
                    query = query.filter(*self._criteria)
                if self._filters:
                    query = query.filter_by(**self._filters)
                query = query.order_by(*self._order_by)
                for row in query.yield_per(self._store.batch_size):
                    snapshot = read_schema.model_validate(row)
                    if self._predicate is None or self._predicate(snapshot):
                        yield snapshot
            finally:
                db.close()

    def all(self) -> List[BaseModel]:
        return list(self)

    def first(self) -> Optional[BaseModel]:
        # Close the generator right away so its session and read guard are released
        snapshots = iter(self)
        try:
            return next(snapshots, None)
        finally:
            snapshots.close()

    def count(self) -> int:
        return sum(1 for _ in self)


class ClinicStore:
    """Create, read, update and delete clinic records without ever breaking a declared constraint."""

    def __init__(self, session_factory: sessionmaker = None, batch_size: int = None):
        self.session_factory = session_factory or SessionLocal
        self.batch_size = batch_size or settings.QUERY_BATCH_SIZE
        self.rules = get_rules()
        self._write_lock = threading.RLock()
        # A StaticPool hands every session the same DBAPI connection
        bind = getattr(self.session_factory, "kw", {}).get("bind")
        self.shared_connection = isinstance(getattr(bind, "pool", None), StaticPool)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def create(self, entity, data) -> BaseModel:
        """Insert a record and return its snapshot."""
        rules = self._rules_for(entity)
        schemas = SCHEMAS[rules.table]

        with self._transaction("create", rules.table) as db:
            values = self._validate_payload(rules, schemas.create, self._as_dict(data))
            for name in rules.primary_key:
                if values.get(name) is None:
                    values.pop(name, None)
            self._enforce(db, rules, values)

            row = rules.model(**values)
            db.add(row)
            db.flush()
            db.refresh(row)
            snapshot = schemas.read.model_validate(row)

        logger.info(f"Created {rules.table}/{self._format_identity(rules.identity(snapshot))}")
        return snapshot

    def get(self, entity, ident: Identity) -> Optional[BaseModel]:
        """Snapshot of one record, or None. Composite keys are tuples in primary-key order."""
        rules = self._rules_for(entity)
        with self._read_guard():
            db = self.session_factory()
            try:
                row = db.get(rules.model, ident)
                if row is None:
                    return None
                return SCHEMAS[rules.table].read.model_validate(row)
            finally:
                db.close()

    def query(
        self,
        entity,
        *criteria,
        predicate: Optional[Predicate] = None,
        order_by=None,
        **filters,
    ) -> QueryResult:
        """Lazy result of the rows matching column criteria, equality filters and a snapshot predicate."""
        rules = self._rules_for(entity)
        if order_by is None:
            order_by = [getattr(rules.model, name) for name in rules.primary_key]
        elif not isinstance(order_by, (list, tuple)):
            order_by = [order_by]
        return QueryResult(self, rules, criteria, filters, predicate, list(order_by))

    def count(self, entity) -> int:
        rules = self._rules_for(entity)
        with self._read_guard():
            db = self.session_factory()
            try:
                return db.query(rules.model).count()
            finally:
                db.close()

    def update(self, entity, ident: Identity, changes) -> BaseModel:
        """Apply changes, re-validating every constraint they touch.

        A changed primary key is propagated to dependents according to
        their ON UPDATE policy.
        """
        rules = self._rules_for(entity)
        schemas = SCHEMAS[rules.table]

        with self._transaction("update", rules.table) as db:
            row = self._load(db, rules, ident)
            requested = self._validate_changes(rules, schemas.update, changes)

            current = self._row_values(rules, row)
            merged = {**current, **requested}
            payload = {name: value for name, value in merged.items() if name in schemas.create.model_fields}
            values = self._validate_payload(rules, schemas.create, payload)
            for name in rules.primary_key:
                if values.get(name) is None:
                    values[name] = current[name]

            changed = {name for name, value in values.items() if name in current and value != current[name]}
            if not changed:
                return schemas.read.model_validate(row)

            self._enforce(db, rules, values, changed=changed, current_row=row)

            key_changes = {
                name: (current[name], values[name])
                for name in sorted(changed & rules.referenced_fields)
            }
            for name, (old, new) in key_changes.items():
                self._check_key_change(db, rules, name, old, new)

            for name in changed:
                setattr(row, name, values[name])
            db.flush()

            for name, (old, new) in key_changes.items():
                self._propagate_key_change(db, rules, name, old, new)
            db.flush()
            db.expire_all()
            snapshot = schemas.read.model_validate(row)

        logger.info(f"Updated {rules.table}/{self._format_identity(ident)}: {', '.join(sorted(changed))}")
        return snapshot

    def delete(self, entity, ident: Identity) -> int:
        """Delete a record and apply every dependent policy. Returns the number of rows deleted."""
        rules = self._rules_for(entity)

        with self._transaction("delete", rules.table) as db:
            row = self._load(db, rules, ident)
            plan = DeletePlan()
            self._plan_delete(db, rules, row, plan)

            for child_rules, child, name in plan.cleared:
                if (child_rules.table, child_rules.identity(child)) not in plan.keys:
                    setattr(child, name, None)
            db.flush()

            for victim_rules, victim in plan.rows:
                logger.debug(f"Deleting {victim_rules.table}/{self._format_identity(victim_rules.identity(victim))}")
                db.delete(victim)
                db.flush()

        logger.info(
            f"Deleted {rules.table}/{self._format_identity(ident)} "
            f"({len(plan.rows)} row(s) deleted, {len(plan.cleared)} reference(s) cleared)"
        )
        return len(plan.rows)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _read_guard(self):
        """Serialize reads with writes when every session shares one connection."""
        if self.shared_connection:
            return self._write_lock
        return nullcontext()

    @contextmanager
    def _transaction(self, action: str, table: str) -> Iterator[Session]:
        with self._write_lock:
            db = self.session_factory()
            try:
                yield db
                db.commit()
            except IntegrityError as e:
                db.rollback()
                error = self._translate_integrity_error(table, e)
                logger.warning(f"{action} on {table} rejected by the database: {error}")
                raise error from e
            except StoreError as e:
                db.rollback()
                logger.warning(f"{action} on {table} rejected: {e}")
                raise
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def _translate_integrity_error(self, table: str, error: IntegrityError) -> StoreError:
        detail = str(error.orig)
        lowered = detail.lower()
        if "unique" in lowered or "duplicate" in lowered:
            return UniquenessViolation(f"Duplicate value in {table}: {detail}", table=table)
        if "foreign key" in lowered:
            return ReferenceViolation(f"Reference check failed on {table}: {detail}", table=table)
        return ConstraintViolation(f"Constraint failed on {table}: {detail}", table=table)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _rules_for(self, entity) -> EntityRules:
        table = entity if isinstance(entity, str) else getattr(entity, "__tablename__", None)
        if table not in self.rules:
            raise TypeError(f"{entity!r} is not a clinic table")
        return self.rules[table]

    @staticmethod
    def _as_dict(data) -> dict:
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True)
        return dict(data)

    def _validate_payload(self, rules: EntityRules, schema, data: dict) -> dict:
        try:
            return schema.model_validate(data).model_dump()
        except ValidationError as e:
            raise self._schema_violation(rules, e) from e

    def _validate_changes(self, rules: EntityRules, schema, changes) -> dict:
        try:
            return schema.model_validate(self._as_dict(changes)).model_dump(exclude_unset=True)
        except ValidationError as e:
            raise self._schema_violation(rules, e) from e

    @staticmethod
    def _schema_violation(rules: EntityRules, error: ValidationError) -> ConstraintViolation:
        errors = error.errors()
        fields = [str(item["loc"][0]) for item in errors if item.get("loc")]
        summary = "; ".join(f"{'.'.join(str(p) for p in item['loc'])}: {item['msg']}" for item in errors)
        return ConstraintViolation(
            f"Invalid {rules.table} record: {summary}",
            errors=errors,
            table=rules.table,
            constraint="schema",
            fields=fields,
        )

    def _enforce(
        self,
        db: Session,
        rules: EntityRules,
        values: Dict[str, Any],
        changed: Optional[Set[str]] = None,
        current_row=None,
    ):
        """Run named checks, unique keys and references touched by `changed` (all of them on create)."""

        def touched(names) -> bool:
            return changed is None or bool(set(names) & changed)

        for check in rules.checks:
            if touched(check.fields) and not check.holds(values):
                raise ConstraintViolation(
                    f"{rules.table}: {check.message}",
                    table=rules.table,
                    constraint=check.name,
                    fields=check.fields,
                )

        for key in rules.unique_keys:
            if not touched(key.fields) or any(name not in values for name in key.fields):
                continue
            key_values = {name: values[name] for name in key.fields}
            if any(value is None for value in key_values.values()):
                continue
            existing = db.query(rules.model).filter(*self._key_criteria(rules, key_values)).first()
            if existing is not None and existing is not current_row:
                raise UniquenessViolation(
                    f"{rules.table}: {', '.join(key.fields)} already taken "
                    f"({', '.join(str(v) for v in key_values.values())})",
                    table=rules.table,
                    constraint=key.name,
                    fields=key.fields,
                    value=tuple(key_values.values()),
                )

        for ref in rules.references:
            if not touched((ref.field,)):
                continue
            value = values.get(ref.field)
            if value is None:
                continue
            target = self.rules[ref.target_table]
            exists = (
                db.query(target.model)
                .filter(getattr(target.model, ref.target_field) == value)
                .first()
            )
            if exists is None:
                raise ReferenceViolation(
                    f"{rules.table}.{ref.field}={value} does not match any {ref.target_table}.{ref.target_field}",
                    table=rules.table,
                    constraint=ref.name,
                    fields=(ref.field,),
                    value=value,
                )

    # ------------------------------------------------------------------
    # Cascades
    # ------------------------------------------------------------------

    def _load(self, db: Session, rules: EntityRules, ident: Identity):
        row = db.get(rules.model, ident)
        if row is None:
            raise RecordNotFound(
                f"{rules.table}/{self._format_identity(ident)} does not exist",
                table=rules.table,
                value=ident,
            )
        return row

    def _dependents_of(self, db: Session, ref, value) -> Tuple[EntityRules, list]:
        child_rules = self.rules[ref.table]
        column = getattr(child_rules.model, ref.field)
        return child_rules, db.query(child_rules.model).filter(column == value).all()

    def _plan_delete(self, db: Session, rules: EntityRules, row, plan: DeletePlan):
        key = (rules.table, rules.identity(row))
        if key in plan.keys:
            return
        plan.keys.add(key)

        for ref in rules.dependents:
            child_rules, children = self._dependents_of(db, ref, getattr(row, ref.target_field))
            if not children:
                continue

            if ref.on_delete is ReferentialAction.RESTRICT:
                raise ReferenceViolation(
                    f"Cannot delete {rules.table}/{self._format_identity(key[1])}: "
                    f"{len(children)} row(s) in {ref.table} still reference it",
                    table=rules.table,
                    constraint=ref.name,
                    fields=(ref.field,),
                    value=key[1],
                )
            if ref.on_delete is ReferentialAction.CASCADE:
                for child in children:
                    self._plan_delete(db, child_rules, child, plan)
            else:
                plan.cleared.extend((child_rules, child, ref.field) for child in children)

        # Post-order: dependents were appended first
        plan.rows.append((rules, row))

    def _check_key_change(self, db: Session, rules: EntityRules, name: str, old, new):
        for ref in rules.dependents:
            if ref.target_field != name:
                continue
            _, children = self._dependents_of(db, ref, old)
            if not children:
                continue
            if ref.on_update is ReferentialAction.RESTRICT:
                raise ReferenceViolation(
                    f"Cannot change {rules.table}.{name} from {old} to {new}: "
                    f"{len(children)} row(s) in {ref.table} still reference it",
                    table=rules.table,
                    constraint=ref.name,
                    fields=(name,),
                    value=old,
                )
            if ref.on_update is ReferentialAction.SET_NULL and not ref.nullable:
                raise ConstraintViolation(
                    f"Cannot clear non-nullable {ref.table}.{ref.field}",
                    table=ref.table,
                    constraint=ref.name,
                    fields=(ref.field,),
                )

    def _propagate_key_change(self, db: Session, rules: EntityRules, name: str, old, new):
        """Rewrite references to a changed key, recursing into re-keyed dependents.

        With engine-side ON UPDATE CASCADE the rows are already rewritten and
        the statements below match nothing.
        """
        for ref in rules.dependents:
            if ref.target_field != name:
                continue
            child_rules = self.rules[ref.table]
            column = getattr(child_rules.model, ref.field)
            replacement = None if ref.on_update is ReferentialAction.SET_NULL else new
            count = (
                db.query(child_rules.model)
                .filter(column == old)
                .update({column: replacement}, synchronize_session=False)
            )
            if count:
                logger.debug(f"Rewrote {count} {ref.table}.{ref.field} reference(s) {old} -> {replacement}")
            if replacement is not None and ref.field in child_rules.referenced_fields:
                self._propagate_key_change(db, child_rules, ref.field, old, new)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _key_criteria(rules: EntityRules, key_values: Dict[str, Any]) -> list:
        """Equality per key column; text columns compare case-insensitively."""
        criteria = []
        for name, value in key_values.items():
            column = rules.model.__table__.c[name]
            if isinstance(column.type, String) and not isinstance(column.type, Enum) and isinstance(value, str):
                criteria.append(func.lower(column) == value.lower())
            else:
                criteria.append(column == value)
        return criteria

    @staticmethod
    def _row_values(rules: EntityRules, row) -> Dict[str, Any]:
        return {column.key: getattr(row, column.key) for column in rules.model.__table__.columns}

    @staticmethod
    def _format_identity(ident) -> str:
        if isinstance(ident, tuple):
            return ",".join(str(part) for part in ident)
        return str(ident)
