"""
Constraint registry for the clinic tables.

Unique keys, references and their delete/update policies are read from the
SQLAlchemy table metadata, so each constraint is declared exactly once, on
the model. Named CHECK constraints are paired with a pure Python predicate
here; the store evaluates those predicates before anything is written.
"""

import enum
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Dict, List, Mapping, Optional, Set, Tuple

from sqlalchemy import CheckConstraint, ForeignKeyConstraint, MetaData, UniqueConstraint

from clinic_booking.database import Base

logger = logging.getLogger(__name__)

PRIMARY_KEY = "PRIMARY"


class ReferentialAction(str, enum.Enum):
    """What happens to dependents when the referenced row is deleted or re-keyed."""
    CASCADE = "CASCADE"
    RESTRICT = "RESTRICT"
    SET_NULL = "SET NULL"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ReferentialAction":
        # An omitted clause or NO ACTION behaves as RESTRICT when checks are immediate
        if value is None:
            return cls.RESTRICT
        normalized = " ".join(value.upper().split())
        if normalized == "NO ACTION":
            return cls.RESTRICT
        return cls(normalized)


@dataclass(frozen=True)
class UniqueKey:
    name: str
    fields: Tuple[str, ...]


@dataclass(frozen=True)
class Reference:
    """A single-column foreign key from `table.field` to `target_table.target_field`."""
    name: str
    table: str
    field: str
    target_table: str
    target_field: str
    on_delete: ReferentialAction
    on_update: ReferentialAction
    nullable: bool


@dataclass(frozen=True)
class Check:
    """Named field-level check. Like SQL CHECK, it passes when an operand is NULL."""
    name: str
    fields: Tuple[str, ...]
    predicate: Callable[[Mapping], bool]
    message: str

    def holds(self, row: Mapping) -> bool:
        if any(row.get(name) is None for name in self.fields):
            return True
        return bool(self.predicate(row))


@dataclass
class EntityRules:
    """Everything the store enforces for one table."""
    table: str
    model: type
    primary_key: Tuple[str, ...]
    unique_keys: List[UniqueKey] = field(default_factory=list)
    references: List[Reference] = field(default_factory=list)
    checks: List[Check] = field(default_factory=list)
    dependents: List[Reference] = field(default_factory=list)

    @property
    def referenced_fields(self) -> Set[str]:
        """Columns of this table that other tables point at."""
        return {ref.target_field for ref in self.dependents}

    def identity(self, row) -> object:
        values = tuple(getattr(row, name) for name in self.primary_key)
        return values[0] if len(values) == 1 else values


CHECK_PREDICATES: Dict[str, Check] = {
    "chk_time_valid": Check(
        name="chk_time_valid",
        fields=("start_time", "end_time"),
        predicate=lambda row: row["end_time"] > row["start_time"],
        message="end_time must be after start_time",
    ),
    "chk_qty_pos": Check(
        name="chk_qty_pos",
        fields=("quantity",),
        predicate=lambda row: row["quantity"] > 0,
        message="quantity must be greater than 0",
    ),
    "chk_amounts_nonneg": Check(
        name="chk_amounts_nonneg",
        fields=("amount_due", "amount_paid"),
        predicate=lambda row: row["amount_due"] >= 0 and row["amount_paid"] >= 0,
        message="amount_due and amount_paid must not be negative",
    ),
    "chk_payment_pos": Check(
        name="chk_payment_pos",
        fields=("amount",),
        predicate=lambda row: row["amount"] > 0,
        message="payment amount must be greater than 0",
    ),
}


def build_rules(
    metadata: MetaData,
    models: Mapping[str, type],
    predicates: Mapping[str, Check] = CHECK_PREDICATES,
) -> Dict[str, EntityRules]:
    """Derive per-table rules from table metadata.

    Raises ValueError for a CHECK constraint without a predicate or a
    composite foreign key, since the store could not enforce either.
    """
    rules: Dict[str, EntityRules] = {}

    for table in metadata.sorted_tables:
        if table.name not in models:
            continue

        entity = EntityRules(
            table=table.name,
            model=models[table.name],
            primary_key=tuple(column.name for column in table.primary_key.columns),
        )
        entity.unique_keys.append(UniqueKey(PRIMARY_KEY, entity.primary_key))

        for constraint in sorted(table.constraints, key=lambda c: str(c.name or "")):
            if isinstance(constraint, UniqueConstraint):
                columns = tuple(column.name for column in constraint.columns)
                name = constraint.name or f"uq_{table.name}_{'_'.join(columns)}"
                entity.unique_keys.append(UniqueKey(name, columns))

            elif isinstance(constraint, CheckConstraint):
                check = predicates.get(constraint.name)
                if check is None:
                    raise ValueError(f"No predicate registered for check {constraint.name!r} on {table.name}")
                entity.checks.append(check)

            elif isinstance(constraint, ForeignKeyConstraint):
                if len(constraint.elements) != 1:
                    raise ValueError(f"Composite foreign key {constraint.name!r} on {table.name} is not supported")
                element = constraint.elements[0]
                entity.references.append(Reference(
                    name=constraint.name or f"fk_{table.name}_{element.parent.name}",
                    table=table.name,
                    field=element.parent.name,
                    target_table=element.column.table.name,
                    target_field=element.column.name,
                    on_delete=ReferentialAction.parse(constraint.ondelete),
                    on_update=ReferentialAction.parse(constraint.onupdate),
                    nullable=bool(element.parent.nullable),
                ))

        for index in sorted(table.indexes, key=lambda ix: str(ix.name)):
            if index.unique:
                entity.unique_keys.append(UniqueKey(index.name, tuple(column.name for column in index.columns)))

        rules[table.name] = entity

    for entity in rules.values():
        for ref in entity.references:
            rules[ref.target_table].dependents.append(ref)

    logger.debug(f"Built constraint rules for {len(rules)} tables")
    return rules


@lru_cache(maxsize=1)
def get_rules() -> Dict[str, EntityRules]:
    """Rules for every mapped clinic table, built once."""
    import clinic_booking.models  # noqa: F401

    models = {mapper.local_table.name: mapper.class_ for mapper in Base.registry.mappers}
    return build_rules(Base.metadata, models)


def describe_policies(rules: Mapping[str, EntityRules]) -> List[Tuple[str, str, str, str]]:
    """(referenced table, dependent table, on delete, on update) for every reference."""
    rows = []
    for entity in rules.values():
        for ref in entity.dependents:
            rows.append((entity.table, ref.table, ref.on_delete.value, ref.on_update.value))
    return sorted(rows)
