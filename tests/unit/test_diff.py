"""Tests for constraint diffing."""

import dataclasses

import pytest

from sqlschema.exceptions import DiffError
from sqlschema.schema.constraints import (
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    UniqueConstraint,
)
from sqlschema.schema.diff import ConstraintDiffer, SchemaChange, render_change
from sqlschema.schema.models import Schema, Table
from sqlschema.types import ChangeType
from tests.helpers import DoubleQuoteFormatter, make_schema


@pytest.fixture
def differ() -> ConstraintDiffer:
    return ConstraintDiffer()


class TestDiffNoChanges:
    """Equal constraints produce no changes."""

    def test_identical(self, differ):
        schema = make_schema(users=[PrimaryKeyConstraint(["id"])])
        assert differ.diff(schema, schema) == []

    def test_introspected_name_and_order_ignored(self, differ):
        """A declared constraint matches an introspected one named differently."""
        current = make_schema(
            accounts=[PrimaryKeyConstraint(["id", "tenant"]).named("accounts_pkey")]
        )
        declared = make_schema(accounts=[PrimaryKeyConstraint(["tenant", "id"])])
        assert differ.diff(current, declared) == []

    def test_tables_only_in_current_ignored(self, differ):
        current = make_schema(legacy=[PrimaryKeyConstraint(["id"])])
        assert differ.diff(current, make_schema()) == []


class TestDiffChanges:
    """Tests for added and dropped constraints."""

    def test_new_table_adds_all_constraints(self, differ):
        declared = make_schema(
            orders=[
                ForeignKeyConstraint("user_id", "users", "id"),
                PrimaryKeyConstraint(["id"]),
            ]
        )

        changes = differ.diff(make_schema(), declared)

        assert [c.change_type for c in changes] == [ChangeType.ADD_CONSTRAINT] * 2
        # primary key before foreign key
        assert isinstance(changes[0].constraint, PrimaryKeyConstraint)
        assert isinstance(changes[1].constraint, ForeignKeyConstraint)

    def test_drop_is_destructive_and_keeps_current_name(self, differ):
        current = make_schema(
            users=[UniqueConstraint(["email"]).named("users_email_key")]
        )
        declared = make_schema(users=[])

        changes = differ.diff(current, declared)

        assert len(changes) == 1
        change = changes[0]
        assert change.change_type == ChangeType.DROP_CONSTRAINT
        assert change.is_destructive is True
        assert change.constraint.name("users") == "users_email_key"

    def test_changed_primary_key_drops_then_adds(self, differ):
        current = make_schema(users=[PrimaryKeyConstraint(["id"])])
        declared = make_schema(users=[PrimaryKeyConstraint(["id", "tenant"])])

        changes = differ.diff(current, declared)

        assert [c.change_type for c in changes] == [
            ChangeType.DROP_CONSTRAINT,
            ChangeType.ADD_CONSTRAINT,
        ]

    def test_foreign_key_target_change(self, differ):
        current = make_schema(orders=[ForeignKeyConstraint("user_id", "users", "id")])
        declared = make_schema(
            orders=[ForeignKeyConstraint("user_id", "accounts", "id")]
        )

        changes = differ.diff(current, declared)

        assert len(changes) == 2
        assert changes[0].constraint.referenced_table == "users"
        assert changes[1].constraint.referenced_table == "accounts"

    def test_ordering(self, differ):
        current = make_schema(
            t=[
                PrimaryKeyConstraint(["id"]),
                UniqueConstraint(["a"]),
                ForeignKeyConstraint("x", "u", "id"),
            ]
        )
        declared = make_schema(
            t=[
                ForeignKeyConstraint("y", "u", "id"),
                UniqueConstraint(["b"]),
                PrimaryKeyConstraint(["code"]),
            ]
        )

        changes = differ.diff(current, declared)

        assert [(c.change_type.value, c.constraint.kind.value) for c in changes] == [
            ("drop_constraint", "fk"),
            ("drop_constraint", "uq"),
            ("drop_constraint", "pk"),
            ("add_constraint", "pk"),
            ("add_constraint", "uq"),
            ("add_constraint", "fk"),
        ]

    def test_mismatched_table_names(self, differ):
        current = Schema(tables={"users": Table(name="people")})
        declared = Schema(tables={"users": Table(name="users")})
        with pytest.raises(DiffError):
            differ.diff(current, declared)


class TestRenderChange:
    """Tests for rendering changes to SQL."""

    def test_render_drop(self):
        change = SchemaChange(
            change_type=ChangeType.DROP_CONSTRAINT,
            table_name="users",
            constraint=PrimaryKeyConstraint(["id"]),
            is_destructive=True,
        )
        assert (
            render_change(change, DoubleQuoteFormatter())
            == b'ALTER TABLE "users" DROP CONSTRAINT IF EXISTS "pk_users"'
        )

    def test_render_add(self):
        change = SchemaChange(
            change_type=ChangeType.ADD_CONSTRAINT,
            table_name="users",
            constraint=UniqueConstraint(["email", "tenant"]),
        )
        assert (
            render_change(change, DoubleQuoteFormatter())
            == b'CONSTRAINT "uq_users_email_tenant" UNIQUE ("email", "tenant")'
        )


class TestSchemaChange:
    def test_fields(self):
        """SchemaChange carries the constraint and whether applying it is destructive."""
        names = [f.name for f in dataclasses.fields(SchemaChange)]
        assert names == ["change_type", "table_name", "constraint", "is_destructive"]
