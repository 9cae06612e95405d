"""Tests for schema creation, DDL rendering and health checks."""

import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.pool import StaticPool

from clinic_booking.database import configure_sqlite, health_check, init_db, render_ddl, reset_db


@pytest.fixture
def bare_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


class TestSchemaLifecycle:

    def test_init_db_creates_tables_and_indexes(self, bare_engine):
        init_db(bind=bare_engine)
        inspector = inspect(bare_engine)

        assert set(inspector.get_table_names()) >= {"doctors", "appointments", "payments", "doctor_specialty"}
        assert {ix["name"] for ix in inspector.get_indexes("appointments")} == {
            "ix_appt_patient_time",
            "ix_appt_doctor_time",
        }
        assert {ix["name"] for ix in inspector.get_indexes("payments")} == {"ix_payments_invoice"}

    def test_reset_db_empties_tables(self, bare_engine):
        init_db(bind=bare_engine)
        with bare_engine.begin() as conn:
            conn.execute(text("INSERT INTO specialties (name) VALUES ('Cardiology')"))

        reset_db(bind=bare_engine)

        with bare_engine.connect() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM specialties")).scalar() == 0

    def test_foreign_key_pragma(self, bare_engine):
        configure_sqlite(bare_engine, foreign_keys=True)

        with bare_engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_health_check(self, bare_engine):
        assert health_check(bind=bare_engine) is True


class TestRenderDdl:

    def test_mysql_ddl(self):
        ddl = render_ddl("mysql")

        assert "CREATE TABLE doctors" in ddl
        assert "ENUM('F','M','X')" in ddl
        assert "ENUM('Scheduled','CheckedIn','Completed','Cancelled','NoShow')" in ddl
        assert "ON DELETE SET NULL ON UPDATE CASCADE" in ddl
        assert "CONSTRAINT uq_doctor_start UNIQUE (doctor_id, start_time)" in ddl
        assert "CHECK (end_time > start_time)" in ddl
        assert "CREATE INDEX ix_doctors_name ON doctors (last_name, first_name);" in ddl

    def test_referenced_tables_come_first(self):
        ddl = render_ddl("sqlite")

        assert ddl.index("CREATE TABLE appointments") < ddl.index("CREATE TABLE invoices")
        assert ddl.index("CREATE TABLE invoices") < ddl.index("CREATE TABLE payments")
