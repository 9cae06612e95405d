"""create_clinic_booking_schema

Revision ID: 1c2d3e4f5a6b
Revises:
Create Date: 2026-10-16 09:00:00.000000+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1c2d3e4f5a6b'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


SEX = sa.Enum('F', 'M', 'X', name='patient_sex')
ROOM_TYPE = sa.Enum('Consultation', 'Lab', 'Surgery', 'Other', name='room_type')
ROOM_STATUS = sa.Enum('Available', 'Unavailable', name='room_status')
APPOINTMENT_STATUS = sa.Enum('Scheduled', 'CheckedIn', 'Completed', 'Cancelled', 'NoShow', name='appointment_status')
INVOICE_STATUS = sa.Enum('Unpaid', 'PartiallyPaid', 'Paid', 'Voided', name='invoice_status')
PAYMENT_METHOD = sa.Enum('Cash', 'Card', 'MobileMoney', 'Insurance', name='payment_method')


def upgrade() -> None:
    # Reference tables
    op.create_table(
        'doctors',
        sa.Column('doctor_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=25), nullable=False),
        sa.Column('license_no', sa.String(length=50), nullable=False),
        sa.Column('hire_date', sa.Date(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('doctor_id'),
        sa.UniqueConstraint('email', name='uq_doctors_email'),
        sa.UniqueConstraint('phone', name='uq_doctors_phone'),
        sa.UniqueConstraint('license_no', name='uq_doctors_license_no')
    )
    op.create_index('ix_doctors_name', 'doctors', ['last_name', 'first_name'], unique=False)

    op.create_table(
        'specialties',
        sa.Column('specialty_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('specialty_id'),
        sa.UniqueConstraint('name', name='uq_specialties_name')
    )

    op.create_table(
        'doctor_specialty',
        sa.Column('doctor_id', sa.Integer(), nullable=False),
        sa.Column('specialty_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['doctor_id'], ['doctors.doctor_id'], name='fk_ds_doctor',
                                ondelete='CASCADE', onupdate='CASCADE'),
        sa.ForeignKeyConstraint(['specialty_id'], ['specialties.specialty_id'], name='fk_ds_specialty',
                                ondelete='RESTRICT', onupdate='CASCADE'),
        sa.PrimaryKeyConstraint('doctor_id', 'specialty_id')
    )

    op.create_table(
        'patients',
        sa.Column('patient_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('sex', SEX, nullable=False),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=25), nullable=False),
        sa.Column('national_id', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('patient_id'),
        sa.UniqueConstraint('email', name='uq_patients_email'),
        sa.UniqueConstraint('phone', name='uq_patients_phone'),
        sa.UniqueConstraint('national_id', name='uq_patients_national_id')
    )
    op.create_index('ix_patients_name', 'patients', ['last_name', 'first_name'], unique=False)

    op.create_table(
        'rooms',
        sa.Column('room_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('room_number', sa.String(length=20), nullable=False),
        sa.Column('room_type', ROOM_TYPE, nullable=False),
        sa.Column('status', ROOM_STATUS, nullable=False),
        sa.PrimaryKeyConstraint('room_id'),
        sa.UniqueConstraint('room_number', name='uq_rooms_room_number')
    )

    # Core workflow tables
    op.create_table(
        'appointments',
        sa.Column('appointment_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('doctor_id', sa.Integer(), nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=True),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('status', APPOINTMENT_STATUS, nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=True),
        sa.CheckConstraint('end_time > start_time', name='chk_time_valid'),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.patient_id'], name='fk_appt_patient',
                                ondelete='RESTRICT', onupdate='CASCADE'),
        sa.ForeignKeyConstraint(['doctor_id'], ['doctors.doctor_id'], name='fk_appt_doctor',
                                ondelete='RESTRICT', onupdate='CASCADE'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.room_id'], name='fk_appt_room',
                                ondelete='SET NULL', onupdate='CASCADE'),
        sa.PrimaryKeyConstraint('appointment_id'),
        sa.UniqueConstraint('doctor_id', 'start_time', name='uq_doctor_start')
    )
    op.create_index('ix_appt_patient_time', 'appointments', ['patient_id', 'start_time'], unique=False)
    op.create_index('ix_appt_doctor_time', 'appointments', ['doctor_id', 'start_time'], unique=False)

    op.create_table(
        'prescriptions',
        sa.Column('prescription_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('appointment_id', sa.Integer(), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.ForeignKeyConstraint(['appointment_id'], ['appointments.appointment_id'], name='fk_rx_appt',
                                ondelete='CASCADE', onupdate='CASCADE'),
        sa.PrimaryKeyConstraint('prescription_id'),
        sa.UniqueConstraint('appointment_id', name='uq_prescriptions_appointment')
    )

    op.create_table(
        'medications',
        sa.Column('medication_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint('medication_id'),
        sa.UniqueConstraint('name', name='uq_medications_name')
    )

    op.create_table(
        'prescription_items',
        sa.Column('prescription_id', sa.Integer(), nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=False),
        sa.Column('dosage', sa.String(length=50), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('instructions', sa.String(length=255), nullable=True),
        sa.CheckConstraint('quantity > 0', name='chk_qty_pos'),
        sa.ForeignKeyConstraint(['prescription_id'], ['prescriptions.prescription_id'], name='fk_pxi_rx',
                                ondelete='CASCADE', onupdate='CASCADE'),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.medication_id'], name='fk_pxi_med',
                                ondelete='RESTRICT', onupdate='CASCADE'),
        sa.PrimaryKeyConstraint('prescription_id', 'medication_id')
    )

    # Billing
    op.create_table(
        'invoices',
        sa.Column('invoice_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('appointment_id', sa.Integer(), nullable=False),
        sa.Column('amount_due', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('amount_paid', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('status', INVOICE_STATUS, nullable=False),
        sa.Column('issued_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint('amount_due >= 0 AND amount_paid >= 0', name='chk_amounts_nonneg'),
        sa.ForeignKeyConstraint(['appointment_id'], ['appointments.appointment_id'], name='fk_inv_appt',
                                ondelete='CASCADE', onupdate='CASCADE'),
        sa.PrimaryKeyConstraint('invoice_id'),
        sa.UniqueConstraint('appointment_id', name='uq_invoices_appointment')
    )

    op.create_table(
        'payments',
        sa.Column('payment_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('paid_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('method', PAYMENT_METHOD, nullable=False),
        sa.CheckConstraint('amount > 0', name='chk_payment_pos'),
        sa.ForeignKeyConstraint(['invoice_id'], ['invoices.invoice_id'], name='fk_pay_invoice',
                                ondelete='CASCADE', onupdate='CASCADE'),
        sa.PrimaryKeyConstraint('payment_id')
    )
    op.create_index('ix_payments_invoice', 'payments', ['invoice_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_payments_invoice', table_name='payments')
    op.drop_table('payments')
    op.drop_table('invoices')
    op.drop_table('prescription_items')
    op.drop_table('medications')
    op.drop_table('prescriptions')
    op.drop_index('ix_appt_doctor_time', table_name='appointments')
    op.drop_index('ix_appt_patient_time', table_name='appointments')
    op.drop_table('appointments')
    op.drop_table('rooms')
    op.drop_index('ix_patients_name', table_name='patients')
    op.drop_table('patients')
    op.drop_table('doctor_specialty')
    op.drop_table('specialties')
    op.drop_index('ix_doctors_name', table_name='doctors')
    op.drop_table('doctors')
