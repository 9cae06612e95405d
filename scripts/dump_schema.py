"""
Print the clinic booking DDL for a SQL dialect.

Usage:
    python scripts/dump_schema.py [mysql|postgresql|sqlite] > clinic_booking.sql
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from clinic_booking.constraints import describe_policies, get_rules
from clinic_booking.database import render_ddl


if __name__ == "__main__":
    dialect = sys.argv[1] if len(sys.argv) > 1 else "mysql"

    print(f"-- Clinic booking schema ({dialect})\n")
    print(render_ddl(dialect))

    print("-- Referential policies (referenced -> dependent: on delete / on update)")
    for parent, child, on_delete, on_update in describe_policies(get_rules()):
        print(f"--   {parent:<15} -> {child:<20} {on_delete:<10} / {on_update}")
