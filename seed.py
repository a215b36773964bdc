"""
Seed the shared customer list for a new database.
Run: python seed.py
Safe to re-run. Only customers missing from the table are inserted.
"""
import sys

from rugqc import create_app
from rugqc.constants import CUSTOMERS
from rugqc.extensions import db
from rugqc.models.audit import AuditLog
from rugqc.models.options import Customer


def seed_customers(customers=CUSTOMERS):
    """Insert buyers not yet in the customers table. Returns how many were added."""
    existing = {name.lower() for (name,) in db.session.query(Customer.name).all()}
    added = 0
    for customer in customers:
        if customer['name'].lower() in existing:
            continue
        row = Customer(name=customer['name'], code=customer['code'], created_by='seed')
        db.session.add(row)
        db.session.flush()
        AuditLog.log('customers', row.id, 'INSERT', new_data=customer)
        existing.add(customer['name'].lower())
        added += 1
    db.session.commit()
    return added


def seed(app):
    with app.app_context():
        print("Seeding database...")

        try:
            db.session.execute(db.text("SELECT 1"))
            print("✓ Database connected")
        except Exception as e:
            print(f"✗ Database connection failed: {e}")
            print("  Make sure PostgreSQL is running and the database exists.")
            print("  Run: createdb final_inspection")
            sys.exit(1)

        db.create_all()
        added = seed_customers()
        print(f"✓ {added} customer(s) added, {Customer.query.count()} in total")


if __name__ == '__main__':
    seed(create_app())
