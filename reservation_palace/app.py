import logging
import random
from datetime import date, timedelta

import click
from flask import Flask, jsonify, redirect, url_for

from .blueprints.booking import bp as booking_bp
from .blueprints.entities import customers_bp, slots_bp, tables_bp
from .client import ApiError, ReservationApiClient
from .config import Config
from .notifications import pending_notifications
from .schemas import Booking, Customer, Table, TimeSlot
from .workflows import WorkflowRegistry

logger = logging.getLogger(__name__)


def create_app(test_config: dict | None = None, api: ReservationApiClient | None = None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app.extensions["reservation_api"] = api or ReservationApiClient.from_config(app.config)
    app.extensions["workflows"] = WorkflowRegistry(app.config["WORKFLOW_SESSIONS"])
    app.jinja_env.globals["pending_notifications"] = pending_notifications

    app.register_blueprint(booking_bp, url_prefix="/booking")
    app.register_blueprint(customers_bp, url_prefix="/customers")
    app.register_blueprint(tables_bp, url_prefix="/tables")
    app.register_blueprint(slots_bp, url_prefix="/slots")

    @app.get("/")
    def index():
        return redirect(url_for("booking.index"))

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    @app.errorhandler(500)
    def internal_error(error):
        logger.exception("unhandled error")
        return "Internal server error", 500

    @app.cli.command("seed")
    @click.option("--clear/--no-clear", default=False, help="Delete existing records first.")
    def seed_command(clear):
        """Creates sample data through the reservation API."""
        client: ReservationApiClient = app.extensions["reservation_api"]
        try:
            if clear:
                for resource in (client.bookings, client.customers, client.tables, client.time_slots):
                    for record in resource.list():
                        resource.delete(record.id)
                click.echo("Cleared existing data.")

            customers = [
                client.customers.create(Customer(
                    name=f"Customer {i+1}",
                    phone_number=f"123-555-000{i}",
                    email=f"customer{i+1}@example.com",
                ))
                for i in range(10)
            ]
            click.echo(f"Created {len(customers)} customers.")

            tables = [
                client.tables.create(Table(table_number=str(n), number_of_seats=random.choice([2, 4, 6])))
                for n in range(1, 9)
            ]
            click.echo(f"Created {len(tables)} tables.")

            slots = [
                client.time_slots.create(TimeSlot(slot_id=f"S{hour}", time=f"{hour:02d}:00:00"))
                for hour in range(17, 23)
            ]
            click.echo(f"Created {len(slots)} time slots.")

            today = date.today()
            bookings = []
            for _ in range(20):
                table = random.choice(tables)
                bookings.append(client.bookings.create(Booking(
                    id=0,
                    customer_id=random.choice(customers).id,
                    table_id=table.id,
                    booking_slot_id=random.choice(slots).id,
                    booking_date=(today + timedelta(days=random.randint(0, 6))).isoformat(),
                    number_of_people=random.randint(1, table.number_of_seats),
                    is_confirmed=True,
                )))
            click.echo(f"Created {len(bookings)} bookings.")
        except ApiError as e:
            raise click.ClickException(str(e))
        click.echo("Reservation API seeded!")

    return app
