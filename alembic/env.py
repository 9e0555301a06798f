from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from car_rental_admin.infra.config import database_url

# Import every row module so Base.metadata knows all tables
from car_rental_admin.infra.db.models.base import Base
from car_rental_admin.infra.db.models.car import CarRow  # noqa: F401
from car_rental_admin.infra.db.models.car_model import CarModelRow  # noqa: F401
from car_rental_admin.infra.db.models.category import CategoryRow  # noqa: F401
from car_rental_admin.infra.db.models.customer import CustomerRow  # noqa: F401
from car_rental_admin.infra.db.models.rental import RentalRow  # noqa: F401


config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = database_url()

    connectable = engine_from_config(
        section,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
