from dotenv import load_dotenv
load_dotenv()

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from starter.config import load_settings
from starter.database import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Same DB_* variables the server uses; render_as_string keeps the password
config.set_main_option(
    "sqlalchemy.url",
    load_settings().database_url.render_as_string(hide_password=False).replace("%", "%%"),
)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
