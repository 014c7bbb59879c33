"""Create the forum tables in the configured database."""

from fitpulse.core.settings import settings
from fitpulse.db.session import open_database


def init_db() -> None:
    """Initialize the database by creating all tables."""
    with open_database(
        settings.effective_database_url,
        timeout_seconds=settings.vote_store_timeout_seconds,
    ) as database:
        database.create_tables()


def main() -> None:
    init_db()
    print("Database initialized.")


if __name__ == "__main__":
    main()
