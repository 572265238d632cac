"""Create all tables directly from the ORM metadata (local development only)."""
from communify.db.session import create_tables, engine


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    init_db()
    print(f"Database initialized at {engine.url}.")
