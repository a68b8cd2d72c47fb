"""
Panel Metadata Store Initialization Script.

Creates the tables the database service relies on (servers, database_hosts,
databases) in the metadata store. Existing tables are left untouched, so the
script can be re-run safely.

**Dependencies:**
    - PostgreSQL server reachable with POSTGRES_HOST, POSTGRES_PORT,
      POSTGRES_USER, POSTGRES_PASSWORD
    - METADATA_DATABASE_NAME (default: panel) must already exist

**Example Usage:**
    ```bash
    python scripts/init_db.py
    python scripts/init_db.py panel_staging
    ```

**Error Handling:**
    - Exits with code 0 on success
    - Exits with code 1 when the store is unreachable or DDL fails
"""

from pathlib import Path
import sys

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Add the project's root directory to the Python path
sys.path.append(str(Path(__file__).parent.parent.resolve()))

from common.database import Base, check_connection, dispose_engines, get_db_session, get_engine  # noqa: E402
from common.models import DatabaseHost  # noqa: E402  (registers the models on Base.metadata)


def main() -> None:
    """Create every panel table on the configured (or given) metadata database."""
    database_name = sys.argv[1] if len(sys.argv) > 1 else None
    engine = get_engine(database_name)

    if not check_connection(engine):
        logger.error(f"✗ Cannot reach metadata store at {engine.url.host}")
        sys.exit(1)

    try:
        Base.metadata.create_all(engine)
    except Exception as e:
        logger.error(f"✗ Error creating tables: {e}")
        sys.exit(1)

    logger.info(
        f"✓ Tables ready in '{engine.url.database}': "
        + ", ".join(sorted(Base.metadata.tables))
    )

    with get_db_session(database_name) as session:
        host_count = session.query(DatabaseHost).count()
    if host_count == 0:
        logger.warning("No database hosts registered yet; database creation will fail until one is added")
    else:
        logger.info(f"✓ {host_count} database host(s) registered")


if __name__ == "__main__":
    logger.add("logs/init_db.log", rotation="500 MB")

    try:
        main()
    finally:
        dispose_engines()
