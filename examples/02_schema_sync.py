"""
Example 02: Schema Sync Check

This example plugs a minimal SQLite-backed SchemaDiffer into the validator
and reports which mapped tables are missing from the database.
"""

from row_schema import MetadataRegistry, SchemaValidator, ValidatorConfig, entity
import tempfile
import sqlite3
from pathlib import Path


class SqliteTableDiffer:
    """Reports a CREATE TABLE change for every mapped table the database lacks."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def diff(self, classes):
        conn = sqlite3.connect(self.db_path)
        try:
            rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        finally:
            conn.close()
        existing = {row[0] for row in rows}
        return [
            f"CREATE TABLE {table}"
            for table in (c.name.rsplit(".", 1)[-1].lower() for c in classes)
            if table not in existing
        ]


def main():
    # Set up database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("CREATE TABLE user (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
    conn.commit()
    conn.close()

    registry = MetadataRegistry([
        entity("blog.User").id("id").field("name").build(),
        entity("blog.Post").id("id").field("title").build(),
    ])
    validator = SchemaValidator(
        registry,
        differ=SqliteTableDiffer(db_path),
        config=ValidatorConfig(max_workers=2),
    )

    print("=== Schema Sync ===\n")
    summary = validator.validate()
    print(f"   Mapping errors: {len(summary.errors)}")
    print(f"   In sync: {summary.in_sync}")
    for change in summary.pending_changes:
        print(f"   - {change}")
    print(f"   Exit code: {summary.exit_code}\n")

    # Clean up
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
