from sqlalchemy.exc import IntegrityError

# PostgreSQLのSQLSTATE
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def is_unique_violation(e: IntegrityError) -> bool:
    """一意制約違反かどうか(PostgreSQL / SQLite)"""
    pgcode = getattr(e.orig, "pgcode", None)
    if pgcode is not None:
        return pgcode == UNIQUE_VIOLATION
    message = str(e.orig).upper()
    return "UNIQUE" in message or "DUPLICATE" in message


def is_foreign_key_violation(e: IntegrityError) -> bool:
    """外部キー制約違反かどうか(PostgreSQL / SQLite)"""
    pgcode = getattr(e.orig, "pgcode", None)
    if pgcode is not None:
        return pgcode == FOREIGN_KEY_VIOLATION
    return "FOREIGN KEY" in str(e.orig).upper()
