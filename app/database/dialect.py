from sqlalchemy.sql.elements import ColumnElement


def contains_ci(column, value: str) -> ColumnElement:
    """
    Case-insensitive substring match.
    Renders ILIKE on PostgreSQL and lower(..) LIKE lower(..) elsewhere;
    ``%`` and ``_`` in ``value`` are matched literally.
    """
    return column.icontains(value, autoescape=True)
