"""
Build one parameterized multi-row INSERT from a list of row tuples.

Values are always sent as bound parameters, never spliced into SQL text.
SQLAlchemy's "insertmanyvalues" mode turns the parameter list into a single
INSERT ... VALUES (...), (...) statement per batch, and
`sort_by_parameter_order=True` guarantees that the RETURNING rows line up with
the input rows, so generated ids can be zipped back onto the inputs.
"""

from typing import Any, Sequence, Type

from sqlalchemy import insert
from sqlalchemy.sql.dml import Insert

from quizzical.database.base import Base


def bulk_insert(
    model: Type[Base],
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
    returning: str = "id",
) -> tuple[Insert, list[dict[str, Any]]]:
    """
    Prepare a bulk insert for `model`.

    Args:
        model: ORM class whose table receives the rows.
        columns: column names, in the order used by every row tuple.
        rows: one tuple per row, each exactly len(columns) wide.
        returning: generated column to return, in input order.

    Returns:
        (statement, parameters): execute as `await db.execute(statement, parameters)`.

    Raises:
        ValueError: no columns, no rows, an unknown column, or a row of the wrong width.
    """
    if not columns:
        raise ValueError("bulk_insert needs at least one column")
    if not rows:
        raise ValueError("bulk_insert needs at least one row")

    table_columns = model.__table__.columns
    unknown = [c for c in columns if c not in table_columns]
    if unknown:
        raise ValueError(f"Unknown column(s) for {model.__name__}: {', '.join(unknown)}")

    width = len(columns)
    parameters: list[dict[str, Any]] = []
    for index, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"Row {index} has {len(row)} values, expected {width}")
        parameters.append(dict(zip(columns, row)))

    statement = insert(model).returning(
        getattr(model, returning), sort_by_parameter_order=True
    )
    return statement, parameters
