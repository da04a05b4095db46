"""Typed positional parameter binding for prepared statements."""

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Any, NamedTuple, Sequence, Tuple, Union

from workbench.exceptions import BindError

logger = logging.getLogger(__name__)

PLACEHOLDER = '%s'
DEFAULT_SCALE = 2


class SqlType(Enum):
    STRING = 'string'
    DECIMAL = 'decimal'
    INTEGER = 'integer'


class Param(NamedTuple):
    """One positional parameter: value, declared type and decimal scale."""
    value: Any
    sql_type: SqlType
    scale: int = DEFAULT_SCALE


ParamLike = Union[Param, Tuple[Any, SqlType]]


def to_decimal(value: Any, scale: int = DEFAULT_SCALE) -> Decimal:
    """Convert ``value`` to a Decimal with exactly ``scale`` fraction digits.

    Raises:
        ValueError: value is not a finite number or is too large to scale.
    """
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a decimal number")
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        value = value.strip()
    if not isinstance(value, (Decimal, int, str)):
        raise ValueError(f"{value!r} is not a decimal number")
    try:
        number = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"{value!r} is not a decimal number") from None
    if not number.is_finite():
        raise ValueError(f"{value!r} is not a finite decimal number")
    try:
        return number.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"{value!r} is out of range") from None


def to_integer(value: Any) -> int:
    """Convert ``value`` to an int without losing any fraction.

    Raises:
        ValueError: value is not a whole number.
    """
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        raise ValueError(f"{value!r} is not an integer")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"{value!r} is not an integer") from None
    raise ValueError(f"{value!r} is not an integer")


class ParameterBinder:
    """Turns ``(value, SqlType)`` pairs into driver-ready parameter tuples.

    mysql-connector uses ``%s`` placeholders; each one is filled by the
    parameter at the same 1-based position. ``None`` always binds as NULL.
    """

    def bind(self, statement: str, params: Sequence[ParamLike]) -> Tuple[Any, ...]:
        expected = statement.count(PLACEHOLDER)
        if expected != len(params):
            raise BindError(
                f"Statement has {expected} placeholder(s) but {len(params)} parameter(s) were given"
            )
        return tuple(self._bind_one(position, param)
                     for position, param in enumerate(params, start=1))

    def execute(self, cursor, statement: str, params: Sequence[ParamLike] = ()) -> None:
        """Bind ``params`` and execute ``statement`` on ``cursor``."""
        values = self.bind(statement, params)
        logger.debug("Executing %s with %s", ' '.join(statement.split()), values)
        cursor.execute(statement, values)

    def _bind_one(self, position: int, param: ParamLike) -> Any:
        if not isinstance(param, Param):
            param = Param(*param)
        value, sql_type, scale = param

        if value is None:
            return None

        try:
            if sql_type is SqlType.STRING:
                if not isinstance(value, str):
                    raise ValueError(f"{value!r} is not a string")
                return value
            if sql_type is SqlType.DECIMAL:
                return to_decimal(value, scale)
            if sql_type is SqlType.INTEGER:
                return to_integer(value)
        except ValueError as e:
            raise BindError(
                f"Cannot bind parameter {position} as {sql_type.value}: {e}", cause=e
            ) from e

        raise BindError(f"Unsupported SQL type for parameter {position}: {sql_type!r}")
