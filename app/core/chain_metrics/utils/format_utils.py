# app/core/chain_metrics/utils/format_utils.py
from datetime import datetime, timezone
from typing import Any, Optional
import re

from .exceptions import SchemaMismatch

GAS_UNIT = "Gwei"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_FRACTION_RE = re.compile(r"\.(\d+)")


def format_tps(value: Optional[float]) -> Optional[str]:
    """Formats a rate with two decimals ('37.00')"""
    if value is None:
        return None
    return f"{value:.2f}"


def format_gas_price(safe_gas_price: str) -> str:
    return f"{safe_gas_price} {GAS_UNIT}"


def parse_int(value: Any, field: str) -> int:
    """
    Parse an integer that upstream APIs usually ship as a decimal string.

    Raises:
        SchemaMismatch: if the value is missing or not an integer
    """
    if isinstance(value, bool) or value is None:
        raise SchemaMismatch(f"Field '{field}' is missing or not numeric: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise SchemaMismatch(f"Field '{field}' is not an integer: {value!r}")


def parse_optional_float(value: Any, field: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaMismatch(f"Field '{field}' is not a number: {value!r}")
    return float(value)


def parse_rfc3339(value: Any, field: str = "time") -> datetime:
    """
    Parse an RFC3339 timestamp as emitted by Tendermint
    ('2024-05-01T12:00:00.123456789Z').

    Fractions beyond microseconds are truncated; datetime cannot hold them
    and the rate only needs millisecond precision.
    """
    if not isinstance(value, str) or not value:
        raise SchemaMismatch(f"Field '{field}' is not a timestamp: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise SchemaMismatch(f"Field '{field}' is not RFC3339: {value!r}")
    if parsed.tzinfo is None:
        raise SchemaMismatch(f"Field '{field}' carries no offset: {value!r}")
    return parsed


def micros_since_epoch(value: datetime) -> int:
    """Timezone-aware datetime -> integer microseconds since the Unix epoch"""
    delta = value - EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds


def truncate_to_millis(micros: int) -> int:
    """Microseconds -> whole milliseconds, rounded towards zero"""
    if micros < 0:
        return -(-micros // 1000)
    return micros // 1000


def parse_hex_int(value: Any, field: str) -> int:
    """'0x1b4' -> 436, as returned by JSON-RPC proxies"""
    if isinstance(value, str) and value[:2].lower() == "0x":
        try:
            return int(value, 16)
        except ValueError:
            pass
    raise SchemaMismatch(f"Field '{field}' is not a hex quantity: {value!r}")


def format_wei_as_gwei(wei: int) -> str:
    """
    Exact Wei -> Gwei conversion ('12500000000' -> '12.5 Gwei').

    Uses integer arithmetic so large values keep every digit.
    """
    gwei, remainder = divmod(wei, 10 ** 9)
    if not remainder:
        return format_gas_price(str(gwei))
    return format_gas_price(f"{gwei}.{remainder:09d}".rstrip("0"))
