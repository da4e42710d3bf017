"""ID generation routes."""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.security import HTTPBasicCredentials

from service.auth import basic_security
from utils.timestamp import format_timestamp

router = APIRouter(prefix="/api/v1", tags=["ids"])

# These will be set by app.py
_generator = None
_max_batch = 1
_health_checker = None
_stats_auth = None
_issued = 0


def init(generator, max_batch, health_checker, stats_auth):
    """Initialize with generator, batch limit, health checker and stats auth references."""
    global _generator, _max_batch, _health_checker, _stats_auth, _issued
    _generator = generator
    _max_batch = max_batch
    _health_checker = health_checker
    _stats_auth = stats_auth
    _issued = 0


def require_stats_auth(credentials: HTTPBasicCredentials = Depends(basic_security)):
    return _stats_auth.verify(credentials)


def _id_entry(value):
    # id_str keeps full precision for JSON clients limited to 53-bit numbers
    return {"id": value, "id_str": str(value)}


@router.get("/ids")
async def generate_ids(count: int = Query(1, ge=1)):
    """Generate one or more IDs."""
    global _issued
    if count > _max_batch:
        raise HTTPException(status_code=422, detail=f"count must be at most {_max_batch}")
    ids = [_id_entry(_generator.generate()) for _ in range(count)]
    _issued += count
    return {"timestamp": format_timestamp(), "ids": ids}


@router.get("/ids/layout")
async def generate_with_layout():
    """Generate one ID and expose how its bits were split."""
    global _issued
    layout = _generator.generate_layout()
    _issued += 1
    return {**_id_entry(layout.value), "layout": layout.to_dict()}


def _expiry_timestamp(epoch_ms):
    # datetime stops at year 9999; wide time fields expire past it
    try:
        return format_timestamp(epoch_ms)
    except (OverflowError, ValueError, OSError):
        return None


@router.get("/generator")
async def generator_info():
    """Return generator configuration and time-field headroom."""
    return {
        "time_length": _generator.time_length,
        "time_offset": _generator.time_offset,
        "max_time_value": _generator.max_time_value,
        "expires_at_ms": _generator.expires_at_ms,
        "expires_at": _expiry_timestamp(_generator.expires_at_ms),
        "remaining_ms": _generator.remaining_ms(),
    }


@router.get("/stats")
async def stats(username=Depends(require_stats_auth)):
    """Return issuance statistics (requires basic auth)."""
    return {
        "timestamp": format_timestamp(),
        "issued": _issued,
        "uptime_s": round(_health_checker.uptime, 1),
    }
