"""
Health Monitoring Router - Realty Admin Diagnostics
===================================================

Checks that the Supabase tables behind the admin panel are reachable.

Endpoint: GET /api/health
Register in main.py: app.include_router(health.router, prefix="/api")
"""

import time
import logging
from datetime import datetime
from typing import Dict, Any
from fastapi import APIRouter

from config import AppConfig
from utils.database.supabase_client import get_supabase

logger = logging.getLogger(__name__)

router = APIRouter()

MANAGED_TABLES = [AppConfig.PROPERTIES_TABLE, AppConfig.QUIZ_TABLE]


def check_supabase_health() -> Dict[str, Any]:
    """Check each managed table with a one-row read."""
    result = {
        "status": "unknown",
        "latency_ms": None,
        "details": {}
    }

    start = time.time()

    supabase = get_supabase()
    if not supabase:
        result["status"] = "critical"
        result["error"] = "Supabase client not initialized"
        result["check_time_ms"] = int((time.time() - start) * 1000)
        return result

    failures = []
    for table in MANAGED_TABLES:
        try:
            supabase.table(table).select('id').limit(1).execute()
            result["details"][table] = "ok"
        except Exception as e:
            logger.error(f"[HEALTH] {table} check failed: {e}")
            result["details"][table] = str(e)
            failures.append(table)

    result["latency_ms"] = int((time.time() - start) * 1000)

    if len(failures) == len(MANAGED_TABLES):
        result["status"] = "critical"
        result["error"] = "No managed table is reachable"
    elif failures or result["latency_ms"] >= 2000:
        result["status"] = "degraded"
    else:
        result["status"] = "healthy"

    result["check_time_ms"] = result["latency_ms"]
    return result


@router.get("/health")
async def get_system_health():
    """Overall status plus the Supabase table check."""
    supabase = check_supabase_health()

    alerts = []
    if supabase["status"] == "critical":
        alerts.append({
            "severity": "critical",
            "subsystem": "supabase",
            "message": supabase.get("error", "Supabase unavailable")
        })

    return {
        "status": supabase["status"],
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "version": AppConfig.VERSION,
        "subsystems": {"supabase": supabase},
        "config": AppConfig.get_config_summary(),
        "alerts": alerts,
    }
