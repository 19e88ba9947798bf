"""
Key-value operations backed by a Supabase table.
Stores finalized project records as JSON under a namespaced key.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sketchify.config import logger, KV_TABLE
from sketchify.core.errors import KvWriteFailed
from sketchify.db import get_supabase_client


def project_key(project_id: Optional[str]) -> str:
    return f"project:{project_id}"


async def kv_set(key: str, value: Dict[str, Any]) -> None:
    """
    Insert or replace the value stored under ``key``.

    Args:
        key: Namespaced key, e.g. ``project:<id>``
        value: JSON-serializable payload

    Raises:
        KvWriteFailed: If the write fails for any reason
    """
    try:
        client = get_supabase_client()

        row = {
            "key": key,
            "value": value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

        logger.debug(f"Writing KV entry {key}")
        client.table(KV_TABLE).upsert(row, on_conflict="key").execute()

    except Exception as e:
        logger.warning(f"Error writing KV entry {key}: {e}")
        raise KvWriteFailed(key, str(e)) from e


async def kv_get(key: str) -> Optional[Dict[str, Any]]:
    """
    Retrieve the value stored under ``key``.

    Returns:
        The stored payload, or None if not found

    Raises:
        Exception: If the database operation fails
    """
    try:
        client = get_supabase_client()

        response = client.table(KV_TABLE).select("value").eq("key", key).execute()

        if response.data and len(response.data) > 0:
            return response.data[0].get("value")

        logger.debug(f"KV entry {key} not found")
        return None

    except Exception as e:
        logger.error(f"Error reading KV entry {key}: {e}")
        raise

