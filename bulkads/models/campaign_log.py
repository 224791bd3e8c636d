# bulkads/models/campaign_log.py

from datetime import datetime, timezone
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING
from typing import Dict, Any, List, Optional

from ..extensions.db import db as db_ext
from ..utils.logger import Log


class CampaignLog:
    """
    One document per campaign attempted by a CSV import.

    Created as `pending` before the Graph API calls start and moved to
    `success` or `error` once they finish.
    """

    collection_name = "campaign_logs"

    STATUS_PENDING = "pending"
    STATUS_SUCCESS = "success"
    STATUS_ERROR = "error"
    STATUSES = (STATUS_PENDING, STATUS_SUCCESS, STATUS_ERROR)

    @classmethod
    def _collection(cls):
        return db_ext.get_collection(cls.collection_name)

    @classmethod
    def _oid_str(cls, doc):
        if not doc:
            return None
        if "_id" in doc:
            doc["_id"] = str(doc["_id"])
        return doc

    @staticmethod
    def _to_object_id(log_id) -> Optional[ObjectId]:
        try:
            return ObjectId(str(log_id))
        except (InvalidId, TypeError):
            return None

    # -------------------- CRUD --------------------

    @classmethod
    def create_log(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        doc = {
            "name": data.get("name"),
            "status": data.get("status", cls.STATUS_PENDING),
            "account_id": data.get("account_id"),
            "user_id": data.get("user_id"),
            "row_number": data.get("row_number"),
            "csv_row": data.get("csv_row"),
            "daily_budget": data.get("daily_budget"),
            "facebook_ids": data.get("facebook_ids"),
            "error_message": data.get("error_message"),
            "created_at": now,
            "updated_at": now,
        }

        inserted = cls._collection().insert_one(doc)
        doc["_id"] = str(inserted.inserted_id)
        return doc

    @classmethod
    def update_log(cls, log_id, updates: Dict[str, Any]) -> bool:
        oid = cls._to_object_id(log_id)
        if oid is None:
            Log.error(f"[CampaignLog][update_log] invalid log id: {log_id}")
            return False

        fields = dict(updates)
        fields.pop("_id", None)
        fields["updated_at"] = datetime.now(timezone.utc)

        result = cls._collection().update_one({"_id": oid}, {"$set": fields})
        return result.modified_count > 0

    @classmethod
    def get_by_id(cls, log_id) -> Optional[Dict[str, Any]]:
        oid = cls._to_object_id(log_id)
        if oid is None:
            return None
        return cls._oid_str(cls._collection().find_one({"_id": oid}))

    @classmethod
    def get_logs_by_status(cls, status: str, limit: int = 50) -> List[Dict[str, Any]]:
        cursor = (
            cls._collection()
            .find({"status": status})
            .sort("created_at", DESCENDING)
            .limit(int(limit))
        )
        return [cls._oid_str(doc) for doc in cursor]

    @classmethod
    def list_by_user(
        cls,
        user_id: str,
        account_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 50,
        skip: int = 0,
    ) -> Dict[str, Any]:
        query = {"user_id": user_id}
        if account_id:
            query["account_id"] = account_id
        if status:
            query["status"] = status

        col = cls._collection()
        total = col.count_documents(query)
        cursor = col.find(query).sort("created_at", DESCENDING).skip(int(skip)).limit(int(limit))

        return {
            "logs": [cls._oid_str(doc) for doc in cursor],
            "total": total,
            "limit": int(limit),
            "skip": int(skip),
        }

    @classmethod
    def get_stats(cls, user_id: Optional[str] = None, account_id: Optional[str] = None) -> Dict[str, int]:
        match = {}
        if user_id:
            match["user_id"] = user_id
        if account_id:
            match["account_id"] = account_id

        pipeline = [
            {"$match": match},
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
        ]

        stats = {"total": 0, cls.STATUS_SUCCESS: 0, cls.STATUS_ERROR: 0, cls.STATUS_PENDING: 0}
        for row in cls._collection().aggregate(pipeline):
            stats["total"] += row["count"]
            if row["_id"] in stats:
                stats[row["_id"]] = row["count"]

        return stats

    @classmethod
    def ensure_indexes(cls):
        col = cls._collection()
        col.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
        col.create_index([("user_id", ASCENDING), ("account_id", ASCENDING), ("created_at", DESCENDING)])
        col.create_index([("status", ASCENDING), ("created_at", DESCENDING)])
