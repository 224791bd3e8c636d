import os
from dotenv import load_dotenv
from pymongo import MongoClient

load_dotenv()

class MongoDB:
    def __init__(self):
        self.client = None
        self.db = None

    def init_app(self, app):
        uri = app.config.get("MONGO_URI") or os.getenv("MONGO_URI", "mongodb://localhost:27017")
        db_name = app.config.get("DB_NAME") or os.getenv("DB_NAME", "bulkads")

        # MongoClient connects lazily, so no server round-trip happens here
        self.client = MongoClient(uri, serverSelectionTimeoutMS=app.config.get("MONGO_TIMEOUT_MS", 5000))
        self.db = self.client[db_name]
        app.mongo = self.db

    def get_collection(self, name):
        if self.db is None:
            raise RuntimeError("MongoDB not initialized")
        return self.db[name]

# Export the instance
db = MongoDB()
