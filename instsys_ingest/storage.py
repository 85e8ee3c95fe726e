import re
from typing import Any, Dict, List, Optional

import pymongo
from pymongo import MongoClient, UpdateOne
from pymongo.errors import PyMongoError

from .config import Config
from .log import get_logger

logger = get_logger(__name__)

# data_type -> collection family
COLLECTION_FAMILIES = {
    'student_excel': 'students',
    'cor_schedule': 'cor',
    'curriculum_excel': 'curriculum',
    'admin_excel': 'admin',
    'teaching_faculty_excel': 'teaching_faculty',
    'teaching_faculty_resume_pdf': 'teaching_faculty',
    'non_teaching_faculty_excel': 'non_teaching_faculty',
    'non_teaching_faculty_schedule': 'non_teaching_schedule',
    'general_info_pdf': 'general_info',
}

# families stored in a single collection regardless of department
UNSPLIT_FAMILIES = ('general_info',)


def collection_name(family: str, department: Optional[str]) -> str:
    """'curriculum' + 'CCS' -> 'curriculum_ccs'; unknown departments go to '<family>_unknown'"""
    if family in UNSPLIT_FAMILIES:
        return family
    suffix = re.sub(r'[^a-z0-9]+', '_', (department or 'unknown').lower()).strip('_')
    return f"{family}_{suffix or 'unknown'}"


class RecordStore:
    """
    MongoDB sink for extracted records.

    Each record goes to a '<family>_<department>' collection and is upserted
    on its source file, so re-ingesting a document replaces the old copy.
    Student lists are stored one document per student, keyed on student_id.
    """

    def __init__(self, config: Optional[Config] = None, client=None):
        self.config = config or Config()
        if client is None:
            client = MongoClient(
                self.config.mongo_uri,
                serverSelectionTimeoutMS=self.config.server_selection_timeout_ms,
            )
        self.client = client
        self.db = self.client[self.config.database_name]
        self._indexed = set()

    def _collection(self, name: str, *keys: str):
        """Collection handle; indexes are created the first time a name is used"""
        collection = self.db[name]
        if name not in self._indexed:
            for key in keys:
                collection.create_index([(key, pymongo.ASCENDING)])
            self._indexed.add(name)
        return collection

    def store(self, record: Dict[str, Any]) -> bool:
        metadata = record.get('metadata') or {}
        data_type = metadata.get('data_type')
        family = COLLECTION_FAMILIES.get(data_type)
        if family is None:
            logger.error(f"❌ No collection for data type {data_type!r}")
            return False

        try:
            if family == 'students':
                count = self._store_students(record)
                logger.info(f"✅ Stored {count} students from {metadata.get('source_file')}")
                return True

            name = collection_name(family, metadata.get('department'))
            collection = self._collection(name, "metadata.source_file", "metadata.department")
            collection.update_one(
                {"metadata.source_file": metadata.get('source_file')},
                {"$set": record},
                upsert=True,
            )
            logger.info(f"✅ Stored {metadata.get('source_file')} in {name}")
            return True

        except PyMongoError as e:
            logger.error(f"❌ MongoDB error storing {metadata.get('source_file')}: {e}")
            return False

    def _store_students(self, record: Dict[str, Any]) -> int:
        """One bulk upsert per students_<department> collection; returns the number written"""
        metadata = record['metadata']
        operations: Dict[str, List[UpdateOne]] = {}
        for student in record.get('students', []):
            doc = dict(student)
            doc['source_file'] = metadata.get('source_file', '')
            if 'created_at' in metadata:
                doc['created_at'] = metadata['created_at']

            key = {"student_id": doc['student_id']} if doc.get('student_id') \
                else {"full_name": doc['full_name']}
            name = collection_name('students', doc.get('department'))
            operations.setdefault(name, []).append(UpdateOne(key, {"$set": doc}, upsert=True))

        stored = 0
        for name, batch in operations.items():
            collection = self._collection(name, "student_id", "surname", "course")
            try:
                collection.bulk_write(batch, ordered=False)
            except PyMongoError:
                total = sum(len(ops) for ops in operations.values())
                logger.error(f"❌ {name}: {stored} of {total} students from "
                             f"{metadata.get('source_file')} were written before the error")
                raise
            stored += len(batch)
        return stored

    def close(self):
        self.client.close()
