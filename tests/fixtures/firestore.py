"""
In-memory stand-in for the Firestore client surface used by the repository:
collections, documents, ordered/limited queries with start_after, and
write batches that apply atomically on commit.
"""
import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP


MAX_BATCH_WRITES = 500


class FakeSnapshot:
    def __init__(self, reference: "FakeDocumentRef", data: Optional[Dict[str, Any]]):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data)


class FakeDocumentRef:
    def __init__(self, db: "FakeFirestore", path: str):
        self.db = db
        self.path = path
        self.id = path.rsplit("/", 1)[-1]

    def collection(self, name: str) -> "FakeCollection":
        return FakeCollection(self.db, f"{self.path}/{name}")

    def get(self) -> FakeSnapshot:
        return FakeSnapshot(self, self.db.documents.get(self.path))

    def __eq__(self, other):
        return isinstance(other, FakeDocumentRef) and other.path == self.path

    def __hash__(self):
        return hash(self.path)


class FakeQuery:
    def __init__(self, collection: "FakeCollection", limit: Optional[int] = None, after: Optional[str] = None):
        self.collection = collection
        self._limit = limit
        self._after = after

    def order_by(self, field_path: Any) -> "FakeQuery":
        # only document-id ordering is supported, which is also the default
        return self

    def limit(self, count: int) -> "FakeQuery":
        return FakeQuery(self.collection, limit=count, after=self._after)

    def start_after(self, snapshot: FakeSnapshot) -> "FakeQuery":
        return FakeQuery(self.collection, limit=self._limit, after=snapshot.id)

    def stream(self):
        db = self.collection.db
        db.stream_calls.append(self.collection.path)
        if self.collection.path in db.failing_collections:
            raise RuntimeError(f"listing failed for {self.collection.path}")

        ids = sorted(db.child_ids(self.collection.path))
        if self._after is not None:
            ids = [doc_id for doc_id in ids if doc_id > self._after]
        if self._limit is not None:
            ids = ids[:self._limit]
        for doc_id in ids:
            yield self.collection.document(doc_id).get()


class FakeCollection(FakeQuery):
    def __init__(self, db: "FakeFirestore", path: str):
        self.db = db
        self.path = path
        super().__init__(self)

    def document(self, doc_id: str) -> FakeDocumentRef:
        return FakeDocumentRef(self.db, f"{self.path}/{doc_id}")


class FakeWriteBatch:
    def __init__(self, db: "FakeFirestore"):
        self.db = db
        self.updates: List[tuple] = []

    def update(self, reference: FakeDocumentRef, data: Dict[str, Any]) -> None:
        self.updates.append((reference, dict(data)))

    def commit(self) -> None:
        if len(self.updates) > MAX_BATCH_WRITES:
            raise ValueError(f"batch has {len(self.updates)} writes, limit is {MAX_BATCH_WRITES}")
        if self.db.fail_on_commit is not None and len(self.db.commits) == self.db.fail_on_commit:
            raise RuntimeError("commit failed")

        # validate everything before applying anything
        for reference, _ in self.updates:
            if reference.path not in self.db.documents:
                raise KeyError(f"No document to update: {reference.path}")

        now = datetime.now(timezone.utc)
        for reference, data in self.updates:
            resolved = {key: (now if value is SERVER_TIMESTAMP else value) for key, value in data.items()}
            self.db.documents[reference.path].update(resolved)
        self.db.commits.append([reference.path for reference, _ in self.updates])


class FakeFirestore:
    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.commits: List[List[str]] = []
        self.stream_calls: List[str] = []
        self.failing_collections: set = set()
        self.fail_on_commit: Optional[int] = None

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def batch(self) -> FakeWriteBatch:
        return FakeWriteBatch(self)

    def child_ids(self, collection_path: str) -> List[str]:
        prefix = collection_path + "/"
        return [
            path[len(prefix):]
            for path in self.documents
            if path.startswith(prefix) and "/" not in path[len(prefix):]
        ]

    def add_organization(self, org_id: str, users: Optional[Dict[str, Dict[str, Any]]] = None) -> None:
        self.documents[f"organizations/{org_id}"] = {"name": org_id}
        for user_id, data in (users or {}).items():
            self.documents[f"organizations/{org_id}/users/{user_id}"] = dict(data)

    def user(self, org_id: str, user_id: str) -> Dict[str, Any]:
        return self.documents[f"organizations/{org_id}/users/{user_id}"]

    @property
    def commit_sizes(self) -> List[int]:
        return [len(paths) for paths in self.commits]
