"""
위젯 키 저장소 (TinyDB)
========================

설정 단계에서 만든 증명·검증 키를 이름으로 저장하고 다시 불러온다.
문서 형태: {"type": 이름, "kind": 키 종류, "data": 직렬화된 키}

사용 예시:
    >>> store = KeyStore()                              # keys.json
    >>> store = KeyStore(storage=MemoryStorage)         # 메모리 DB
    >>> store.save("xor.prover", prover_key)
    >>> store.load("xor.prover") == prover_key          # True
"""

import logging

from tinydb import TinyDB, Query

from plonkup.serializers import deserialize_key, serialize_key

logger = logging.getLogger(__name__)

DEFAULT_PATH = "keys.json"

DATA = Query()


class KeyStore:
    """이름 → 위젯 키 저장소."""

    def __init__(self, path=DEFAULT_PATH, storage=None):
        if storage is not None:
            self.db = TinyDB(storage=storage)
        else:
            self.db = TinyDB(path)

    def save(self, name, key):
        """키를 저장한다 (같은 이름이면 덮어쓴다).

        Raises:
            TypeError: 위젯 키가 아닐 때
        """
        doc = serialize_key(key)
        self.db.upsert({"type": name, "kind": doc["kind"], "data": doc["data"]},
                       DATA.type == name)
        logger.debug("키 저장: %s (%s)", name, doc["kind"])

    def load(self, name):
        """이름으로 키를 불러온다. 없으면 None."""
        result = self.db.search(DATA.type == name)
        if not result:
            return None
        return deserialize_key(result[0])

    def remove(self, name):
        self.db.remove(DATA.type == name)

    def names(self):
        return sorted(doc["type"] for doc in self.db.all())

    def close(self):
        self.db.close()
