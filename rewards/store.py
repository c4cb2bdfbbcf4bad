import threading


class DuplicateReceiptError(ValueError):
    pass


class ScoreStore:
    """In-memory, append-only map of receipt id -> points.

    Shared by every request handler; FastAPI runs sync handlers on a
    threadpool, so all access goes through one lock.
    """

    def __init__(self):
        self._points: dict[str, int] = {}
        self._lock = threading.Lock()

    def put(self, receipt_id: str, points: int) -> None:
        with self._lock:
            if receipt_id in self._points:
                raise DuplicateReceiptError(f"Receipt id already stored: {receipt_id}")
            self._points[receipt_id] = points

    def get(self, receipt_id: str) -> int | None:
        with self._lock:
            return self._points.get(receipt_id)

    def __contains__(self, receipt_id: str) -> bool:
        with self._lock:
            return receipt_id in self._points

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)
