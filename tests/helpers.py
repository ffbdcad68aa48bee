from typing import Dict, List, Optional, Tuple


class FakeGateway:
    """In-memory registry: nothing is default until set() is called."""

    def __init__(self, defaults: Optional[Dict[str, str]] = None) -> None:
        self.defaults: Dict[str, str] = dict(defaults or {})
        self.queries: List[str] = []
        self.sets: List[Tuple[str, str]] = []

    def query(self, mime_type: str) -> Optional[str]:
        self.queries.append(mime_type)
        return self.defaults.get(mime_type)

    def set(self, mime_type: str, handler_id: str) -> None:
        self.sets.append((mime_type, handler_id))
        self.defaults[mime_type] = handler_id
