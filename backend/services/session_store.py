from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

from core.settings import get_settings
from schemas.process import ProcessModel
from services.wizard import WizardEngine

logger = logging.getLogger(__name__)


@dataclass
class WizardSession:
    id: str
    result: Optional[ProcessModel] = None
    engine: WizardEngine = field(init=False, repr=False)
    # Held around every engine call; requests for one session run one at a time.
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.engine = WizardEngine(on_complete=self._hand_off)
        self.engine.start()

    def _hand_off(self, model: ProcessModel) -> None:
        self.result = model

    def restart(self) -> None:
        self.engine.restart()
        self.result = None


class SessionNotFoundError(KeyError):
    pass


class WizardSessionStore:
    """In-memory registry of live wizard sessions; the oldest are evicted first."""

    def __init__(self, max_sessions: Optional[int] = None):
        self._max_sessions = max_sessions or get_settings().wizard.max_sessions
        self._sessions: "OrderedDict[str, WizardSession]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> WizardSession:
        session_id = uuid4().hex
        session = WizardSession(id=session_id)
        with self._lock:
            self._sessions[session_id] = session
            while len(self._sessions) > self._max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.warning("Evicted wizard session %s", evicted_id)
        logger.info("Created wizard session %s", session_id)
        return session

    def get(self, session_id: str) -> WizardSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            self._sessions.move_to_end(session_id)
            return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is None:
            raise SessionNotFoundError(session_id)
        logger.info("Deleted wizard session %s", session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
