from typing import Callable, Dict, List, Optional
import logging
import threading
import time
import uuid

from app.core.errors import NotFoundError
from app.schemas.mailbox import AddressRecord, Message

logger = logging.getLogger(__name__)

# Fresh ids drawn before giving up on a free address
MAX_GENERATE_ATTEMPTS = 5

class MailStore:
    """
    In-memory address and inbox store.

    Every address in ``_addresses`` has exactly one inbox in ``_inboxes`` and
    vice versa. Both maps are only ever changed together under ``_lock``.
    Inboxes are kept newest-first.
    """

    def __init__(
        self,
        domain: str = "kasmail.temp",
        ttl_seconds: float = 30 * 60,
        clock: Callable[[], float] = time.time,
    ):
        self.domain = domain
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._addresses: Dict[str, AddressRecord] = {}
        self._inboxes: Dict[str, List[Message]] = {}

    def _new_address(self) -> str:
        local_part = str(uuid.uuid4()).split("-")[0]
        return f"{local_part}@{self.domain}"

    def generate(self) -> str:
        with self._lock:
            for _ in range(MAX_GENERATE_ATTEMPTS):
                address = self._new_address()
                if address not in self._addresses:
                    break
                logger.warning(f"Generated address collided with a live one: {address}")
            else:
                raise RuntimeError("Could not generate a free address")

            self._addresses[address] = AddressRecord(address=address, created_at=self._clock())
            self._inboxes[address] = []

        logger.info(f"Generated address: {address}")
        return address

    def exists(self, address: str) -> bool:
        with self._lock:
            return address in self._addresses

    def count(self) -> int:
        with self._lock:
            return len(self._addresses)

    def delete(self, address: str) -> bool:
        with self._lock:
            removed = self._addresses.pop(address, None)
            self._inboxes.pop(address, None)
        return removed is not None

    def get_messages(self, address: str) -> List[Message]:
        with self._lock:
            if address not in self._addresses:
                raise NotFoundError("Email not found or expired")
            return list(self._inboxes[address])

    def append_message(self, address: str, message: Message):
        with self._lock:
            if address not in self._addresses:
                raise NotFoundError("Recipient email not found or expired")
            self._inboxes[address].insert(0, message)

    def receive(self, to: str, sender: str, subject: str, body: str) -> Message:
        """Build a message stamped with the current time and deliver it to ``to``."""
        message = Message(
            id=str(uuid.uuid4()),
            from_=sender,
            subject=subject,
            body=body,
            timestamp=int(self._clock() * 1000),
        )
        self.append_message(to, message)
        logger.info(f"Delivered message {message.id} to {to}")
        return message

    def sweep(self, now: Optional[float] = None) -> List[str]:
        """
        Remove every address older than the TTL together with its inbox.
        Returns the removed addresses.
        """
        if now is None:
            now = self._clock()

        expired = []
        with self._lock:
            for address, record in list(self._addresses.items()):
                if now - record.created_at > self.ttl_seconds:
                    del self._addresses[address]
                    self._inboxes.pop(address, None)
                    expired.append(address)

        for address in expired:
            logger.info(f"[Cleanup] Deleted expired email: {address}")
        return expired
