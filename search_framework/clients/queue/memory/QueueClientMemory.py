from collections import deque
import itertools

from search_framework.clients.queue.QueueClientInterface import QueueClientInterface
from search_framework.clients.queue.models.QueueMessage import QueueMessage
from search_framework.helper.HelperConfig import HelperConfig


class QueueClientMemory(QueueClientInterface):
    """Reference queue backend that holds messages in process memory.

    Not persistent: everything that was not acknowledged is lost when the
    process exits. Within a process it behaves like a broker, consumed
    messages stay claimed until they are acknowledged or recovered.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._pending: deque[QueueMessage] = deque()
        self._unacked: list[QueueMessage] = []
        self._delivery_ids = itertools.count(1)

    ##########################################
    ################ GETTER ##################
    ##########################################

    def _get_engine_name(self) -> str:
        return "Memory"

    def count(self) -> int:
        return len(self._pending) + len(self._unacked)

    ##########################################
    ############### MESSAGES #################
    ##########################################

    def publish(self, message: QueueMessage) -> None:
        self._pending.append(message)

    def consume(self) -> QueueMessage | None:
        if not self._pending:
            return None
        message = self._pending.popleft()
        message.id = next(self._delivery_ids)
        self._unacked.append(message)
        return message

    def acknowledge(self, success: bool = True) -> None:
        consumed = {id(message) for message in self._consumed_messages}
        settled = [message for message in self._unacked if id(message) in consumed]
        self._unacked = [message for message in self._unacked if id(message) not in consumed]

        if success:
            self.logging.debug("Acknowledged %d message(s) on queue '%s'", len(settled), self.name)
        else:
            # back to the front, in delivery order
            self._pending.extendleft(reversed(settled))
            self.logging.debug("Rejected %d message(s) on queue '%s', kept for redelivery", len(settled), self.name)

        self.clear_consumed_messages()

    def recover(self) -> None:
        if self._unacked:
            self.logging.debug("Recovering %d unacknowledged message(s) on queue '%s'", len(self._unacked), self.name)
            self._pending.extendleft(reversed(self._unacked))
            self._unacked = []
        self.clear_consumed_messages()
