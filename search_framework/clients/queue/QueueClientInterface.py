from abc import abstractmethod

from search_framework.clients.ClientInterface import ClientInterface
from search_framework.clients.queue.models.QueueMessage import QueueMessage
from search_framework.helper.HelperConfig import HelperConfig
from search_framework.models.config import EnvConfig


class QueueClientInterface(ClientInterface):
    """Backend that queues items scheduled for indexing.

    Delivery is at-least-once: a consumed message stays in the backend until
    it is acknowledged, so a failed or interrupted run redelivers it.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self.name = self.get_config_val("NAME", default="default", val_type="string")

        # messages returned by consume() since the last acknowledgement
        self._consumed_messages: list[QueueMessage] = []

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "queue"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="NAME", val_type="string", default="default"),
        ]

    ##########################################
    ########## CONSUMED MESSAGES #############
    ##########################################

    def attach_consumed_message(self, message: QueueMessage) -> None:
        self._consumed_messages.append(message)

    def get_consumed_messages(self) -> list[QueueMessage]:
        return list(self._consumed_messages)

    def clear_consumed_messages(self) -> None:
        self._consumed_messages = []

    ##########################################
    ############### MESSAGES #################
    ##########################################

    def new_message(self) -> QueueMessage:
        """
        Factory for the messages of this backend. Override to use a QueueMessage subclass.
        """
        return QueueMessage()

    @abstractmethod
    def publish(self, message: QueueMessage) -> None:
        """
        Adds the message to the queue.
        """
        pass

    @abstractmethod
    def consume(self) -> QueueMessage | None:
        """
        Returns the next message that has not been delivered yet and stamps its delivery id.

        Returns:
            QueueMessage | None: The message, or None if there is nothing left to deliver.
        """
        pass

    @abstractmethod
    def acknowledge(self, success: bool = True) -> None:
        """
        Settles every message consumed since the last acknowledgement and clears the consumed log.

        On success the messages are removed from the queue, otherwise they stay
        in place and are redelivered. Must never raise.
        """
        pass

    @abstractmethod
    def recover(self) -> None:
        """
        Makes every consumed but unacknowledged message deliverable again.
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """
        Returns the number of messages in the queue, delivered or not.
        """
        pass
