from abc import ABC, abstractmethod
from typing import Any

from search_framework.helper.HelperConfig import HelperConfig
from search_framework.models.config import EnvConfig


class ClientInterface(ABC):
    """Base of every pluggable backend (queue, search engine).

    A backend is identified by its client type and engine name, e.g. "queue"
    and "memory". Its settings live under the prefix "<TYPE>_<ENGINE>_"
    ("QUEUE_MEMORY_NAME", "SEARCH_SOLR_BASE_URL") and are checked as soon as
    the client is constructed.
    """

    def __init__(self, helper_config: HelperConfig):
        self._helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.validate_full_configuration()

    def validate_full_configuration(self) -> None:
        """
        Raises:
            ValueError: If a required setting of the backend is missing or malformed.
        """
        for config in self._get_required_config():
            self.get_config_val(config.env_key, default=config.default, val_type=config.val_type)

    ##########################################
    ############## IDENTITY ##################
    ##########################################

    def get_client_type(self) -> str:
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        """
        Returns the kind of backend, e.g. "queue" or "search".
        """
        pass

    def get_engine_name(self) -> str:
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        """
        Returns the engine implementing the backend, e.g. "Memory".
        """
        pass

    ##########################################
    ############### SETTINGS #################
    ##########################################

    @abstractmethod
    def _get_required_config(self) -> list[EnvConfig]:
        """
        Returns the settings the backend reads, see EnvConfig.
        """
        pass

    def _get_config_key_name(self, raw_key: str) -> str:
        return "_".join((self.get_client_type(), self.get_engine_name(), raw_key)).upper()

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """Reads a setting of this backend, e.g. raw_key "NAME" of the memory queue is "QUEUE_MEMORY_NAME".

        Raises:
            ValueError: If the value is missing without default, malformed or of an unknown type.
        """
        return self._helper_config.get_typed_val(self._get_config_key_name(raw_key), val_type=val_type, default=default)
