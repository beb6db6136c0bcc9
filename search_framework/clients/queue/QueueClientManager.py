from search_framework.clients.queue.QueueClientInterface import QueueClientInterface
from search_framework.helper.HelperConfig import HelperConfig


class QueueClientManager:
    """
    Manager class to instantiate the queue client selected by configuration.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """
        Reads the queue engine from ENV configuration ("QUEUE_ENGINE", defaults to "memory").

        Returns:
            str: The engine name with its first letter upper-cased, e.g. "Memory".
        """
        engine = self.helper_config.get_string_val("QUEUE_ENGINE", default="memory")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> QueueClientInterface:
        """
        Instantiates the queue client of the configured engine.

        Raises:
            ValueError: If the engine is not supported.
        """
        engine = self._get_engine_from_env()
        class_name = f"QueueClient{engine}"
        try:
            module = __import__(
                f"search_framework.clients.queue.{engine.lower()}.{class_name}",
                fromlist=[class_name],
            )
            client_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported queue engine specified: '{engine}'. Error: {e}")

        client = client_class(helper_config=self.helper_config)
        self.logging.debug("Instantiated queue client for engine: %s", engine)
        return client

    def get_client(self) -> QueueClientInterface:
        return self.client
