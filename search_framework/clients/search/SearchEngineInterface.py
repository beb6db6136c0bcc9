from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Callable

import httpx

from search_framework.clients.HttpClientInterface import HttpClientInterface
from search_framework.clients.collection.CollectionInterface import CollectionInterface
from search_framework.clients.search.models.IndexDocument import IndexDocument
from search_framework.clients.search.models.IndexField import IndexField
from search_framework.clients.search.normalizers.NormalizerInterface import NormalizerInterface
from search_framework.helper.HelperConfig import HelperConfig
from search_framework.models.errors import NormalizerNotFoundError

if TYPE_CHECKING:
    from search_framework.services.indexing.Indexer import Indexer


class SearchEngineInterface(HttpClientInterface):
    """Search backend (Solr, Elasticsearch, ...) that documents are indexed into.

    The requests are implemented here; a concrete backend supplies the
    endpoints, the payloads and the response parsing. While the indexer drains
    the queue, the engine is registered as an event subscriber, see
    get_subscribed_events().
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._normalizers: dict[str, NormalizerInterface] = {}

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "search"

    def get_subscribed_events(self) -> dict[str, str | Callable | list]:
        """
        Returns the listeners the engine registers for the duration of an indexing run,
        keyed by event name. Values are method names, callables or lists of those.
        """
        return {}

    ################ FACTORIES ##################
    def new_document(self, indexer: "Indexer") -> IndexDocument:
        return IndexDocument(indexer)

    def new_field(self, field_id: str, value: Any, name: str | None = None) -> IndexField:
        return IndexField(id=field_id, value=value, name=name or field_id)

    ################ NORMALIZERS ##################
    def attach_normalizer(self, data_type: str, normalizer: NormalizerInterface) -> None:
        self._normalizers[data_type] = normalizer

    def has_normalizer(self, data_type: str) -> bool:
        return data_type in self._normalizers

    def get_normalizer(self, data_type: str) -> NormalizerInterface:
        if data_type not in self._normalizers:
            raise NormalizerNotFoundError(f"Normalizer not attached for data type: {data_type}")
        return self._normalizers[data_type]

    def remove_normalizer(self, data_type: str) -> None:
        self._normalizers.pop(data_type, None)

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_create_index(self) -> str:
        """
        Returns the endpoint path for index creation requests (e.g. "/my_index")
        """
        pass

    @abstractmethod
    def _get_endpoint_index_document(self, collection: CollectionInterface, document: IndexDocument) -> str:
        """
        Returns the endpoint path a document of the collection is sent to (e.g. "/my_index/_doc/42")
        """
        pass

    @abstractmethod
    def _get_endpoint_search(self) -> str:
        """
        Returns the endpoint path for search requests (e.g. "/my_index/_search")
        """
        pass

    @abstractmethod
    def _get_endpoint_delete_index(self) -> str:
        """
        Returns the endpoint path for index deletion requests (e.g. "/my_index")
        """
        pass

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    @abstractmethod
    def get_create_index_payload(self, indexer: "Indexer", options: dict) -> dict:
        """
        Builds the backend-specific index definition from the indexer's fused schema.
        """
        pass

    @abstractmethod
    def get_document_payload(self, collection: CollectionInterface, document: IndexDocument) -> dict:
        """
        Builds the backend-specific representation of the document. Iterate the
        document to get the normalized field values.
        """
        pass

    @abstractmethod
    def get_search_payload(self, keywords: str, options: dict) -> dict:
        """
        Builds the backend-specific search request.
        """
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def extract_search_result(self, raw_response: dict) -> Any:
        """
        Extracts the result from a raw search response. The format is backend specific.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    def create_index(self, indexer: "Indexer", options: dict | None = None) -> httpx.Response:
        """Creates the index for the fused schema of the indexer's collections."""
        return self.do_request(
            method="PUT",
            json=self.get_create_index_payload(indexer, options or {}),
            endpoint=self._get_endpoint_create_index(),
            raise_on_error=True,
        )

    def index_document(self, collection: CollectionInterface, document: IndexDocument) -> httpx.Response:
        """Sends a document to the backend.

        Raises:
            httpx.HTTPError: If the request fails. Not retried.
        """
        return self.do_request(
            method="POST",
            json=self.get_document_payload(collection, document),
            endpoint=self._get_endpoint_index_document(collection, document),
            raise_on_error=True,
        )

    def search(self, keywords: str, options: dict | None = None) -> Any:
        resp = self.do_request(
            method="POST",
            json=self.get_search_payload(keywords, options or {}),
            endpoint=self._get_endpoint_search(),
            raise_on_error=True,
        )
        return self.extract_search_result(resp.json())

    def delete(self) -> httpx.Response:
        """Deletes the index."""
        return self.do_request(
            method="DELETE",
            endpoint=self._get_endpoint_delete_index(),
            raise_on_error=True,
        )
