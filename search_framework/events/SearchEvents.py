class SearchEvents:
    """Names of all events dispatched by the indexing pipeline."""

    # Collector
    COLLECTOR_PRE_QUEUE = "search.collector.pre_queue"
    COLLECTOR_POST_QUEUE = "search.collector.post_queue"
    COLLECTION_PRE_QUEUE = "search.collection.pre_queue"
    COLLECTION_POST_QUEUE = "search.collection.post_queue"

    # Schema
    SCHEMA_LOAD = "search.schema.load"
    SCHEMA_ALTER = "search.schema.alter"

    # Indexer
    SEARCH_ENGINE_PRE_INDEX = "search.engine.pre_index"
    SEARCH_ENGINE_POST_INDEX = "search.engine.post_index"
    DOCUMENT_PRE_INDEX = "search.document.pre_index"
    DOCUMENT_POST_INDEX = "search.document.post_index"

    # Document fields
    FIELD_ENRICH = "search.field.enrich"
    FIELD_NORMALIZE = "search.field.normalize"
