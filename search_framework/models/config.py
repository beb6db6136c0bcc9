from typing import Literal

from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Declares a setting a backend reads from the environment.

    Attributes:
        env_key (str): The key without the backend prefix, e.g. "BASE_URL" for "SEARCH_SOLR_BASE_URL".
        val_type (str): How the raw value is parsed, one of "string", "number", "bool" and "list".
        default: Value used when the variable is unset. None makes the setting required.
    """

    env_key: str
    val_type: Literal["string", "number", "bool", "list"] = "string"
    default: str | int | float | bool | list | None = None
