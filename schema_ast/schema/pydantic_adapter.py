"""
Pydantic model support.

Converts Pydantic ``BaseModel`` classes into JSON Schema documents in the
layout the parser expects: nested models under ``definitions`` and refs of
the form ``#/definitions/<Model>``.
"""

import logging
from typing import Any, Dict

from pydantic import BaseModel

logger = logging.getLogger(__name__)

REF_TEMPLATE = "#/definitions/{model}"


def is_pydantic_model(obj: Any) -> bool:
    """Check whether ``obj`` is a Pydantic model class."""
    return isinstance(obj, type) and issubclass(obj, BaseModel)


def pydantic_to_schema(model: type) -> Dict[str, Any]:
    """
    Convert a Pydantic model class into a JSON Schema dict.

    Args:
        model: Pydantic BaseModel subclass

    Returns:
        Dict: JSON Schema with nested models under ``definitions``

    Raises:
        ValueError: If ``model`` is not a Pydantic model class

    Example:
        ```python
        class Address(BaseModel):
            city: str

        class User(BaseModel):
            name: str
            address: Address

        schema = pydantic_to_schema(User)
        schema["properties"]["address"]   # {"$ref": "#/definitions/Address"}
        ```
    """
    if not is_pydantic_model(model):
        raise ValueError(f"Expected a Pydantic model class, got {model!r}")

    schema = model.model_json_schema(ref_template=REF_TEMPLATE)
    if "$defs" in schema:
        schema["definitions"] = schema.pop("$defs")

    logger.debug(f"Converted {model.__name__} to JSON Schema")
    return schema
