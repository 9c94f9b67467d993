"""json-field-tree - build nested JSON documents from a tree of typed fields."""

from __future__ import annotations

import logging

from json_field_tree.api import is_valid, synthesize, to_json
from json_field_tree.errors import ErrorReason
from json_field_tree.generator import JSONGenerator
from json_field_tree.result import SynthesisResult
from json_field_tree.synthesis.config import SynthesisConfig
from json_field_tree.tree.nodes import Field, FieldType

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "ErrorReason",
    "Field",
    "FieldType",
    "JSONGenerator",
    "SynthesisConfig",
    "SynthesisResult",
    "is_valid",
    "synthesize",
    "to_json",
]
