from .extract import (
    extract_fields,
    extract_number_field,
    extract_object_blocks,
    extract_string_array_field,
    extract_string_field,
    parse_block,
)
from .json_repair import extract_embedded_json, repair_truncated_json, strip_code_fences
from .pipeline import Recovered, recover_json

__all__ = [
    "strip_code_fences",
    "extract_embedded_json",
    "repair_truncated_json",
    "extract_fields",
    "extract_string_field",
    "extract_number_field",
    "extract_string_array_field",
    "extract_object_blocks",
    "parse_block",
    "Recovered",
    "recover_json",
]
