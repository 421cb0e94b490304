from .validation import load_schema, validate_payload

__all__ = ["load_schema", "validate_payload"]
