"""JSON Schema para validación de la lista de inmuebles extraída."""

from typing import List

import jsonschema

ESTATE_FIELDS = [
    "cadastre", "ownership", "location", "sheet", "parcel", "sub",
    "classification", "class", "size", "cadastralIncome", "registerNumber",
    "additionalData"
]

ESTATE_RECORDS_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Visura catastale - elenco immobili",
    "type": "array",
    "items": {
        "type": "object",
        "required": ESTATE_FIELDS,
        "properties": {name: {"type": "string"} for name in ESTATE_FIELDS},
        "additionalProperties": False
    }
}


def schema_errors(records: List[dict]) -> List[str]:
    """Devuelve los errores de esquema (lista vacía si es válido)."""
    validator = jsonschema.Draft202012Validator(ESTATE_RECORDS_SCHEMA)
    errors = []
    for e in validator.iter_errors(records):
        field = ".".join(str(p) for p in e.path) if e.path else "root"
        errors.append(f"{field}: {e.message}")
    return errors
