"""Mapeo entre las etiquetas de columna del portal y los campos de EstateRecord."""

from types import MappingProxyType
from typing import Optional, Tuple


FIELD_TO_LABEL = MappingProxyType({
    "cadastre": "Catasto",
    "ownership": "Titolarità",
    "location": "Ubicazione",
    "sheet": "Foglio",
    "parcel": "Particella",
    "sub": "Sub",
    "classification": "Classamento",
    "class_": "Classe",
    "size": "Consistenza",
    "cadastral_income": "Rendita",
    "register_number": "Partita",
    "additional_data": "Altri Dati",
})

LABEL_TO_FIELD = MappingProxyType({label: field for field, label in FIELD_TO_LABEL.items()})


def normalize_label(label: str) -> str:
    """Colapsa espacios (los th del portal traen saltos de línea y nbsp)."""
    return " ".join(label.replace("\xa0", " ").split())


class HeaderMap:
    """Mapa bidireccional etiqueta <-> campo, estático y de solo lectura."""

    @staticmethod
    def label_for(field: str) -> str:
        return FIELD_TO_LABEL[field]

    @staticmethod
    def field_for(label: Optional[str]) -> Optional[str]:
        if not label:
            return None
        return LABEL_TO_FIELD.get(normalize_label(label))

    @staticmethod
    def fields() -> Tuple[str, ...]:
        return tuple(FIELD_TO_LABEL.keys())

    @staticmethod
    def labels() -> Tuple[str, ...]:
        return tuple(FIELD_TO_LABEL.values())
