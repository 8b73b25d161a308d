"""
Cliente de visuras catastales del portal SISTER (Agenzia delle Entrate).

Componentes:
- session: Controlador de sesión (navegador, login, logout, limpieza)
- navigation: Pasos de navegación con reintento acotado
- extractor: Extracción de la tabla de inmuebles
- models: Modelos de datos
"""

__version__ = "1.0.0"

from catasto.errors import (
    AuthenticationError, CatastoError, CleanupError, JurisdictionNotFoundError,
    NavigationError, StructuralError
)
from catasto.extractor import TableExtractor
from catasto.header_map import HeaderMap
from catasto.models import Credentials, EstateRecord, SearchCriteria, SearchOutcome, SubjectKind
from catasto.navigation import SisterNavigator, match_province_option
from catasto.session import SisterSession, get_real_estate_data

__all__ = [
    "AuthenticationError",
    "CatastoError",
    "CleanupError",
    "Credentials",
    "EstateRecord",
    "HeaderMap",
    "JurisdictionNotFoundError",
    "NavigationError",
    "SearchCriteria",
    "SearchOutcome",
    "SisterNavigator",
    "SisterSession",
    "StructuralError",
    "SubjectKind",
    "TableExtractor",
    "get_real_estate_data",
    "match_province_option",
]
