"""Modelos de datos para la consulta catastal."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class SubjectKind(str, Enum):
    """Tipo de sujeto consultado: persona física o persona jurídica."""
    INDIVIDUAL = "individual"
    COMPANY = "company"


class Credentials(BaseModel):
    """Credenciales SISTER."""
    model_config = ConfigDict(frozen=True)

    username: str
    password: SecretStr


class SearchCriteria(BaseModel):
    """Parámetros inmutables de una consulta."""
    model_config = ConfigDict(frozen=True)

    subject_id: str = Field(..., description="Codice fiscale o partita IVA")
    province: str = Field(..., description="Sigla de la provincia (ej: 'RM')")
    subject_kind: SubjectKind = SubjectKind.INDIVIDUAL
    credentials: Credentials

    @field_validator("subject_id", "province")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("province")
    @classmethod
    def _upper_province(cls, value: str) -> str:
        return value.upper()


class EstateRecord(BaseModel):
    """
    Un inmueble de la tabla de resultados.

    Los 12 campos existen siempre; una celda ausente queda como string vacío.
    Serializado con by_alias=True usa los nombres canónicos del servicio
    (class, cadastralIncome, registerNumber, additionalData).
    """
    model_config = ConfigDict(populate_by_name=True)

    cadastre: str = ""
    ownership: str = ""
    location: str = ""
    sheet: str = ""
    parcel: str = ""
    sub: str = ""
    classification: str = ""
    class_: str = Field("", alias="class")
    size: str = ""
    cadastral_income: str = Field("", alias="cadastralIncome")
    register_number: str = Field("", alias="registerNumber")
    additional_data: str = Field("", alias="additionalData")


class SearchOutcome(BaseModel):
    """Resultado de la búsqueda del sujeto."""
    found: bool
    matches: str = ""


def records_to_dicts(records: List[EstateRecord]) -> List[dict]:
    """Serializa registros con los nombres canónicos."""
    return [record.model_dump(by_alias=True) for record in records]
