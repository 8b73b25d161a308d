"""Extracción de la tabla de inmuebles a EstateRecord."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from catasto.errors import StructuralError
from catasto.header_map import HeaderMap, normalize_label
from catasto.json_schema import schema_errors
from catasto.models import EstateRecord, records_to_dicts

logger = logging.getLogger(__name__)


# Devuelve el texto de los th y de los td de cada fila del tbody, o null si no existe la tabla
TABLE_SCRIPT = """
(selector) => {
    const table = document.querySelector(selector);
    if (!table) {
        return null;
    }
    const headers = Array.from(table.querySelectorAll('th')).map((th) => th.innerText.trim());
    const rows = Array.from(table.querySelectorAll('tbody tr')).map((tr) =>
        Array.from(tr.querySelectorAll('td')).map((td) => td.innerText.trim())
    );
    return { headers, rows };
}
"""


class TableExtractor:
    """Convierte la tabla renderizada del portal en registros canónicos."""

    def __init__(self, table_selector: str):
        self.table_selector = table_selector

    async def extract(self, page) -> List[EstateRecord]:
        """
        Lee la tabla de la página y la mapea.

        Args:
            page: PortalPage posicionada en el listado de inmuebles

        Returns:
            Lista de EstateRecord en el orden de las filas
        """
        data = await page.evaluate(TABLE_SCRIPT, self.table_selector)
        if not data:
            raise StructuralError(f"Results table not found ({self.table_selector})")

        records = self.map_rows(data.get("headers") or [], data.get("rows") or [])

        errors = schema_errors(records_to_dicts(records))
        if errors:
            raise StructuralError(f"Extracted records do not match schema: {errors[0]}")

        logger.info(f"📊 {len(records)} inmuebles extraídos")
        return records

    @staticmethod
    def map_rows(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> List[EstateRecord]:
        """
        Asigna cada celda al campo que indica la cabecera de su columna.

        Las columnas con etiqueta desconocida se ignoran. La primera fila se
        descarta cuando repite la cabecera (el portal la emite dentro del tbody).
        """
        fields: List[Optional[str]] = [HeaderMap.field_for(h) for h in headers]

        body = list(rows)
        if body and _is_header_row(body[0], headers):
            body = body[1:]

        records = []
        for row in body:
            values: Dict[str, str] = {}
            for index, cell in enumerate(row):
                if index >= len(fields) or fields[index] is None:
                    continue
                values[fields[index]] = str(cell if cell is not None else "").strip()
            records.append(EstateRecord(**values))

        return records


def _is_header_row(row: Sequence[Any], headers: Sequence[str]) -> bool:
    if not row:
        return True
    cells = [normalize_label(str(c or "")) for c in row]
    return cells == [normalize_label(h) for h in headers]
