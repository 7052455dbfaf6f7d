"""
Sistema ISP - Helpers de parseo de texto CLI
Piezas reutilizables por los vendors: búsqueda de la fila de datos en
tablas con separador de guiones, líneas "clave : valor" y valores
numéricos etiquetados (ej: "received power(DBm): -22.07").
"""
import re
from dataclasses import dataclass
from typing import Optional, List, Tuple, Dict, Any, Callable, Iterable, Sequence

from olt_monitor.services.olt.normalizers import to_float

# Línea separadora: una corrida de guiones ("-------- ------", "...----")
SEPARATOR = re.compile(r"-{4,}")

# Prompt del CLI al final de la salida (ej: "OLT#", "OLT(config)#", "OLT>")
PROMPT = re.compile(r"^\S+[#>]\s*$")

# Número decimal con signo
NUMBER = r"([-+]?\d+(?:\.\d+)?)"

# Fin de línea con \r sueltos (telnet): "\r\n", "\r\r\n", "\n\r"
LINE_BREAK = re.compile(r"\r*\n\r*|\r")


@dataclass(frozen=True)
class TableRow:
    """Fila de datos de una tabla; puede venir partida en dos líneas."""
    primary: str
    continuation: Optional[str] = None

    @property
    def merged(self) -> str:
        if self.continuation:
            return f"{self.primary.strip()} {self.continuation.strip()}"
        return self.primary.strip()


def tokenize(line: Optional[str]) -> List[str]:
    """Divide una línea por corridas de espacios."""
    return (line or "").split()


def split_lines(raw: Optional[str]) -> List[str]:
    """
    Divide la salida en líneas. Los retornos de carro que la sesión telnet
    deja junto a cada salto no generan líneas vacías extra; una línea en
    blanco real se conserva.
    """
    return LINE_BREAK.split(raw or "")


def token_at(tokens: Sequence[str], index: int) -> Optional[str]:
    """Token en la posición indicada o None si no existe."""
    if 0 <= index < len(tokens):
        return tokens[index]
    return None


def _is_continuation(line: str, prefix: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return False
    if stripped.upper().startswith(prefix.upper()):
        return False
    if SEPARATOR.search(stripped) or PROMPT.match(stripped):
        return False
    return True


def find_table_row(raw: str, prefix: str) -> Optional[TableRow]:
    """
    Busca la primera fila de datos de una tabla CLI.

    1. Se ignoran líneas en blanco hasta ver el separador de guiones.
    2. La primera línea posterior que inicia con `prefix` es la fila.
    3. Si la línea inmediata siguiente no está vacía y no inicia con
       `prefix`, es la continuación (formato partido en dos líneas).
    """
    lines = split_lines(raw)
    found_separator = False

    for i, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            continue

        if found_separator and stripped.upper().startswith(prefix.upper()):
            continuation = None
            if i + 1 < len(lines) and _is_continuation(lines[i + 1], prefix):
                continuation = lines[i + 1]
            return TableRow(primary=line, continuation=continuation)

        if SEPARATOR.search(stripped):
            found_separator = True

    return None


def first_match(strategies: Iterable[Callable[..., Optional[Any]]], *args) -> Tuple[Optional[str], Optional[Any]]:
    """
    Ejecuta estrategias en orden y regresa (nombre, resultado) de la primera
    que no regrese None.
    """
    for strategy in strategies:
        result = strategy(*args)
        if result is not None:
            return strategy.__name__, result
    return None, None


def parse_key_values(raw: str) -> List[Tuple[str, str]]:
    """
    Extrae pares de líneas "Clave : valor".
    La clave se normaliza a minúsculas con espacios simples; el valor
    conserva su texto (una MAC con ":" no se parte porque solo se corta
    en el primer separador).
    """
    pairs: List[Tuple[str, str]] = []
    for line in split_lines(raw):
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = re.sub(r"\s+", " ", key).strip().lower()
        value = value.strip()
        if key:
            pairs.append((key, value))
    return pairs


def match_labeled_numbers(raw: str, patterns: Dict[str, re.Pattern]) -> Dict[str, float]:
    """Aplica cada patrón etiquetado y regresa solo los que encontraron número."""
    values: Dict[str, float] = {}
    for name, pattern in patterns.items():
        match = pattern.search(raw or "")
        value = to_float(match.group(1)) if match else None
        if value is not None:
            values[name] = value
    return values


def labeled_number(label: str) -> re.Pattern:
    """Patrón "<label>(unidad): <número>" sin distinguir mayúsculas."""
    return re.compile(label + r"[^:\n]*:\s*" + NUMBER, re.IGNORECASE)
