"""Helpers de extração de campos de payloads e linhas de log.

Separado de normalizer.py para manter SRP. Nenhuma função aqui levanta
exceção por campo ausente ou mal formado: o campo vira None.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_LOG_ORDER_RE = re.compile(r"order[_\s#]?(\d+)", re.IGNORECASE)
_LOG_EMAIL_RE = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")
_LOG_STATUS_RE = re.compile(r"(paid|refunded|failed|cancelled|active|expired)", re.IGNORECASE)


def _to_int(digits: str) -> int | None:
    # int() recusa strings acima do limite de dígitos do interpretador
    try:
        return int(digits)
    except ValueError:
        return None


def parse_leading_int(value: Any) -> int | None:
    """Converte o prefixo numérico de um valor em int.

    "42" -> 42, " 42" -> 42, "42abc" -> 42, "abc" -> None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT_RE.match(str(value))
    if match is None:
        return None
    return _to_int(match.group(1))


def as_mapping(value: Any) -> Mapping[str, Any]:
    """Retorna o valor se for um objeto JSON; caso contrário, mapping vazio."""
    return value if isinstance(value, Mapping) else {}


def first_truthy(attributes: Mapping[str, Any], *keys: str) -> Any:
    """Primeiro valor verdadeiro entre as chaves, na ordem dada."""
    for key in keys:
        value = attributes.get(key)
        if value:
            return value
    return None


def optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def humanize_resource_type(resource_type: Any) -> str:
    """`order` -> `Order`, `subscription_invoices` -> `Subscription Invoices`."""
    words = str(resource_type or "").replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words).strip()


def extract_log_order_id(line: str) -> int | None:
    match = _LOG_ORDER_RE.search(line)
    return _to_int(match.group(1)) if match else None


def extract_log_email(line: str) -> str | None:
    match = _LOG_EMAIL_RE.search(line)
    return match.group(1) if match else None


def extract_log_status(line: str) -> str | None:
    match = _LOG_STATUS_RE.search(line)
    return match.group(1).lower() if match else None
