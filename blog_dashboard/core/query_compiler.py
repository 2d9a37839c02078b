from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Tuple
from urllib.parse import urlencode

from .filter_state import AnyFilters, ExportFilters, filters_class_for

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def encode_pairs(pairs: Iterable[Tuple[str, str]]) -> str:
    """
    Percent-encode (name, value) pairs in the given order, dropping pairs
    whose value is the empty string.
    """
    return urlencode([(k, v) for k, v in pairs if v != ""])


def with_query(path: str, query: str) -> str:
    """Append '?query' to path, or return path unchanged for an empty query."""
    return f"{path}?{query}" if query else path


def compile_query(domain: str, filters: AnyFilters) -> str:
    """
    Compile an export filter set into its canonical query string.

    Fields are emitted in the domain's declared order and only when their
    value is a non-empty string. Values are passed through as-is; range and
    type checks belong to the backend.

    :param domain: "users" or "blogs"
    :param filters: the domain's ExportFilters, or a mapping keyed by wire names
    :return: query string without a leading '?', "" when nothing is set
    """
    cls = filters_class_for(domain)

    if isinstance(filters, ExportFilters):
        if not isinstance(filters, cls):
            raise ValueError(
                f"Filters for domain '{filters.domain}' cannot be compiled for '{domain}'"
            )
        return encode_pairs(filters.items())

    if isinstance(filters, Mapping):
        return encode_pairs(
            (name, filters[name])
            for name in cls.field_names()
            if isinstance(filters.get(name), str)
        )

    raise TypeError(f"Cannot compile filters of type {type(filters).__name__}")


@dataclass(frozen=True)
class ExportRequest:
    """A single export submission: target domain plus its compiled query."""

    domain: str
    query: str = ""

    @classmethod
    def from_filters(cls, domain: str, filters: AnyFilters) -> ExportRequest:
        return cls(domain=domain, query=compile_query(domain, filters))

    @property
    def path(self) -> str:
        return with_query(f"/export/{self.domain}", self.query)

    @property
    def filename(self) -> str:
        return f"{self.domain}.xlsx"

