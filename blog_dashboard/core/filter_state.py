from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Type, TypeVar, Union

F = TypeVar("F", bound="ExportFilters")

GROUP_BY_DAY = "day"
GROUP_BY_MONTH = "month"
GROUP_BY_CHOICES = (GROUP_BY_DAY, GROUP_BY_MONTH)


def _to_snake(name: str) -> str:
    out = []
    for ch in name:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def normalise_value(value: Any) -> str:
    """
    Convert a raw widget value into the stored string form.

    None (a cleared input) becomes "", strings pass through untouched and any
    other scalar (numeric inputs hand back int/float) becomes str(value).
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class ExportFilters:
    """
    Base class for the per-domain export filter sets.

    Every field is a free-form string and "" is the only "unset" value.
    The dataclass field order is the declared order used when compiling a
    query, so subclasses must list their fields in wire order.
    """

    domain = ""

    @classmethod
    def field_names(cls) -> List[str]:
        """Wire (camelCase) names in declared order."""
        return [_to_camel(f.name) for f in fields(cls)]

    @classmethod
    def empty(cls: Type[F]) -> F:
        return cls()

    @classmethod
    def from_dict(cls: Type[F], data: Mapping[str, Any] | None) -> F:
        data = data or {}
        known = set(cls.field_names())
        unknown = [k for k in data if k not in known]
        if unknown:
            raise ValueError(f"Unknown {cls.domain} filter field(s): {', '.join(sorted(unknown))}")
        return cls(**{_to_snake(k): normalise_value(v) for k, v in data.items()})

    def to_dict(self) -> Dict[str, str]:
        return {_to_camel(k): v for k, v in asdict(self).items()}

    def items(self) -> List[tuple[str, str]]:
        return [(_to_camel(f.name), getattr(self, f.name)) for f in fields(self)]

    def get(self, name: str) -> str:
        return getattr(self, self._attr(name))

    def with_value(self: F, name: str, value: Any) -> F:
        """Return a copy with one field replaced (accepts wire or attribute names)."""
        return replace(self, **{self._attr(name): normalise_value(value)})

    def cleared(self: F) -> F:
        return type(self)()

    def is_empty(self) -> bool:
        return all(v == "" for _, v in self.items())

    @classmethod
    def _attr(cls, name: str) -> str:
        attr = _to_snake(name)
        if attr not in {f.name for f in fields(cls)}:
            raise ValueError(f"Unknown {cls.domain} filter field: {name}")
        return attr


@dataclass(frozen=True)
class UserFilters(ExportFilters):
    """
    Filters for the users export.

    - is_active: "" (any), "true" or "false"
    - count: positive integer limit, kept as a string
    """

    domain = "users"

    role: str = ""
    is_active: str = ""
    name: str = ""
    email: str = ""
    start_date: str = ""
    end_date: str = ""
    count: str = ""


@dataclass(frozen=True)
class BlogFilters(ExportFilters):
    """
    Filters for the blogs export.

    - tags: comma-joined list ("tag1,tag2")
    - views / likes / comments_count: minimum thresholds
    - count: positive integer limit
    """

    domain = "blogs"

    title: str = ""
    content: str = ""
    author_id: str = ""
    category: str = ""
    tags: str = ""
    status: str = ""
    views: str = ""
    likes: str = ""
    comments_count: str = ""
    start_date: str = ""
    end_date: str = ""
    count: str = ""


FILTERS_BY_DOMAIN: Dict[str, Type[ExportFilters]] = {
    UserFilters.domain: UserFilters,
    BlogFilters.domain: BlogFilters,
}

def filters_class_for(domain: str) -> Type[ExportFilters]:
    try:
        return FILTERS_BY_DOMAIN[domain]
    except KeyError:
        raise ValueError(f"Unknown export domain '{domain}'")


def empty_filters(domain: str) -> ExportFilters:
    return filters_class_for(domain).empty()


@dataclass(frozen=True)
class DashboardFilters:
    """
    Dashboard-level filters. start_date/end_date bound the users-growth
    series, group_by selects the blogs-created granularity.
    """

    start_date: str = ""
    end_date: str = ""
    group_by: str = GROUP_BY_DAY

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_date", normalise_value(self.start_date))
        object.__setattr__(self, "end_date", normalise_value(self.end_date))
        if self.group_by not in GROUP_BY_CHOICES:
            object.__setattr__(self, "group_by", GROUP_BY_DAY)

    def to_dict(self) -> Dict[str, str]:
        return {"startDate": self.start_date, "endDate": self.end_date, "groupBy": self.group_by}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> DashboardFilters:
        data = data or {}
        return cls(
            start_date=data.get("startDate", ""),
            end_date=data.get("endDate", ""),
            group_by=data.get("groupBy") or GROUP_BY_DAY,
        )


AnyFilters = Union[ExportFilters, Mapping[str, Any]]
