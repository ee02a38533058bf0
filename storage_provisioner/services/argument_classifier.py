from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence

from storage_provisioner.errors import ArityError


@dataclass(frozen=True)
class _KindLayout:
    identity_roles: tuple[str, ...]
    optional_roles: tuple[str, ...]


class ResourceKind(str, Enum):
    VOLUME = "volume"
    BUCKET = "bucket"

    @property
    def layout(self) -> _KindLayout:
        return _LAYOUTS[self]

    @property
    def min_arguments(self) -> int:
        return len(self.layout.identity_roles)

    @property
    def max_arguments(self) -> int:
        return len(self.layout.identity_roles) + len(self.layout.optional_roles)


# Optional roles are listed in ladder order: supplying role k means 1..k-1 were supplied too.
_LAYOUTS: dict[ResourceKind, _KindLayout] = {
    ResourceKind.VOLUME: _KindLayout(
        identity_roles=("name",),
        optional_roles=("quota", "owner", "acl"),
    ),
    ResourceKind.BUCKET: _KindLayout(
        identity_roles=("volume_name", "name"),
        optional_roles=("storage_type", "versioning", "acl"),
    ),
}


@dataclass(frozen=True)
class ClassifiedArguments:
    kind: ResourceKind
    identity: Mapping[str, str]
    options: Mapping[str, Optional[str]] = field(default_factory=dict)

    @property
    def supplied(self) -> dict[str, str]:
        return {role: value for role, value in self.options.items() if value is not None}


def classify_arguments(tokens: Sequence[str], kind: ResourceKind) -> ClassifiedArguments:
    """Assign each positional token its role for `kind`.

    Only the token count is checked here; values are validated by the resolver.
    Every optional role past the supplied tokens maps to None.
    """

    count = len(tokens)
    if not kind.min_arguments <= count <= kind.max_arguments:
        raise ArityError(
            kind=kind.value,
            count=count,
            minimum=kind.min_arguments,
            maximum=kind.max_arguments,
        )

    layout = kind.layout
    identity = dict(zip(layout.identity_roles, tokens))
    rest = list(tokens[len(layout.identity_roles):])
    options: dict[str, Optional[str]] = {
        role: rest[index] if index < len(rest) else None
        for index, role in enumerate(layout.optional_roles)
    }
    return ClassifiedArguments(kind=kind, identity=identity, options=options)
