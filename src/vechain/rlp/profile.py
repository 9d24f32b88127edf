"""
Profiles
^^^^^^^^

A profile is a field name paired with the kind that encodes it.
"""

from dataclasses import dataclass
from typing import Sequence

from .kinds import Array, Kind, Struct


@dataclass(frozen=True)
class Profile:
    """
    Named kind. The name is the key used to look the field up while
    encoding, the key it is stored under after decoding, and the path
    segment reported in errors.
    """

    name: str
    kind: Kind

    @classmethod
    def struct(cls, name: str, fields: Sequence["Profile"]) -> "Profile":
        """
        Profile of a record made of `fields`, in order.
        """
        return cls(name, Struct(tuple(fields)))

    @classmethod
    def array(cls, name: str, item: Kind) -> "Profile":
        """
        Profile of a list of `item`.
        """
        return cls(name, Array(item))

    def extend(self, *fields: "Profile") -> "Profile":
        """
        Copy of a struct profile with `fields` appended at the end.
        """
        if not isinstance(self.kind, Struct):
            raise TypeError(f"profile `{self.name}` is not a struct")
        return Profile(self.name, Struct(self.kind.fields + fields))

    @property
    def field_names(self) -> Sequence[str]:
        """
        Names of the fields of a struct profile, in wire order.
        """
        if not isinstance(self.kind, Struct):
            raise TypeError(f"profile `{self.name}` is not a struct")
        return tuple(field.name for field in self.kind.fields)
