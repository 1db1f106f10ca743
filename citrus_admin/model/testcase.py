"""
UI-facing test case models.

Test cases are grouped into packages for listing; a TestDetail adds the
parsed actions of one test, each as a TestAction holding name/value
properties with optional enumerated options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from citrus_admin.exceptions import InvalidTestTypeError


class TestType(Enum):
    """How a test case is defined."""

    __test__ = False

    XML = "xml"
    JAVA = "java"

    @classmethod
    def parse(cls, value: str) -> "TestType":
        """
        Resolve a test type name, ignoring case.

        Raises:
            InvalidTestTypeError: If the value does not name a test type.
        """
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise InvalidTestTypeError(value, [t.name for t in cls]) from None


@dataclass
class Property:
    """A single named value shown for a test action."""

    id: str
    name: str
    value: Optional[str] = None
    options: List[str] = field(default_factory=list)

    def with_options(self, *options: str) -> "Property":
        self.options = list(options)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "value": self.value,
            "options": self.options,
        }


@dataclass
class TestAction:
    """
    UI representation of a test action.

    Attributes:
        type: Action type key (e.g. "send").
        model_class: Name of the serializable definition type backing the action.
        properties: Ordered action properties.
    """

    __test__ = False

    type: str
    model_class: str
    properties: List[Property] = field(default_factory=list)

    def add(self, prop: Property) -> "TestAction":
        self.properties.append(prop)
        return self

    def get_property(self, prop_id: str) -> Optional[Property]:
        return next((p for p in self.properties if p.id == prop_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "modelType": self.model_class,
            "properties": [p.to_dict() for p in self.properties],
        }


@dataclass
class TestCase:
    """A test case entry within a package listing."""

    __test__ = False

    name: str
    package_name: str
    type: TestType
    class_name: str = ""
    method_name: str = ""
    file: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "packageName": self.package_name,
            "type": self.type.name,
            "className": self.class_name,
            "methodName": self.method_name,
            "file": self.file,
        }


@dataclass
class TestPackage:
    """Test cases grouped by source package."""

    __test__ = False

    name: str
    tests: List[TestCase] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "tests": [t.to_dict() for t in self.tests]}


@dataclass
class TestDetail:
    """Full view of a single test case."""

    __test__ = False

    name: str
    package_name: str
    type: TestType
    file: str = ""
    author: str = ""
    description: str = ""
    last_modified: Optional[float] = None
    actions: List[TestAction] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "packageName": self.package_name,
            "type": self.type.name,
            "file": self.file,
            "author": self.author,
            "description": self.description,
            "lastModified": self.last_modified,
            "actions": [a.to_dict() for a in self.actions],
        }
