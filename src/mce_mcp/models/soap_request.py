"""
SOAP request models.

Tool arguments arrive as loose JSON (``objects``, ``filter``, ``properties``).
``SoapRequestSpec.from_arguments`` turns them into typed values:

- Create on ``DataExtension`` -> ``DataExtensionObject`` with typed fields
- every other action/object type -> ``GenericObject`` (ordered property bag)

Parsing is lenient: missing or malformed pieces become empty values instead
of errors, so the envelope builder can still render something. Only the
action name is checked.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..errors import UnsupportedActionError

DATA_EXTENSION = "DataExtension"


class SoapAction(str, Enum):
    CREATE = "Create"
    RETRIEVE = "Retrieve"
    UPDATE = "Update"
    DELETE = "Delete"
    PERFORM = "Perform"
    CONFIGURE = "Configure"


def _as_mapping(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class DataExtensionField:
    name: str = ""
    field_type: str = "Text"
    max_length: Optional[Any] = None
    is_primary_key: bool = False
    is_required: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "DataExtensionField":
        data = _as_mapping(data)
        return cls(
            name=_as_text(data.get("name")),
            field_type=_as_text(data.get("fieldType")) or "Text",
            max_length=data.get("maxLength") or None,
            is_primary_key=bool(data.get("isPrimaryKey")),
            is_required=bool(data.get("isRequired")),
        )


@dataclass(frozen=True)
class DataExtensionObject:
    """A Data Extension definition for the Create action."""

    name: str = ""
    customer_key: str = ""
    description: str = ""
    is_sendable: bool = False
    sendable_data_extension_field: str = ""
    sendable_subscriber_field: str = "_SubscriberKey"
    fields: Tuple[DataExtensionField, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "DataExtensionObject":
        data = _as_mapping(data)
        name = _as_text(data.get("name"))
        raw_fields = data.get("fields")
        if not isinstance(raw_fields, list):
            raw_fields = []
        return cls(
            name=name,
            customer_key=_as_text(data.get("customerKey")) or name,
            description=_as_text(data.get("description")),
            is_sendable=bool(data.get("isSendable")),
            sendable_data_extension_field=_as_text(data.get("sendableDataExtensionField")),
            sendable_subscriber_field=(
                _as_text(data.get("sendableSubscriberField")) or "_SubscriberKey"
            ),
            fields=tuple(DataExtensionField.from_dict(f) for f in raw_fields),
        )


@dataclass(frozen=True)
class GenericObject:
    """Ordered property bag serialized as flat XML elements.

    Nested values are kept here but dropped by the serializer.
    """

    properties: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "GenericObject":
        return cls(properties=tuple(_as_mapping(data).items()))

    def items(self):
        return iter(self.properties)


SoapObject = Union[DataExtensionObject, GenericObject]


@dataclass(frozen=True)
class SimpleFilter:
    property: str = ""
    operator: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "SimpleFilter":
        data = _as_mapping(data)
        return cls(
            property=_as_text(data.get("property")),
            operator=_as_text(data.get("operator")),
            value=_as_text(data.get("value")),
        )


@dataclass(frozen=True)
class SoapRequestSpec:
    action: SoapAction
    object_type: str
    objects: Tuple[SoapObject, ...] = ()
    properties: Tuple[str, ...] = ()
    filter: Optional[SimpleFilter] = None
    options: Mapping[str, Any] = field(default_factory=dict)
    business_unit_id: Optional[str] = None

    @property
    def first_object(self) -> Optional[SoapObject]:
        return self.objects[0] if self.objects else None

    @property
    def is_data_extension_create(self) -> bool:
        return self.action is SoapAction.CREATE and self.object_type == DATA_EXTENSION

    @classmethod
    def from_arguments(
        cls,
        action: str,
        object_type: str,
        properties: Optional[List[str]] = None,
        filter: Optional[Dict[str, Any]] = None,
        objects: Optional[List[Dict[str, Any]]] = None,
        options: Optional[Dict[str, Any]] = None,
        business_unit_id: Optional[str] = None,
    ) -> "SoapRequestSpec":
        """Build a spec from raw tool arguments.

        Raises:
            UnsupportedActionError: action is not a known SOAP action name
        """
        try:
            soap_action = SoapAction(action)
        except ValueError:
            raise UnsupportedActionError(action)

        object_type = _as_text(object_type)
        raw_objects = objects if isinstance(objects, list) else []
        if soap_action is SoapAction.CREATE and object_type == DATA_EXTENSION:
            parsed = tuple(DataExtensionObject.from_dict(o) for o in raw_objects)
        else:
            parsed = tuple(GenericObject.from_dict(o) for o in raw_objects)

        raw_properties = properties if isinstance(properties, list) else []

        return cls(
            action=soap_action,
            object_type=object_type,
            objects=parsed,
            properties=tuple(_as_text(p) for p in raw_properties),
            filter=SimpleFilter.from_dict(filter) if filter else None,
            options=_as_mapping(options),
            business_unit_id=business_unit_id or None,
        )
