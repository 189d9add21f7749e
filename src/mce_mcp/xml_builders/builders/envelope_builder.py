"""
SOAP envelope builder for the Marketing Cloud partner API.

Templates (structure) come from ``templates/``; the classes here decide
which elements appear. One body builder per supported action:

- Create (DataExtension gets a dedicated layout, other types are generic)
- Retrieve
- Update
- Delete

Perform and Configure are accepted by the tool schema but not built.
"""

from typing import Dict

from ...errors import UnsupportedActionError
from ...models.soap_request import (
    DataExtensionField,
    DataExtensionObject,
    GenericObject,
    SoapAction,
    SoapRequestSpec,
)
from ..templates import (
    DATA_EXTENSION_FIELD_TEMPLATE,
    DATA_EXTENSION_OBJECT_TEMPLATE,
    OBJECTS_REQUEST_TEMPLATE,
    PARTNER_API_NS,
    RETRIEVE_REQUEST_TEMPLATE,
    SENDABLE_FIELDS_TEMPLATE,
    SIMPLE_FILTER_TEMPLATE,
    SOAP_ENVELOPE_WRAPPER,
)
from .base_builder import BaseXMLBuilder, escape_xml, serialize_properties


def _generic_properties(obj) -> str:
    if isinstance(obj, GenericObject):
        return serialize_properties(obj.properties)
    # Update/Delete never carry DataExtensionObject, but stay lenient.
    return ""


class ObjectsRequestBuilder(BaseXMLBuilder):
    """Create/Update/Delete body: first object as flat properties."""

    request_element = ""

    def build(self, spec: SoapRequestSpec) -> str:
        return OBJECTS_REQUEST_TEMPLATE.format(
            request_element=self.request_element,
            namespace=PARTNER_API_NS,
            object_type=self._escape_xml(spec.object_type),
            properties=_generic_properties(spec.first_object),
        )


class CreateRequestBuilder(ObjectsRequestBuilder):
    request_element = "CreateRequest"

    def build(self, spec: SoapRequestSpec) -> str:
        if spec.is_data_extension_create:
            return DataExtensionCreateBuilder().build(spec)
        return super().build(spec)


class UpdateRequestBuilder(ObjectsRequestBuilder):
    request_element = "UpdateRequest"


class DeleteRequestBuilder(ObjectsRequestBuilder):
    request_element = "DeleteRequest"


class DataExtensionCreateBuilder(BaseXMLBuilder):
    """
    Create body for a Data Extension.

    Optional elements are only emitted when set: Description, IsSendable,
    the sendable field pair, and per field MaxLength/IsPrimaryKey/IsRequired.
    """

    def build(self, spec: SoapRequestSpec) -> str:
        de = spec.first_object
        if not isinstance(de, DataExtensionObject):
            de = DataExtensionObject()

        return OBJECTS_REQUEST_TEMPLATE.format(
            request_element="CreateRequest",
            namespace=PARTNER_API_NS,
            object_type="DataExtension",
            properties=self.build_object(de),
        )

    def build_object(self, de: DataExtensionObject) -> str:
        description = ""
        if de.description:
            description = f"<Description>{self._escape_xml(de.description)}</Description>"

        is_sendable = "<IsSendable>true</IsSendable>" if de.is_sendable else ""

        sendable_fields = ""
        if de.is_sendable and de.sendable_data_extension_field:
            sendable_fields = SENDABLE_FIELDS_TEMPLATE.format(
                data_extension_field=self._escape_xml(de.sendable_data_extension_field),
                subscriber_field=self._escape_xml(de.sendable_subscriber_field),
            )

        return DATA_EXTENSION_OBJECT_TEMPLATE.format(
            customer_key=self._escape_xml(de.customer_key),
            name=self._escape_xml(de.name),
            description=description,
            is_sendable=is_sendable,
            sendable_fields=sendable_fields,
            fields="".join(self.build_field(f) for f in de.fields),
        )

    def build_field(self, field: DataExtensionField) -> str:
        max_length = ""
        if field.max_length:
            max_length = f"<MaxLength>{self._escape_xml(field.max_length)}</MaxLength>"

        return DATA_EXTENSION_FIELD_TEMPLATE.format(
            name=self._escape_xml(field.name),
            field_type=self._escape_xml(field.field_type or "Text"),
            max_length=max_length,
            is_primary_key="<IsPrimaryKey>true</IsPrimaryKey>" if field.is_primary_key else "",
            is_required="<IsRequired>true</IsRequired>" if field.is_required else "",
        )


class RetrieveRequestBuilder(BaseXMLBuilder):
    """Retrieve body: ObjectType, Properties list and optional SimpleFilterPart."""

    def build(self, spec: SoapRequestSpec) -> str:
        properties = "".join(
            f"<Properties>{self._escape_xml(p)}</Properties>" for p in spec.properties
        )

        filter_xml = ""
        if spec.filter is not None:
            filter_xml = SIMPLE_FILTER_TEMPLATE.format(
                property=self._escape_xml(spec.filter.property),
                operator=self._escape_xml(spec.filter.operator),
                value=self._escape_xml(spec.filter.value),
            )

        return RETRIEVE_REQUEST_TEMPLATE.format(
            namespace=PARTNER_API_NS,
            object_type=self._escape_xml(spec.object_type),
            properties=properties,
            filter=filter_xml,
        )


class EnvelopeBuilder:
    """
    Wrap an action body in the partner API envelope.

    Example:
        >>> builder = EnvelopeBuilder(subdomain="mc123")
        >>> spec = SoapRequestSpec.from_arguments("Retrieve", "DataExtension",
        ...                                       properties=["Name"])
        >>> xml = builder.build_envelope(spec, access_token="abc")
    """

    body_builders: Dict[SoapAction, BaseXMLBuilder] = {
        SoapAction.CREATE: CreateRequestBuilder(),
        SoapAction.RETRIEVE: RetrieveRequestBuilder(),
        SoapAction.UPDATE: UpdateRequestBuilder(),
        SoapAction.DELETE: DeleteRequestBuilder(),
    }

    def __init__(self, subdomain: str = ""):
        self.subdomain = subdomain or ""

    @property
    def endpoint(self) -> str:
        return f"https://{self.subdomain}.soap.marketingcloudapis.com/Service.asmx"

    def build_body(self, spec: SoapRequestSpec) -> str:
        builder = self.body_builders.get(spec.action)
        if builder is None:
            raise UnsupportedActionError(getattr(spec.action, "value", spec.action))
        return builder.build(spec)

    def build_envelope(self, spec: SoapRequestSpec, access_token: str) -> str:
        """
        Build the complete SOAP envelope.

        Raises:
            UnsupportedActionError: action is Perform, Configure or unknown
        """
        body = self.build_body(spec)
        return SOAP_ENVELOPE_WRAPPER.format(
            action=spec.action.value,
            endpoint=escape_xml(self.endpoint),
            access_token=escape_xml(access_token),
            body=body,
        )
