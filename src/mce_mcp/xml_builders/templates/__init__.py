"""
Marketing Cloud SOAP XML Templates.

Structure lives here as string constants; the builders in ``builders/`` fill
them in. Namespaces and header element names must match what the partner
API expects.
"""

PARTNER_API_NS = "http://exacttarget.com/wsdl/partnerAPI"

# SOAP 1.2 envelope with WS-Addressing header and fueloauth token
SOAP_ENVELOPE_WRAPPER = """<?xml version="1.0" encoding="UTF-8"?>
<s:Envelope xmlns:s="http://www.w3.org/2003/05/soap-envelope" xmlns:a="http://schemas.xmlsoap.org/ws/2004/08/addressing" xmlns:u="http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-utility-1.0.xsd">
  <s:Header>
    <a:Action s:mustUnderstand="1">{action}</a:Action>
    <a:To s:mustUnderstand="1">{endpoint}</a:To>
    <fueloauth xmlns="http://exacttarget.com">{access_token}</fueloauth>
  </s:Header>
  <s:Body xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xmlns:xsd="http://www.w3.org/2001/XMLSchema">
    {body}
  </s:Body>
</s:Envelope>"""

# Create / Update / Delete share one shape
OBJECTS_REQUEST_TEMPLATE = """
    <{request_element} xmlns="{namespace}">
      <Objects xsi:type="{object_type}">
        {properties}
      </Objects>
    </{request_element}>"""

RETRIEVE_REQUEST_TEMPLATE = """
    <RetrieveRequestMsg xmlns="{namespace}">
      <RetrieveRequest>
        <ObjectType>{object_type}</ObjectType>
        {properties}
        {filter}
      </RetrieveRequest>
    </RetrieveRequestMsg>"""

SIMPLE_FILTER_TEMPLATE = """
      <Filter xsi:type="SimpleFilterPart">
        <Property>{property}</Property>
        <SimpleOperator>{operator}</SimpleOperator>
        <Value>{value}</Value>
      </Filter>"""

DATA_EXTENSION_FIELD_TEMPLATE = """
      <Fields>
        <Field>
          <Name>{name}</Name>
          <FieldType>{field_type}</FieldType>
          {max_length}
          {is_primary_key}
          {is_required}
        </Field>
      </Fields>"""

SENDABLE_FIELDS_TEMPLATE = """
        <SendableDataExtensionField>
          <Name>{data_extension_field}</Name>
          <FieldType>EmailAddress</FieldType>
        </SendableDataExtensionField>
        <SendableSubscriberField>
          <Name>{subscriber_field}</Name>
        </SendableSubscriberField>"""

DATA_EXTENSION_OBJECT_TEMPLATE = """<CustomerKey>{customer_key}</CustomerKey>
        <Name>{name}</Name>
        {description}
        {is_sendable}
        {sendable_fields}
        {fields}"""

__all__ = [
    "PARTNER_API_NS",
    "SOAP_ENVELOPE_WRAPPER",
    "OBJECTS_REQUEST_TEMPLATE",
    "RETRIEVE_REQUEST_TEMPLATE",
    "SIMPLE_FILTER_TEMPLATE",
    "DATA_EXTENSION_FIELD_TEMPLATE",
    "SENDABLE_FIELDS_TEMPLATE",
    "DATA_EXTENSION_OBJECT_TEMPLATE",
]
