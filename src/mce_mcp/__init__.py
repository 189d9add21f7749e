"""
Marketing Cloud Engagement MCP server package.

Exposes the REST and SOAP APIs of Salesforce Marketing Cloud Engagement
as a handful of MCP tools.
"""

__version__ = "1.0.0"
