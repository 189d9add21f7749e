"""
MCE MCP Tools - Category Modules

- rest: generic REST request building and response rendering
- soap: SOAP envelope round trip through Service.asmx
- meta_tools: health check and bundled documentation
"""
