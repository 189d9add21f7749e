"""
Request executor: token -> request -> HTTP -> normalized text.

``execute_rest`` and ``execute_soap`` never raise. Failures are captured as
``Err`` values and rendered to ``"Error: <message>"`` at the boundary.
"""

import logging
from typing import Awaitable, Callable, Optional

from .errors import MceError
from .models.rest_request import RestRequestSpec
from .models.soap_request import SoapRequestSpec
from .result import Err, NormalizedResult, Result, render_text
from .categories.rest import call_rest
from .categories.soap import call_soap
from .token_cache import TokenCache, TokenInfo
from .transport import HttpClient
from .xml_builders.builders import EnvelopeBuilder

logger = logging.getLogger(__name__)


class RequestExecutor:
    def __init__(
        self,
        token_cache: TokenCache,
        http_client: HttpClient,
        envelope_builder: EnvelopeBuilder,
        default_mid: Optional[str] = None,
    ):
        self.token_cache = token_cache
        self.http_client = http_client
        self.envelope_builder = envelope_builder
        self.default_mid = default_mid

    def scope_for(self, business_unit_id: Optional[str]) -> Optional[str]:
        return business_unit_id or self.default_mid

    async def _run(
        self,
        label: str,
        business_unit_id: Optional[str],
        call: Callable[[TokenInfo], Awaitable[Result]],
    ) -> Result:
        try:
            token = await self.token_cache.get_token(self.scope_for(business_unit_id))
            return await call(token)
        except MceError as e:
            logger.error("%s request failed: %s", label, e)
            return Err(e)
        except Exception as e:
            logger.exception("%s request failed unexpectedly", label)
            return Err(e)

    async def execute_rest(self, spec: RestRequestSpec) -> NormalizedResult:
        result = await self._run(
            "REST",
            spec.business_unit_id,
            lambda token: call_rest(token, self.http_client, spec),
        )
        return render_text(result)

    async def execute_soap(self, spec: SoapRequestSpec) -> NormalizedResult:
        result = await self._run(
            "SOAP",
            spec.business_unit_id,
            lambda token: call_soap(token, self.http_client, self.envelope_builder, spec),
        )
        return render_text(result)
