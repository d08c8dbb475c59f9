import json
import base64
import binascii
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from linkshortener.dao.redis import UrlMappingRedisDAO
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import ConfigurationError, InvalidInputError, ServerError
from linkshortener.services import ShorteningService
from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.utils import load_settings, app_prefix, base_url, is_valid_url
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.dependencies import connect_cache
from linkshortener.lambdas.responses import response_200, response_400, response_500
from linkshortener.lambdas.shorten_url.constants import (
    INVALID_URL,
    CONFIGURATION_ERROR,
    DATA_STORE_UNAVAILABLE,
    ALLOCATION_FAILED,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def _request_body(event: LambdaEvent) -> Any:
    """Decode the JSON request body, or return None if it isn't valid JSON."""
    raw = event.get('body') or '{}'
    try:
        if event.get('isBase64Encoded'):
            raw = base64.b64decode(raw).decode('utf-8')
        return json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError):
        return None


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs (POST /shorten)

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract and validate `originalUrl` from the JSON request body
    - Step 2: Load application settings (once per process)
    - Step 3: Connect to the mapping store and (optionally) the resolution cache
    - Step 4: Shorten the URL via ShorteningService
    - Step 5: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            shortUrl: the short URL (existing one if the URL was shortened before)
        400: Bad client request
            error: "Invalid URL" (malformed URL, missing field or invalid JSON)
        500: Internal server error
            error: "Server error"

    Args:
        event (Dict[str, Any]):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        Dict[str, Any]:
            JSON-serializable response following API Gateway Lambda Proxy
            output format.

    Example:
        >>> event = {'body': '{"originalUrl": "https://example.com/a"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])
        {'shortUrl': 'https://sho.rt/b'}
    """
    # 1- Extract original URL from request body
    request_body = _request_body(event)
    original_url = request_body.get('originalUrl') if isinstance(request_body, dict) else None
    if not is_valid_url(original_url):
        logger.info('Invalid URL in request body. Responding with 400.', extra={'event': INVALID_URL})
        return response_400('Invalid URL')

    # 2- Get application's settings
    try:
        settings = load_settings()
    except (ConfigurationError, BotoCoreError, ClientError, OSError):
        logger.exception('Failed to load application settings. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    # 3- Connect to mapping store and resolution cache
    try:
        store = UrlMappingRedisDAO(**settings.store_kwargs(), prefix=app_prefix())
    except DataStoreError:
        logger.exception('Mapping store unavailable. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500()
    cache = connect_cache(settings, app_prefix())

    service = ShorteningService(
        store,
        cache,
        base_url=settings.base_url or base_url(event),
        cache_ttl=settings.cache_ttl,
        max_attempts=settings.max_allocation_attempts,
    )

    # 4- Shorten URL
    try:
        result = service.shorten(original_url)
    except InvalidInputError:
        logger.info('Invalid URL rejected by shortening service. Responding with 400.', extra={'event': INVALID_URL})
        return response_400('Invalid URL')
    except ServerError:
        logger.exception('Failed to shorten URL. Responding with 500.', extra={'event': ALLOCATION_FAILED})
        return response_500()

    # 5- Return successful response to user
    logger.info(
        'Shortened URL. Responding with 200.',
        extra={
            'event': SHORTEN_SUCCESS,
            'shortcode': result.shortcode,
            'newMapping': result.created,
            'cacheStatus': str(result.cache_status),
        },
    )
    return response_200({'shortUrl': result.short_url})
