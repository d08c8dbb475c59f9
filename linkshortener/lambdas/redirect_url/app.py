import logging

from botocore.exceptions import BotoCoreError, ClientError

from linkshortener.dao.redis import UrlMappingRedisDAO
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import ConfigurationError, NotFoundError, ServerError
from linkshortener.services import RedirectService
from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.utils import load_settings, app_prefix
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.dependencies import connect_cache
from linkshortener.lambdas.responses import response_302, response_404, response_500
from linkshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    CONFIGURATION_ERROR,
    DATA_STORE_UNAVAILABLE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs (GET /{shortcode})

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Load application settings (once per process)
    - Step 3: Connect to the mapping store and (optionally) the resolution cache
    - Step 4: Resolve the shortcode via RedirectService (cache first, store on miss)
    - Step 5: Redirect client to original URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: original URL
        404: Unknown or missing shortcode
            error: "URL not found"
        500: Internal server error
            error: "Server error"

    Args:
        event (dict):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'b'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/a'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 404.', extra={'event': MISSING_SHORTCODE})
        return response_404()

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

    service = RedirectService(store, cache, cache_ttl=settings.cache_ttl)

    # 4- Resolve shortcode
    try:
        result = service.resolve(shortcode)
    except NotFoundError:
        logger.info(
            'Short URL record not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404()
    except ServerError:
        logger.exception(
            'Failed to resolve short URL. Responding with 500.',
            extra={'shortcode': shortcode, 'event': DATA_STORE_UNAVAILABLE},
        )
        return response_500()

    # 5- Redirect client to original URL
    logger.info(
        'Redirecting client to original URL. Responding with 302.',
        extra={
            'shortcode': shortcode,
            'event': REDIRECT_SUCCESS,
            'source': str(result.source),
            'cacheStatus': str(result.cache_status),
        },
    )
    return response_302(location=result.original_url)
