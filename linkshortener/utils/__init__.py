from linkshortener.utils.config import app_env, app_name, app_prefix, load_config, load_settings, AppSettings
from linkshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from linkshortener.utils.encoder import encode_counter, decode_shortcode
from linkshortener.utils.validators import is_valid_url
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'encode_counter',
    'decode_shortcode',
    'is_valid_url',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'load_settings',
    'AppSettings',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
