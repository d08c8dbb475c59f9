# Log event codes for the shorten_url lambda
INVALID_URL = 'INVALID_URL'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
ALLOCATION_FAILED = 'ALLOCATION_FAILED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
