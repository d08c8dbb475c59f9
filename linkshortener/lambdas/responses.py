"""API Gateway (Lambda Proxy) response builders shared by the lambdas."""

import json
from typing import Any


JSON_HEADERS = {'Content-Type': 'application/json'}


def response_200(body: dict[str, Any]) -> dict:
    return {
        'statusCode': 200,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {
            'Location': location,
            'Cache-Control': 'no-store',
        },
        'body': '',
    }


def response_400(error: str = 'Invalid URL') -> dict:
    return {
        'statusCode': 400,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps({'error': error}),
    }


def response_404(error: str = 'URL not found') -> dict:
    return {
        'statusCode': 404,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps({'error': error}),
    }


def response_500() -> dict:
    # Never leak internal detail to the client
    return {
        'statusCode': 500,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps({'error': 'Server error'}),
    }
