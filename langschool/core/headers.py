from fastapi import Response

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def no_cache(response: Response):
    """Dependency marking a response as never cacheable"""
    for name, value in NO_CACHE_HEADERS.items():
        response.headers[name] = value
