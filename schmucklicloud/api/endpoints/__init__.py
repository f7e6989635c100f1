"""
Request builders, one module per backend service.

Each function builds exactly one request (method, path, body or query) and
hands it to ``AsyncHttpClient.request``. Arguments are expected to be
validated by the calling service.
"""
