"""HTTP client module for restclient.

Classes:
    :class:`Client` -- blocking client backed by :class:`httpx.Client`.
    :class:`Result` -- outcome of one call, with typed envelope access.
    :class:`RequestBuilder` -- URL, payload and option handling.

Example::

    from restclient.client import new

    with new("https://api.example.com") as client:
        result = client.get("/users", {"page": 1})
"""

from restclient.client.builder import RequestBuilder
from restclient.client.result import Result
from restclient.client.sync_client import Client, new

__all__ = ["Client", "RequestBuilder", "Result", "new"]
