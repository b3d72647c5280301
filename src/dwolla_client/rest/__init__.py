"""
Transport module for the Dwolla client.

Sends prepared HTTP requests and wraps results in RestResponse.
"""

from .transport import RestClient, HttpxRestClient, RestResponse

__all__ = ["RestClient", "HttpxRestClient", "RestResponse"]
