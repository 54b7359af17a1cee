from .router import CORS_HEADERS, HANDLERS, ProxyResponse, dispatch, render

__all__ = ["CORS_HEADERS", "HANDLERS", "ProxyResponse", "dispatch", "render"]
