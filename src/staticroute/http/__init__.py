"""HTTP types used by the request handler."""
