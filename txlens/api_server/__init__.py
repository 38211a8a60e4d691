"""
API server package — HTML lookup page and JSON interface.

Accepts a digest (and optional API key), delegates to the lookup controller
and renders the resulting presentation model.
"""
